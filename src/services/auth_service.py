"""Auth service: registration and password credential business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

import bcrypt
from email_validator import EmailNotValidError, validate_email

from domain.model.errors import AuthError, ConflictError, NotFoundError, ValidationError
from port.user_repository import UserRepository
from services.token_service import TokenService

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
MIN_PASSWORD_LENGTH = 6
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes; newer releases refuse longer input
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def _validate_email(email: str) -> None:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("Valid email required") from e


def _validate_password(password: str, field: str = "Password") -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"{field} must be at least {MIN_PASSWORD_LENGTH} characters")


def register(repo: UserRepository, tokens: TokenService, email: str, password: str) -> str:
    """Register a new password account and return a token for it.

    The duplicate check is a read-then-write; the Mongo adapter backs it with
    a unique index so a lost race still surfaces as ConflictError.

    Raises:
        ValidationError: malformed email or password too short
        ConflictError: email already registered
    """
    _validate_email(email)
    _validate_password(password)

    if repo.get_by_email(email):
        raise ConflictError("User already exists")

    user = repo.create(email=email, password_hash=_hash_password(password))
    logger.info("User registered", extra={"userId": user.id})
    return tokens.issue(user.id, user.email)


def login(repo: UserRepository, tokens: TokenService, email: str, password: str) -> str:
    """Authenticate by email and password and return a fresh token.

    Doesn't reveal whether the email exists.

    Raises:
        AuthError: invalid credentials (deliberately vague)
    """
    user = repo.get_by_email(email)
    if not user or not _verify_password(password, user.password_hash):
        raise AuthError("Invalid credentials")

    logger.info("User logged in", extra={"userId": user.id})
    return tokens.issue(user.id, user.email)


def change_email(repo: UserRepository, subject_id: str, new_email: str) -> str:
    """Change the subject's email and return it.

    Raises:
        ValidationError: malformed email
        ConflictError: another user owns the email
        NotFoundError: subject no longer exists
    """
    _validate_email(new_email)

    existing = repo.get_by_email(new_email)
    if existing and existing.id != subject_id:
        raise ConflictError("Email already in use")

    if not repo.update_email(subject_id, new_email):
        raise NotFoundError("User not found")

    logger.info("User email changed", extra={"userId": subject_id})
    return new_email


def change_password(
    repo: UserRepository,
    subject_id: str,
    current_password: str,
    new_password: str,
) -> None:
    """Replace the subject's password after checking the current one.

    Outstanding tokens stay valid until they expire.

    Raises:
        ValidationError: new password too short, or account has no password
        AuthError: current password does not match
    """
    _validate_password(new_password, field="New password")

    user = repo.get_by_id(subject_id)
    if not user or not user.has_password:
        raise ValidationError("Password cannot be changed for this account")

    if not _verify_password(current_password, user.password_hash):
        raise AuthError("Current password is incorrect")

    repo.update_password_hash(subject_id, _hash_password(new_password))
    logger.info("User password changed", extra={"userId": subject_id})


def delete_account(repo: UserRepository, subject_id: str) -> None:
    """Delete the subject's record. Deleting a missing record is not an error."""
    removed = repo.delete(subject_id)
    logger.info("User account deleted", extra={"userId": subject_id, "removed": removed})
