"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from domain.model.identity import Identity
from domain.model.item import Item, ItemFields


# Auth Models
class RegisterRequest(BaseModel):
    """Request model for user registration."""
    email: EmailStr = Field(..., examples=["test1@example.com"])
    password: str = Field(..., min_length=6, description="At least 6 characters")


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class ChangeEmailRequest(BaseModel):
    email: EmailStr = Field(..., examples=["newemail@example.com"])


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, alias="currentPassword")
    new_password: str = Field(..., min_length=6, alias="newPassword")

    model_config = {"populate_by_name": True}


class StatusResponse(BaseModel):
    """Envelope shared by all responses: HTTP status mirrored in the body."""
    status: int
    message: Optional[str] = None


class TokenResponse(StatusResponse):
    """Response model for register/login (returns JWT)."""
    token: str


class EmailResponse(StatusResponse):
    email: str


class IdentityResponse(BaseModel):
    id: str = Field(..., description="User ID (MongoDB _id)")
    email: str

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityResponse":
        return cls(id=identity.subject_id, email=identity.email)


class MeResponse(StatusResponse):
    user: IdentityResponse


class OAuthLoginResponse(TokenResponse):
    user: IdentityResponse


# Item Models
# Items use camelCase on the wire in both directions
_ITEM_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemRequest(BaseModel):
    """Request model for creating or replacing an item."""
    name: str = Field(..., min_length=1, examples=["Widget"])
    price: float = Field(..., examples=[12.5])
    description: str = ""
    sku: str = ""
    quantity: int = 0
    category: str = ""
    is_active: bool = True

    model_config = _ITEM_CONFIG

    def to_fields(self) -> ItemFields:
        return ItemFields(
            name=self.name,
            price=self.price,
            description=self.description,
            sku=self.sku,
            quantity=self.quantity,
            category=self.category,
            is_active=self.is_active,
        )


class ItemResponse(BaseModel):
    """Response model for item."""
    id: str = Field(..., description="Item ID (MongoDB _id)")
    name: str
    price: float
    description: str
    sku: str
    quantity: int
    category: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = _ITEM_CONFIG

    @classmethod
    def from_domain(cls, item: Item) -> "ItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            description=item.description,
            sku=item.sku,
            quantity=item.quantity,
            category=item.category,
            is_active=item.is_active,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class ItemEnvelope(StatusResponse):
    data: ItemResponse


class ItemListEnvelope(StatusResponse):
    data: list[ItemResponse]
