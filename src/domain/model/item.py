# domain/model/item.py

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ItemFields:
    """Mutable fields of a catalog item, as accepted on create and replace."""
    name: str
    price: float
    description: str = ''
    sku: str = ''
    quantity: int = 0
    category: str = ''
    is_active: bool = True


@dataclass
class Item:
    """Domain model representing a catalog item."""
    id: str
    name: str
    price: float
    created_at: datetime
    description: str = ''
    sku: str = ''
    quantity: int = 0
    category: str = ''
    is_active: bool = True
    updated_at: datetime | None = None
