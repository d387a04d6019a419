from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict, Any
from datetime import datetime


class FilterSpec(BaseModel):
    """Normalised listing parameters, built once per request."""

    model_config = ConfigDict(frozen=True)

    category: Optional[str] = None
    search: Optional[str] = None
    limit: int
    offset: int = 0


class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    price: float
    image: Optional[str]
    category: Optional[str]
    merchant_id: int
    merchant_name: Optional[str]
    merchant_logo: Optional[str]
    merchant_rating: float
    is_dropx: bool
    rating: float
    prep_time: int
    available: bool
    featured: bool
    tags: List[str]
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class MerchantResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    logo: Optional[str]
    category: Optional[str]
    rating: float
    delivery_time: Optional[str]
    min_order: float
    delivery_fee: float
    address: Optional[str]
    city: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    is_dropx: bool
    open_hours: Dict[str, Any]
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class CategoryCount(BaseModel):
    category: str
    product_count: int


class ListingPage(BaseModel):
    """One page of a listing plus the unpaginated total"""

    items: List[Any]
    count: int
    total: int
