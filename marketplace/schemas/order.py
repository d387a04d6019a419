from pydantic import BaseModel
from typing import Optional, Any
from datetime import datetime


class OrderResponse(BaseModel):
    id: int
    order_number: Optional[str]
    status: str
    total_amount: float
    merchant_id: Optional[int]
    merchant_name: str
    items: Any
    delivery_address: Optional[str]
    created_at: Optional[datetime]
