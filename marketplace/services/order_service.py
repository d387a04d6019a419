from sqlalchemy import func, select
from sqlalchemy.orm import Session
from typing import Optional
import logging

from marketplace.middleware.transaction_handler import storage_guard
from marketplace.models.merchant import Merchant
from marketplace.models.order import Order
from marketplace.schemas.listing import ListingPage
from marketplace.schemas.order import OrderResponse
from marketplace.utils.json_fields import decode_json

logger = logging.getLogger(__name__)

DEFAULT_MERCHANT_NAME = "DropX Store"


def project_order(order: Order, merchant_name: Optional[str]) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        order_number=order.order_number,
        status=order.status,
        total_amount=float(order.total_amount or 0),
        merchant_id=order.merchant_id,
        merchant_name=merchant_name or DEFAULT_MERCHANT_NAME,
        items=decode_json(order.items),
        delivery_address=order.delivery_address,
        created_at=order.created_at,
    )


class OrderService:
    """Read-only order history"""

    def __init__(self, db: Session):
        self.db = db

    @storage_guard
    def list_orders(
        self,
        user_id: int,
        limit: int,
        offset: int = 0,
        status: Optional[str] = None,
    ) -> ListingPage:
        predicates = [Order.user_id == user_id]
        if status and status != "all":
            predicates.append(Order.status == status)

        rows = self.db.execute(
            select(Order, Merchant.name.label("merchant_name"))
            .outerjoin(Merchant, Order.merchant_id == Merchant.id)
            .where(*predicates)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
            .offset(offset)
        ).all()
        total = self.db.execute(
            select(func.count(Order.id)).where(*predicates)
        ).scalar_one()

        items = [project_order(row[0], row.merchant_name) for row in rows]
        return ListingPage(items=items, count=len(items), total=total)
