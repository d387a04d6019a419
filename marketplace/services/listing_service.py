from sqlalchemy.orm import Session
from typing import List
import logging

from marketplace.middleware.transaction_handler import storage_guard
from marketplace.models.merchant import Merchant
from marketplace.schemas.listing import (
    CategoryCount,
    FilterSpec,
    ListingPage,
    MerchantResponse,
    ProductResponse,
)
from marketplace.services.filter_builder import ENTITY_MERCHANT, ENTITY_PRODUCT
from marketplace.services.query_compiler import (
    compile_category_counts,
    compile_listing,
)
from marketplace.utils.json_fields import decode_json_dict, decode_tags

logger = logging.getLogger(__name__)


def _as_float(value) -> float:
    return float(value) if value is not None else 0.0


def project_product(row) -> ProductResponse:
    product = row[0]
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=_as_float(product.price),
        image=product.image,
        category=product.category,
        merchant_id=product.merchant_id,
        merchant_name=row.merchant_name,
        merchant_logo=row.merchant_logo,
        merchant_rating=_as_float(row.merchant_rating),
        is_dropx=bool(row.is_dropx),
        rating=_as_float(product.rating),
        prep_time=int(product.prep_time or 0),
        available=bool(product.available),
        featured=bool(product.featured),
        tags=decode_tags(product.tags),
        status=product.status,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def project_merchant(merchant: Merchant) -> MerchantResponse:
    return MerchantResponse(
        id=merchant.id,
        name=merchant.name,
        description=merchant.description,
        logo=merchant.logo,
        category=merchant.category,
        rating=_as_float(merchant.rating),
        delivery_time=merchant.delivery_time,
        min_order=_as_float(merchant.min_order),
        delivery_fee=_as_float(merchant.delivery_fee),
        address=merchant.address,
        city=merchant.city,
        phone=merchant.phone,
        email=merchant.email,
        is_dropx=bool(merchant.is_dropx),
        open_hours=decode_json_dict(merchant.open_hours),
        status=merchant.status,
        created_at=merchant.created_at,
        updated_at=merchant.updated_at,
    )


class ListingService:
    """Product, merchant and category listings for the storefront"""

    def __init__(self, db: Session):
        self.db = db

    @storage_guard
    def list_products(self, spec: FilterSpec) -> ListingPage:
        data_query, count_query = compile_listing(ENTITY_PRODUCT, spec)

        rows = self.db.execute(data_query).all()
        total = self.db.execute(count_query).scalar_one()

        items = [project_product(row) for row in rows]
        logger.debug(f"Listed {len(items)}/{total} products for {spec}")
        return ListingPage(items=items, count=len(items), total=total)

    @storage_guard
    def list_merchants(self, spec: FilterSpec) -> ListingPage:
        data_query, count_query = compile_listing(ENTITY_MERCHANT, spec)

        merchants = self.db.execute(data_query).scalars().all()
        total = self.db.execute(count_query).scalar_one()

        items = [project_merchant(merchant) for merchant in merchants]
        logger.debug(f"Listed {len(items)}/{total} merchants for {spec}")
        return ListingPage(items=items, count=len(items), total=total)

    @storage_guard
    def list_categories(self) -> List[CategoryCount]:
        rows = self.db.execute(compile_category_counts()).all()
        return [
            CategoryCount(category=row.category, product_count=row.product_count)
            for row in rows
        ]
