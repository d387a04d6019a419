from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from marketplace.core.database import get_db
from marketplace.schemas.common import ApiResponse
from marketplace.services.filter_builder import (
    ENTITY_MERCHANT,
    ENTITY_PRODUCT,
    build_filter_spec,
)
from marketplace.services.listing_service import ListingService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=ApiResponse)
def browse_catalogue(request: Request, db: Session = Depends(get_db)):
    """
    Storefront catalogue.

    ``action`` selects the listing: products (default), ``merchants`` or
    ``categories``. Parameters are read raw from the query string and
    normalised by the filter builder, so malformed pagination never fails.
    """
    params = request.query_params
    action = params.get("action") or ""
    service = ListingService(db)

    if action == "categories":
        categories = service.list_categories()
        return ApiResponse(
            message="Categories retrieved successfully",
            data={"categories": [c.model_dump() for c in categories]},
        )

    if action == "merchants":
        page = service.list_merchants(build_filter_spec(params, ENTITY_MERCHANT))
        return ApiResponse(
            message="Merchants retrieved successfully",
            data={
                "merchants": [m.model_dump(mode="json") for m in page.items],
                "count": page.count,
                "total": page.total,
            },
        )

    page = service.list_products(build_filter_spec(params, ENTITY_PRODUCT))
    return ApiResponse(
        message="Products retrieved successfully",
        data={
            "products": [p.model_dump(mode="json") for p in page.items],
            "count": page.count,
            "total": page.total,
        },
    )
