"""
Business logic services
"""

from marketplace.services.filter_builder import build_filter_spec
from marketplace.services.query_compiler import compile_listing
from marketplace.services.listing_service import ListingService
from marketplace.services.address_service import AddressService
from marketplace.services.user_service import UserService
from marketplace.services.order_service import OrderService

__all__ = [
    "build_filter_spec",
    "compile_listing",
    "ListingService",
    "AddressService",
    "UserService",
    "OrderService",
]
