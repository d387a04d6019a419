from marketplace.models.user import User
from marketplace.models.merchant import Merchant
from marketplace.models.product import Product
from marketplace.models.address import Address
from marketplace.models.order import Order

__all__ = [
    "User",
    "Merchant",
    "Product",
    "Address",
    "Order",
]
