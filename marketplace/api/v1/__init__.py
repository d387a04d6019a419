"""
API v1 routes
"""

from fastapi import APIRouter
from marketplace.api.v1 import auth, products, profile

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(products.router)
api_router.include_router(profile.router)

__all__ = ["api_router"]
