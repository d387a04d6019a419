from marketplace.schemas.common import ApiResponse
from marketplace.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    TokenResponse,
)
from marketplace.schemas.listing import (
    FilterSpec,
    ProductResponse,
    MerchantResponse,
    CategoryCount,
    ListingPage,
)
from marketplace.schemas.address import (
    AddressCreate,
    AddressUpdate,
    AddressIdRequest,
    AddressResponse,
)
from marketplace.schemas.user import (
    ProfileResponse,
    ProfileUpdateRequest,
    ChangePasswordRequest,
    UserStatsResponse,
)
from marketplace.schemas.order import OrderResponse

__all__ = [
    "ApiResponse",
    "RegisterRequest",
    "LoginRequest",
    "RefreshRequest",
    "TokenResponse",
    "FilterSpec",
    "ProductResponse",
    "MerchantResponse",
    "CategoryCount",
    "ListingPage",
    "AddressCreate",
    "AddressUpdate",
    "AddressIdRequest",
    "AddressResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "ChangePasswordRequest",
    "UserStatsResponse",
    "OrderResponse",
]
