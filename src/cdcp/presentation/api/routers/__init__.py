from cdcp.presentation.api.routers.confirmation_codes import (
    router as confirmation_codes_router,
)
from cdcp.presentation.api.routers.reference_data import (
    router as reference_data_router,
)
from cdcp.presentation.api.routers.subscriptions import (
    router as subscriptions_router,
)
from cdcp.presentation.api.routers.users import router as users_router

__all__ = [
    "confirmation_codes_router",
    "reference_data_router",
    "subscriptions_router",
    "users_router",
]
