from fastapi import APIRouter, Depends

from api.v1.routes import health
from packages.auth.dependencies import get_current_active_user
from packages.users.routes import user

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, prefix="/health", tags=["health"])

# User account routes (require auth)
api_router.include_router(
    user.router,
    prefix="/user",
    tags=["user"],
    dependencies=[Depends(get_current_active_user)],
)
