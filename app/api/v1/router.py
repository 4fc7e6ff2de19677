"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from app.api.v1 import auth, bookings, health, services, specialists, users

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Authentication
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"],
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"],
)

# Catalog
api_router.include_router(
    services.router,
    prefix="/service",
    tags=["services"],
)

api_router.include_router(
    specialists.router,
    prefix="/specialists",
    tags=["specialists"],
)

# Bookings
api_router.include_router(
    bookings.router,
    prefix="/booking",
    tags=["bookings"],
)
