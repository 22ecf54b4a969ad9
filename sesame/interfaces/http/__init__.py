from fastapi import APIRouter

from sesame.interfaces.http.routers import door, health, invoices


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(door.router, tags=["door"])
    router.include_router(invoices.router, tags=["invoices"])
    router.include_router(health.router, tags=["health"])
    return router


__all__ = [
    "create_api_router",
]
