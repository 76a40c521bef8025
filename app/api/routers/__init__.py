from fastapi import APIRouter

from app.api.routers import auth, search, users


def setup_routers() -> APIRouter:
    router = APIRouter()
    router.include_router(auth.router)
    router.include_router(users.router)
    router.include_router(search.router)
    return router


__all__ = ["setup_routers"]
