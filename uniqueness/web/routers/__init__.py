from fastapi import APIRouter

from uniqueness.web.routers import search


def setup_routers(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(search.router)
    return router


__all__ = ["setup_routers"]
