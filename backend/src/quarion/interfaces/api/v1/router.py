"""Aggregate all v1 routers."""
from fastapi import APIRouter

from .routers.categories import router as categories_router
from .routers.slips import router as slips_router
from .routers.transactions import router as transactions_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(categories_router)
v1_router.include_router(transactions_router)
v1_router.include_router(slips_router)
