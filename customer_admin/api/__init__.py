"""HTTP routes."""

from fastapi import APIRouter

from customer_admin.api import auth, customers, health

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])
router.include_router(health.router, prefix="/health", tags=["health"])
