from fastapi import APIRouter

from backend.app.api.v1.endpoints import (
    auth,
    customers,
    dashboard,
    ledger,
    reports,
    suppliers,
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(ledger.router, prefix="/ledger", tags=["ledger"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
