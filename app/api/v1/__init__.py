"""API v1 router aggregation."""

from fastapi import APIRouter

from app.modules.query_builder.api import router as query_builder_router
from app.modules.reports.api import router as reports_router

api_router = APIRouter()

# Include module routers
api_router.include_router(
    query_builder_router, prefix="/custom-report-types", tags=["custom-report-types"]
)
api_router.include_router(reports_router, prefix="/reports", tags=["reports"])
