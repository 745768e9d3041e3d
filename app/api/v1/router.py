from fastapi import APIRouter

# Owner: hall configuration
from app.api.v1.owner.shifts import router as shifts_router
from app.api.v1.owner.seats import router as seat_layout_router
from app.api.v1.owner.seat_status import router as seat_status_router

# Owner: reporting
from app.api.v1.owner.reports import router as reports_router

api_router = APIRouter()

# --- Owner: configuration ---
api_router.include_router(shifts_router)
api_router.include_router(seat_layout_router)
api_router.include_router(seat_status_router)

# --- Owner: reports ---
api_router.include_router(reports_router)
