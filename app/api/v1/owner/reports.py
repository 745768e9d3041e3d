import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_owner
from app.core.config import settings
from app.models.user import User
from app.schemas.report import UtilizationReportResponse
from app.repositories.hall_repository import HallRepository
from app.services.ownership import get_owned_hall
from app.services.report import ReportService, check_date_range, to_response
from app.services.report_writers import report_writers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/owner/reports", tags=["Owner - Reports"])


def _service(db: Session) -> ReportService:
    return ReportService(db, operating_hours_per_day=settings.OPERATING_HOURS_PER_DAY)


@router.get("/{hall_id}/summary", response_model=UtilizationReportResponse)
def get_report_summary(
    hall_id: int,
    start_date: date = Query(..., description="Start date (YYYY-MM-DD), inclusive"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD), inclusive"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    """
    Performance summary for a hall over a date range.

    Only confirmed bookings are counted:
    - `daily_utilization`: booked seat-hours / available seat-hours per day, capped at 100
    - `busiest_hours`: booking starts per hour of day, pooled over the range
    - `ranked_busiest_hours`: the same counts, busiest first
    """
    report = _service(db).aggregate(hall_id, start_date, end_date, current_user)
    return to_response(report)


@router.get("/{hall_id}")
def download_report(
    hall_id: int,
    start_date: date = Query(..., description="Start date (YYYY-MM-DD), inclusive"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD), inclusive"),
    format: str = Query("json", description=f"One of: {', '.join(report_writers.formats())}"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_owner),
):
    """
    Download the report as a file.

    Checks run in order: date range, hall exists and is yours, then format.
    """
    logger.info(
        "Generating %s report for hall: %s, period: %s to %s, user: %s",
        format, hall_id, start_date, end_date, current_user.id,
    )
    check_date_range(start_date, end_date)
    get_owned_hall(HallRepository(db), hall_id, current_user)
    writer = report_writers.get(format)

    report = _service(db).aggregate(hall_id, start_date, end_date, current_user)
    content = writer.render(report)

    logger.info("Report generated successfully for hall: %s, format: %s", hall_id, writer.format)
    return Response(
        content=content,
        media_type=writer.media_type,
        headers={"Content-Disposition": f'attachment; filename="{writer.filename(report)}"'},
    )
