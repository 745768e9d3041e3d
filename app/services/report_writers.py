"""
Report writers, selected by format name.

A writer turns an assembled UtilizationReport into the bytes of a
downloadable file. PDF and spreadsheet renderers live outside this service
and plug in through ``ReportWriterRegistry.register``.
"""

import csv
import io
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from app.core.exceptions import UnsupportedReportFormatError
from app.schemas.report import UtilizationReport
from app.services.busiest_hours import rank_busiest_hours
from app.services.report import to_response


class ReportWriter(ABC):
    format: str
    media_type: str
    extension: str

    @abstractmethod
    def render(self, report: UtilizationReport) -> bytes:
        ...

    def filename(self, report: UtilizationReport) -> str:
        return (
            f"hall-{report.hall_id}-report-{report.start_date.isoformat()}"
            f"-to-{report.end_date.isoformat()}.{self.extension}"
        )


class JsonReportWriter(ReportWriter):
    format = "json"
    media_type = "application/json"
    extension = "json"

    def render(self, report: UtilizationReport) -> bytes:
        return to_response(report).model_dump_json(indent=2).encode("utf-8")


class CsvReportWriter(ReportWriter):
    """Three blocks separated by blank rows: summary, daily utilization, busiest hours."""

    format = "csv"
    media_type = "text/csv"
    extension = "csv"

    def render(self, report: UtilizationReport) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer)

        writer.writerow(["Hall", report.hall_name])
        writer.writerow(["Period", report.start_date.isoformat(), report.end_date.isoformat()])
        writer.writerow(["Total revenue", f"{report.total_revenue:.2f}"])
        writer.writerow(["Total bookings", report.total_bookings])
        writer.writerow(["Total seats", report.total_seats])
        writer.writerow(["Average utilization (%)", f"{report.average_utilization:.2f}"])
        writer.writerow([])

        writer.writerow(["Date", "Utilization (%)"])
        for day in sorted(report.daily_utilization):
            writer.writerow([day.isoformat(), f"{report.daily_utilization[day]:.2f}"])
        writer.writerow([])

        writer.writerow(["Hour", "Bookings"])
        for entry in rank_busiest_hours(report.busiest_hours):
            writer.writerow([f"{entry.hour:02d}:00", entry.count])

        return buffer.getvalue().encode("utf-8")


class ReportWriterRegistry:
    def __init__(self, writers: Optional[Iterable[ReportWriter]] = None):
        self._writers: Dict[str, ReportWriter] = {}
        for writer in writers or ():
            self.register(writer)

    def register(self, writer: ReportWriter) -> None:
        self._writers[writer.format.lower()] = writer

    def formats(self) -> list:
        return sorted(self._writers)

    def get(self, format_name: str) -> ReportWriter:
        writer = self._writers.get(format_name.lower())
        if writer is None:
            raise UnsupportedReportFormatError(format_name, self.formats())
        return writer


report_writers = ReportWriterRegistry([JsonReportWriter(), CsvReportWriter()])
