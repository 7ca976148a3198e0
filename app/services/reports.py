"""Report service: snapshot a bill and export it."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from fastapi import HTTPException, status

from app.core.config import settings
from app.models.enums import ExportFormat
from app.schemas.bill import BillReport, BillState
from app.services.allocation import calculate_bill
from app.services.exporters import get_exporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportedFile:
    """A rendered report ready for download."""

    filename: str
    media_type: str
    content: bytes


def build_report(state: BillState, generated_at: datetime | None = None) -> BillReport:
    """Compute the bill and freeze it with a generation timestamp."""
    return BillReport(
        currency_symbol=settings.CURRENCY_SYMBOL,
        generated_at=generated_at or datetime.now(UTC),
        calculation=calculate_bill(state),
    )


def export_report(state: BillState, export_format: ExportFormat) -> ExportedFile:
    """Render the bill in the requested format.

    The report is fully computed before rendering starts. Renderer failures
    surface as a 500 error and leave the state untouched.
    """
    report = build_report(state)
    exporter = get_exporter(export_format)
    try:
        content = exporter.render(report)
    except Exception:
        logger.exception("Failed to render %s report", export_format.value)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate {export_format.value.upper()} report.",
        ) from None

    logger.info(
        "Exported %s report for %d tenants (%d bytes)",
        export_format.value,
        len(report.calculation.results),
        len(content),
    )
    return ExportedFile(
        filename=f"{settings.REPORT_FILENAME}.{exporter.extension}",
        media_type=exporter.media_type,
        content=content,
    )
