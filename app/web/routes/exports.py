"""Report download web routes."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse, Response

from app.models.enums import ExportFormat
from app.schemas.bill import BillState
from app.services.reports import export_report
from app.web.dependencies import add_flash_message, get_bill_state

router = APIRouter()


@router.get("/{export_format}", response_model=None)
async def download(
    request: Request,
    export_format: ExportFormat,
    state: BillState = Depends(get_bill_state),
) -> Response:
    """Download the current bill split."""
    try:
        exported = export_report(state, export_format)
    except HTTPException as e:
        add_flash_message(request, str(e.detail), "error", title="Export Failed")
        return RedirectResponse("/", status_code=303)

    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )
