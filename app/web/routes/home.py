"""Calculator page web routes."""

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from app.core.config import settings
from app.models.enums import ExportFormat
from app.schemas.bill import BillParameters, BillState
from app.services.allocation import calculate_bill
from app.services.tenants import default_state, update_parameters
from app.web.dependencies import (
    add_flash_message,
    get_bill_state,
    get_flash_messages,
    save_bill_state,
)
from app.web.template_config import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def calculator(
    request: Request,
    state: BillState = Depends(get_bill_state),
) -> HTMLResponse:
    """Bill inputs, tenant readings and the split results."""
    return templates.TemplateResponse(
        request,
        "home/index.html",
        {
            "project_name": settings.PROJECT_NAME,
            "currency": settings.CURRENCY_SYMBOL,
            "state": state,
            "calculation": calculate_bill(state),
            "export_formats": list(ExportFormat),
            "messages": get_flash_messages(request),
        },
    )


@router.post("/bill", response_model=None)
async def set_bill_parameters(
    request: Request,
    total_units: str = Form(...),
    total_amount: str = Form(...),
    state: BillState = Depends(get_bill_state),
) -> RedirectResponse:
    """Update the bill totals."""
    try:
        parameters = BillParameters(
            total_units=total_units.strip() or "0",
            total_amount=total_amount.strip() or "0",
        )
    except ValidationError:
        add_flash_message(
            request,
            "Total units and total amount must be non-negative numbers "
            "with at most 8 digits before the decimal point and 4 after it.",
            "error",
            title="Invalid bill details",
        )
        return RedirectResponse("/", status_code=303)

    try:
        save_bill_state(request, update_parameters(state, parameters))
    except HTTPException as e:
        add_flash_message(request, str(e.detail), "error", title="Invalid bill details")
    return RedirectResponse("/", status_code=303)


@router.post("/reset", response_model=None)
async def reset(request: Request) -> RedirectResponse:
    """Start over with the default bill."""
    save_bill_state(request, default_state())
    add_flash_message(request, "The calculator was reset.", "info")
    return RedirectResponse("/", status_code=303)
