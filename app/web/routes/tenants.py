"""Tenant reading web routes."""

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import RedirectResponse

from app.models.enums import TenantField
from app.schemas.bill import BillState
from app.services.tenants import add_tenant, remove_tenant, update_tenant
from app.web.dependencies import add_flash_message, get_bill_state, save_bill_state

router = APIRouter()


@router.post("", response_model=None)
async def add(
    request: Request,
    state: BillState = Depends(get_bill_state),
) -> RedirectResponse:
    """Add a tenant row."""
    try:
        save_bill_state(request, add_tenant(state))
    except HTTPException as e:
        add_flash_message(request, str(e.detail), "error", title="Cannot add tenant")
    return RedirectResponse("/", status_code=303)


@router.post("/{tenant_id}", response_model=None)
async def update(
    request: Request,
    tenant_id: str,
    name: str | None = Form(None),
    previous: str | None = Form(None),
    current: str | None = Form(None),
    state: BillState = Depends(get_bill_state),
) -> RedirectResponse:
    """Save a tenant row. Only submitted fields change."""
    submitted = {
        TenantField.NAME: name,
        TenantField.PREVIOUS: previous,
        TenantField.CURRENT: current,
    }
    try:
        for field, value in submitted.items():
            if value is None:
                continue
            if field != TenantField.NAME and not value.strip():
                value = "0"
            state = update_tenant(state, tenant_id, field, value)
        save_bill_state(request, state)
    except HTTPException as e:
        add_flash_message(request, str(e.detail), "error", title="Cannot update tenant")
    return RedirectResponse("/", status_code=303)


@router.post("/{tenant_id}/delete", response_model=None)
async def delete(
    request: Request,
    tenant_id: str,
    state: BillState = Depends(get_bill_state),
) -> RedirectResponse:
    """Remove a tenant row."""
    try:
        state = remove_tenant(state, tenant_id)
    except HTTPException as e:
        add_flash_message(request, str(e.detail), "error", title="Cannot remove tenant")
        return RedirectResponse("/", status_code=303)

    save_bill_state(request, state)
    return RedirectResponse("/", status_code=303)
