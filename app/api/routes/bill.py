"""Bill routes: stateless calculation, tenant edits and report export."""

from fastapi import APIRouter, status
from fastapi.responses import Response

from app.models.enums import ExportFormat
from app.schemas.bill import (
    BillCalculation,
    BillParameters,
    BillState,
    TenantRemove,
    TenantUpdate,
)
from app.services import tenants as tenant_service
from app.services.allocation import calculate_bill
from app.services.reports import export_report

router = APIRouter(prefix="/bill", tags=["bill"])


@router.get("/default", response_model=BillState)
def get_default_state() -> BillState:
    """Get the starting bill used for new sessions."""
    return tenant_service.default_state()


@router.post("/calculate", response_model=BillCalculation)
def calculate(state: BillState) -> BillCalculation:
    """Split the bill across tenants.

    Unaccounted units (total purchased minus metered usage) are shared
    equally; each tenant then pays their share of the total amount.
    """
    return calculate_bill(state)


@router.post("/tenants", response_model=BillState, status_code=status.HTTP_201_CREATED)
def add_tenant(state: BillState) -> BillState:
    """Append a tenant with a default name and zero readings."""
    return tenant_service.add_tenant(state)


@router.post("/tenants/update", response_model=BillState)
def update_tenant(data: TenantUpdate) -> BillState:
    """Replace one field of a tenant."""
    return tenant_service.update_tenant(data.state, data.tenant_id, data.field, data.value)


@router.post("/tenants/remove", response_model=BillState)
def remove_tenant(data: TenantRemove) -> BillState:
    """Remove a tenant. The last one cannot be removed."""
    return tenant_service.remove_tenant(data.state, data.tenant_id)


@router.put("/parameters", response_model=BillState)
def update_parameters(state: BillState, parameters: BillParameters) -> BillState:
    """Replace the bill totals."""
    return tenant_service.update_parameters(state, parameters)


@router.post("/export/{export_format}")
def export(export_format: ExportFormat, state: BillState) -> Response:
    """Download the bill split as PDF, XLSX or PNG."""
    exported = export_report(state, export_format)
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )
