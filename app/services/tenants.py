"""Tenant reading operations on a bill state.

Every function takes a ``BillState`` and returns a new one. The input is
never modified, so a rejected operation leaves the caller's state intact.
"""

import logging
from decimal import Decimal, InvalidOperation

from fastapi import HTTPException, status
from pydantic import ValidationError

from app.core.config import settings
from app.models.enums import TenantField
from app.schemas.bill import (
    DECIMAL_PLACES,
    MAX_DIGITS,
    BillParameters,
    BillState,
    TenantReading,
)

logger = logging.getLogger(__name__)


def default_tenant_name(position: int) -> str:
    """Letter-sequence name for the tenant at ``position`` (A, B, C, ...)."""
    return f"Tenant {chr(ord('A') + position)}"


def default_state() -> BillState:
    """Starting bill for a new session."""
    return BillState(
        tenants=[
            TenantReading(
                name=default_tenant_name(0),
                previous=Decimal("97.87"),
                current=Decimal("126.95"),
            ),
            TenantReading(
                name=default_tenant_name(1),
                previous=Decimal("155.3"),
                current=Decimal("175.4"),
            ),
        ],
        parameters=BillParameters(
            total_units=settings.DEFAULT_TOTAL_UNITS,
            total_amount=settings.DEFAULT_TOTAL_AMOUNT,
        ),
    )


def get_tenant(state: BillState, tenant_id: str) -> TenantReading:
    """Get a tenant by ID."""
    for tenant in state.tenants:
        if tenant.id == tenant_id:
            return tenant
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Tenant not found",
    )


def add_tenant(state: BillState) -> BillState:
    """Append a tenant with a default name and zero readings."""
    taken = {t.id for t in state.tenants}
    tenant = TenantReading(name=default_tenant_name(len(state.tenants)))
    while tenant.id in taken:
        tenant = TenantReading(name=tenant.name)
    logger.info("Adding tenant %s (%s)", tenant.name, tenant.id)
    return state.model_copy(update={"tenants": [*state.tenants, tenant]}, deep=True)


def remove_tenant(state: BillState, tenant_id: str) -> BillState:
    """Remove a tenant. The last remaining tenant cannot be removed."""
    tenant = get_tenant(state, tenant_id)
    if len(state.tenants) <= 1:
        logger.warning("Refused to remove last tenant %s", tenant.id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one tenant is required.",
        )

    logger.info("Removing tenant %s (%s)", tenant.name, tenant.id)
    remaining = [t for t in state.tenants if t.id != tenant_id]
    return state.model_copy(update={"tenants": remaining}, deep=True)


def _parse_reading(field: TenantField, value: str | Decimal) -> Decimal:
    """Parse a meter value, rejecting non-numbers and negative previous readings."""
    try:
        reading = Decimal(str(value).strip())
    except InvalidOperation:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field.value.capitalize()} reading must be a number",
        ) from None
    if not reading.is_finite():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field.value.capitalize()} reading must be a number",
        )
    if field == TenantField.PREVIOUS and reading < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Previous reading cannot be negative",
        )
    return reading


def update_tenant(
    state: BillState,
    tenant_id: str,
    field: TenantField | str,
    value: str | Decimal,
) -> BillState:
    """Replace one field of a tenant.

    Readings are not checked against each other: a current reading below the
    previous one is kept as entered.
    """
    tenant = get_tenant(state, tenant_id)
    try:
        field = TenantField(field)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown tenant field '{field}'",
        ) from None

    new_value: str | Decimal
    if field == TenantField.NAME:
        new_value = str(value)
    else:
        new_value = _parse_reading(field, value)

    try:
        updated = TenantReading.model_validate({**tenant.model_dump(), field.value: new_value})
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"{field.value.capitalize()} reading must have at most "
                f"{MAX_DIGITS - DECIMAL_PLACES} digits before the decimal point "
                f"and {DECIMAL_PLACES} after it"
            ),
        ) from None

    tenants = [updated if t.id == tenant_id else t for t in state.tenants]
    return state.model_copy(update={"tenants": tenants}, deep=True)


def update_parameters(state: BillState, parameters: BillParameters) -> BillState:
    """Replace the bill totals."""
    return state.model_copy(update={"parameters": parameters}, deep=True)
