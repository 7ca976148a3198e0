"""Bill schemas: tenant readings, bill parameters and computed results."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from app.models.enums import TenantField


# Meter values and bill totals stay small enough to round to cents exactly
MAX_DIGITS = 12
DECIMAL_PLACES = 4


def new_tenant_id() -> str:
    """Generate a short identity for a new tenant row."""
    return uuid4().hex[:8]


def bounded(**kwargs):
    """Field limited to MAX_DIGITS digits, DECIMAL_PLACES of them after the point."""
    return Field(max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES, **kwargs)


class TenantReading(BaseModel):
    """One tenant's meter readings for the billing period."""

    id: str = Field(default_factory=new_tenant_id)
    name: str
    previous: Decimal = bounded(default=Decimal("0"), ge=0)
    # May be lower than previous; that yields negative usage
    current: Decimal = bounded(default=Decimal("0"))


class BillParameters(BaseModel):
    """Totals printed on the shared bill."""

    total_units: Decimal = bounded(ge=0)
    total_amount: Decimal = bounded(ge=0)


class BillState(BaseModel):
    """Everything needed to compute a bill split.

    The tenant list is ordered and never empty.
    """

    tenants: list[TenantReading] = Field(min_length=1)
    parameters: BillParameters

    @field_validator("tenants")
    @classmethod
    def validate_unique_ids(cls, v: list[TenantReading]) -> list[TenantReading]:
        """Validate that tenant ids are unique."""
        ids = [t.id for t in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Tenant ids must be unique")
        return v


class TenantUpdate(BaseModel):
    """Schema for replacing one field of a tenant."""

    state: BillState
    tenant_id: str
    field: TenantField
    value: str


class TenantRemove(BaseModel):
    """Schema for removing a tenant."""

    state: BillState
    tenant_id: str


class TenantResult(BaseModel):
    """Computed bill line for one tenant."""

    name: str
    used: Decimal
    bonus: Decimal
    final_units: Decimal
    percentage: Decimal
    bill: Decimal


class BillCalculation(BaseModel):
    """Result of splitting the bill across all tenants."""

    parameters: BillParameters
    results: list[TenantResult]
    total_used: Decimal
    unaccounted: Decimal
    bonus_per_tenant: Decimal
    unit_price: Decimal | None
    total_final_units: Decimal
    total_percentage: Decimal
    total_billed: Decimal


class BillReport(BaseModel):
    """Frozen calculation handed to exporters."""

    model_config = {"frozen": True}

    title: str = "Electricity Bill Split Report"
    currency_symbol: str
    generated_at: datetime
    calculation: BillCalculation
