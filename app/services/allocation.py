"""Bill allocation: split purchased units and cost across tenants."""

from decimal import ROUND_HALF_UP, Decimal

from app.schemas.bill import BillCalculation, BillState, TenantResult

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def round2(value: Decimal) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_unit_price(total_amount: Decimal, total_units: Decimal) -> Decimal | None:
    """Price per kWh, or None when no units were purchased."""
    if total_units == 0:
        return None
    return round2(total_amount / total_units)


def calculate_bill(state: BillState) -> BillCalculation:
    """Split the bill in ``state`` across its tenants.

    Usage is metered per tenant. Whatever the meters do not account for
    (losses, shared areas) is split equally:

        unaccounted = total_units - sum(usage)
        final_units = usage + unaccounted / N
        bill        = total_amount * final_units / total_units

    Usage, unaccounted and bonus are rounded to cents as they are computed.
    Final units are the sum of two cent values and need no further rounding.
    Share-derived values (bill, percentage) are rounded from the unrounded
    share. With zero purchased units there is no price, so every bill and
    percentage is zero and ``unit_price`` is None.
    """
    params = state.parameters
    total_units = params.total_units
    total_amount = params.total_amount

    usages = [round2(t.current - t.previous) for t in state.tenants]
    total_used = sum(usages, ZERO)
    unaccounted = round2(total_units - total_used)
    bonus = round2(unaccounted / len(usages))

    results: list[TenantResult] = []
    for tenant, used in zip(state.tenants, usages):
        final_units = used + bonus
        if total_units > 0:
            share = final_units / total_units
            bill = round2(share * total_amount)
            percentage = round2(share * 100)
        else:
            bill = ZERO
            percentage = ZERO
        results.append(
            TenantResult(
                name=tenant.name,
                used=used,
                bonus=bonus,
                final_units=final_units,
                percentage=percentage,
                bill=bill,
            )
        )

    return BillCalculation(
        parameters=params,
        results=results,
        total_used=total_used,
        unaccounted=unaccounted,
        bonus_per_tenant=bonus,
        unit_price=compute_unit_price(total_amount, total_units),
        total_final_units=sum((r.final_units for r in results), ZERO),
        total_percentage=sum((r.percentage for r in results), ZERO),
        total_billed=sum((r.bill for r in results), ZERO),
    )
