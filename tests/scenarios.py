"""
scenarios.py - Reference funding scenarios for tests

Provides factories and invariant checks shared by the unit, conformance and
functional suites.
"""

from datetime import datetime, timezone

from factoring import (
    FeeParams, ApprovalTerms, InvoiceSnapshot, FeeBreakdown,
    SECONDS_PER_DAY,
    cap_fees, prorate_rates,
)


# 2025-01-01T00:00:00Z
T0 = int(datetime(2025, 1, 1, tzinfo=timezone.utc).timestamp())
DAY = SECONDS_PER_DAY


def make_approval(
    target_yield_bps: int = 1000,
    spread_bps: int = 200,
    admin_fee_bps: int = 100,
    initial_invoice_value: int = 100_000,
    funded_amount_net: int = 90_000,
    protocol_fee: int = 1_000,
    initial_paid_amount: int = 0,
    funded_timestamp: int = T0,
    invoice_due_date: int = T0 + 30 * DAY,
) -> ApprovalTerms:
    """Create approval terms, defaulting to the reference scenario."""
    return ApprovalTerms(
        fee_params=FeeParams(
            target_yield_bps=target_yield_bps,
            spread_bps=spread_bps,
            admin_fee_bps=admin_fee_bps,
        ),
        initial_invoice_value=initial_invoice_value,
        funded_amount_net=funded_amount_net,
        protocol_fee=protocol_fee,
        initial_paid_amount=initial_paid_amount,
        funded_timestamp=funded_timestamp,
        invoice_due_date=invoice_due_date,
    )


def check_breakdown_invariants(
    approval: ApprovalTerms,
    days: int,
    invoice: InvoiceSnapshot,
    breakdown: FeeBreakdown,
) -> None:
    """Assert the invariants every breakdown must satisfy."""
    rates = prorate_rates(approval.target_yield_bps, approval.spread_bps, approval.admin_fee_bps, days)
    caps = cap_fees(approval, invoice, rates.total_rate)

    assert breakdown.interest >= 0
    assert breakdown.spread_amount >= 0
    assert breakdown.admin_fee >= 0
    assert breakdown.kickback_amount >= 0

    assert breakdown.interest + breakdown.spread_amount + breakdown.admin_fee == caps.total_fees
    assert caps.minimum_fees <= caps.total_fees <= caps.cap_total_fees
    assert breakdown.kickback_amount <= caps.cap_kickback
    assert caps.total_fees + breakdown.kickback_amount == caps.cap_total_fees
