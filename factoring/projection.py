"""
projection.py - Origination-Time Target Fee Projection

Before any money moves, estimates what the pool will disburse and which
fees it expects to collect if the invoice is paid on its due date.

Key Formulas:
    protocol_fee        = initial_invoice_value * protocol_fee_bps // 10000
    available_amount    = initial_invoice_value - protocol_fee
    funded_amount_gross = available_amount * upfront_bps // 10000
    days_until_due      = (invoice_due_date - now) // 86400
    net_funded_amount   = funded_amount_gross - total_fees   (floored at 0)

The fee split reuses compute_fee_breakdown() with days_until_due.
"""

from __future__ import annotations
import time
from datetime import datetime
from typing import Optional, Union

from .core import (
    ApprovalTerms, InvoiceSnapshot, FundingProjection,
    DueDateInPastError, InvalidTermsError,
    BPS_DENOMINATOR, MAX_BPS, SECONDS_PER_DAY,
    mul_div, saturating_sub, to_timestamp,
)
from .fees import compute_fee_breakdown
from .logging_config import get_logger

logger = get_logger("projection")


def days_until_due(invoice_due_date: int, now: int) -> int:
    """
    Whole days from now until the invoice falls due.

    Raises:
        DueDateInPastError: if the due date is before now. Callers must
        not originate against an invoice that is already due.
    """
    if invoice_due_date < now:
        raise DueDateInPastError(
            f"Invoice due date {invoice_due_date} is before current time {now}"
        )
    return (invoice_due_date - now) // SECONDS_PER_DAY


def project_target_fees(
    approval: ApprovalTerms,
    invoice: InvoiceSnapshot,
    upfront_bps: int,
    protocol_fee_bps: int,
    now: Optional[Union[int, datetime]] = None,
) -> FundingProjection:
    """
    Project the gross and net funded amounts and fee composition at origination.

    Args:
        approval: Proposed funding terms (initial value, rates, due date)
        invoice: Current invoice snapshot
        upfront_bps: Share of the available value advanced as principal
        protocol_fee_bps: Protocol fee taken off the face value
        now: Origination time (epoch seconds or datetime); wall clock if omitted

    Returns:
        FundingProjection; as_tuple() gives (funded_amount_gross, admin_fee,
        interest, spread, protocol_fee, net_funded_amount).

    Raises:
        InvalidTermsError: if a bps argument is outside 0-65535.
        DueDateInPastError: if the invoice is already due.
    """
    for name, value in (("upfront_bps", upfront_bps), ("protocol_fee_bps", protocol_fee_bps)):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_BPS:
            raise InvalidTermsError(f"{name} must be an int in [0, {MAX_BPS}], got {value!r}")

    current = int(time.time()) if now is None else to_timestamp(now)
    days = days_until_due(approval.invoice_due_date, current)

    protocol_fee = mul_div(approval.initial_invoice_value, protocol_fee_bps, BPS_DENOMINATOR)
    available_amount = saturating_sub(approval.initial_invoice_value, protocol_fee)
    funded_amount_gross = mul_div(available_amount, upfront_bps, BPS_DENOMINATOR)

    breakdown = compute_fee_breakdown(approval, days, invoice)
    net_funded_amount = saturating_sub(funded_amount_gross, breakdown.total_fees)

    logger.debug(
        "origination projection",
        extra={
            "days": days,
            "funded_amount_gross": funded_amount_gross,
            "total_fees": breakdown.total_fees,
            "net_funded_amount": net_funded_amount,
        },
    )

    return FundingProjection(
        funded_amount_gross=funded_amount_gross,
        admin_fee=breakdown.admin_fee,
        interest=breakdown.interest,
        spread_amount=breakdown.spread_amount,
        protocol_fee=protocol_fee,
        net_funded_amount=net_funded_amount,
        days=days,
    )
