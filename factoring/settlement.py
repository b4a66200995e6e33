"""
settlement.py - Settlement-Time Fee Breakdown

When an invoice is paid, fees accrue over the whole days elapsed since
funding. This wrapper derives that day count and delegates to the shared
core in fees.py.

    days = (now - funded_timestamp) // 86400   if now > funded_timestamp
         = 0                                   otherwise
"""

from __future__ import annotations
import time
from datetime import datetime
from typing import Optional, Union

from .core import (
    ApprovalTerms, InvoiceSnapshot, KickbackResult,
    SECONDS_PER_DAY, to_timestamp,
)
from .fees import compute_fee_breakdown
from .logging_config import get_logger

logger = get_logger("settlement")


def elapsed_days(funded_timestamp: int, now: int) -> int:
    """Whole days elapsed since funding; 0 if now is not after funding."""
    if now > funded_timestamp:
        return (now - funded_timestamp) // SECONDS_PER_DAY
    return 0


def compute_kickback(
    approval: ApprovalTerms,
    invoice: InvoiceSnapshot,
    now: Optional[Union[int, datetime]] = None,
) -> KickbackResult:
    """
    Compute the settlement-time kickback and fee split.

    Args:
        approval: Funding terms
        invoice: Snapshot fetched fresh from the invoice adapter
        now: Settlement time (epoch seconds or datetime). The wall clock is
            read once when omitted.

    Returns:
        KickbackResult; as_tuple() gives (kickback, interest, spread, admin_fee).
    """
    current = int(time.time()) if now is None else to_timestamp(now)
    days = elapsed_days(approval.funded_timestamp, current)
    breakdown = compute_fee_breakdown(approval, days, invoice)

    logger.debug(
        "settlement breakdown",
        extra={
            "days": days,
            "invoice_amount": invoice.invoice_amount,
            "total_fees": breakdown.total_fees,
            "kickback": breakdown.kickback_amount,
        },
    )

    return KickbackResult(
        kickback=breakdown.kickback_amount,
        interest=breakdown.interest,
        spread_amount=breakdown.spread_amount,
        admin_fee=breakdown.admin_fee,
        days=days,
    )
