"""
fees.py - Fee Decomposition for Invoice Factoring

Splits the money flowing through a funded invoice into interest, spread,
admin fee and the kickback owed back to the original creditor.

ARCHITECTURE (Pure Function Pattern):
=====================================

1. RATE ACCRUAL (prorate_rates):
   - Annual bps -> time-prorated milli-basis-points

2. FEE CAPPING (cap_fees):
   - Ceiling: fees can never exceed what is left after returning principal
   - Floor: fees must be high enough that the kickback cap still holds
   - Rate-implied fee is clamped into [floor, ceiling]

3. FEE ALLOCATION (allocate_fees):
   - Admin fee and interest by truncating proportional share
   - Spread takes the residual, so the three always sum exactly

4. KICKBACK SETTLEMENT (settle_kickback):
   - What is left for the creditor after fees and principal

compute_fee_breakdown() chains all four. The settlement and origination
wrappers only differ in the day count they pass in.

Key Formulas:
    rate            = bps * 1000 * days // 365
    rate_based_fees = initial_invoice_value * total_rate // 10_000_000
    total_fees      = max(min(cap_total_fees, rate_based_fees), minimum_fees)
    spread_amount   = total_fees - admin_fee - interest
"""

from __future__ import annotations
from dataclasses import fields
from typing import Tuple

from .core import (
    ApprovalTerms, InvoiceSnapshot, FeeBreakdown, FeeCaps, ProratedRates,
    BreakdownMismatchError, InvalidTermsError,
    MILLI_BPS_PER_BPS, DAYS_PER_YEAR, RATE_DENOMINATOR,
    saturating_sub, mul_div,
)


# ============================================================================
# RATE ACCRUAL
# ============================================================================

def prorate_rates(
    target_yield_bps: int,
    spread_bps: int,
    admin_fee_bps: int,
    days: int,
) -> ProratedRates:
    """
    Prorate annual basis-point rates over a number of days.

    PURE FUNCTION - All inputs explicit, no hidden state.

    Rates are returned in milli-basis-points: 1000 bps over 30 days gives
    82191, where a plain bps result would be 82.

    Args:
        target_yield_bps: Annual target yield in bps
        spread_bps: Annual spread in bps
        admin_fee_bps: Annual admin fee in bps
        days: Elapsed or projected whole days (0 gives all-zero rates)

    Returns:
        ProratedRates with the three component rates and their sum.
    """
    target_yield_rate = _prorate(target_yield_bps, days)
    spread_rate = _prorate(spread_bps, days)
    admin_fee_rate = _prorate(admin_fee_bps, days)
    return ProratedRates(
        target_yield_rate=target_yield_rate,
        spread_rate=spread_rate,
        admin_fee_rate=admin_fee_rate,
        total_rate=target_yield_rate + spread_rate + admin_fee_rate,
    )


def _prorate(bps: int, days: int) -> int:
    return mul_div(bps * MILLI_BPS_PER_BPS, days, DAYS_PER_YEAR)


# ============================================================================
# FEE CAPPING
# ============================================================================

def available_from_invoice(approval: ApprovalTerms, invoice: InvoiceSnapshot) -> int:
    """What the invoice yields once prior payments and the protocol fee are taken out."""
    return saturating_sub(
        saturating_sub(invoice.invoice_amount, approval.initial_paid_amount),
        approval.protocol_fee,
    )


def cap_fees(
    approval: ApprovalTerms,
    invoice: InvoiceSnapshot,
    total_rate: int,
) -> FeeCaps:
    """
    Clamp the rate-implied fee between the kickback floor and the fee ceiling.

    PURE FUNCTION - All inputs explicit, no hidden state.

    The ceiling (cap_total_fees) is what remains of the invoice after the
    principal is returned. The kickback ceiling (cap_kickback) is the most
    the creditor may ever get back: face value less principal and protocol
    fee. The floor (minimum_fees) is whatever the fee ceiling exceeds the
    kickback ceiling by, so that the creditor is never overpaid.

    Args:
        approval: Funding terms
        invoice: Current invoice snapshot
        total_rate: Combined prorated rate in milli-basis-points

    Returns:
        FeeCaps carrying every intermediate and the final total_fees.
    """
    available = available_from_invoice(approval, invoice)
    cap_total_fees = saturating_sub(available, approval.funded_amount_net)

    if approval.initial_invoice_value > approval.funded_amount_net:
        cap_kickback = saturating_sub(
            approval.initial_invoice_value - approval.funded_amount_net,
            approval.protocol_fee,
        )
    else:
        cap_kickback = 0

    minimum_fees = saturating_sub(cap_total_fees, cap_kickback)
    rate_based_fees = mul_div(approval.initial_invoice_value, total_rate, RATE_DENOMINATOR)
    total_fees = max(min(cap_total_fees, rate_based_fees), minimum_fees)

    return FeeCaps(
        available_from_invoice=available,
        cap_total_fees=cap_total_fees,
        cap_kickback=cap_kickback,
        minimum_fees=minimum_fees,
        rate_based_fees=rate_based_fees,
        total_fees=total_fees,
    )


# ============================================================================
# FEE ALLOCATION
# ============================================================================

def allocate_fees(
    total_fees: int,
    target_yield_rate: int,
    admin_fee_rate: int,
    total_rate: int,
) -> Tuple[int, int, int]:
    """
    Split total_fees across interest, admin fee and spread by rate share.

    PURE FUNCTION - All inputs explicit, no hidden state.

    Returns:
        (interest, admin_fee, spread_amount). Spread absorbs the rounding
        loss of the two truncated shares, so the three sum to total_fees.
        With no accrued rate (or nothing to split) all of total_fees is spread.
    """
    if total_rate == 0 or total_fees == 0:
        return 0, 0, total_fees

    admin_fee = mul_div(total_fees, admin_fee_rate, total_rate)
    interest = mul_div(total_fees, target_yield_rate, total_rate)
    spread_amount = total_fees - admin_fee - interest
    return interest, admin_fee, spread_amount


# ============================================================================
# KICKBACK SETTLEMENT
# ============================================================================

def settle_kickback(
    available_from_invoice: int,
    total_fees: int,
    funded_amount_net: int,
) -> int:
    """Amount due back to the creditor once fees and principal are deducted."""
    total_due_to_creditor = saturating_sub(available_from_invoice, total_fees)
    return saturating_sub(total_due_to_creditor, funded_amount_net)


# ============================================================================
# CORE PRIMITIVE
# ============================================================================

def compute_fee_breakdown(
    approval: ApprovalTerms,
    days: int,
    invoice: InvoiceSnapshot,
) -> FeeBreakdown:
    """
    Compute the full fee breakdown for a funding over a given day count.

    PURE FUNCTION - identical inputs always give identical outputs.

    This is the primitive shared by settlement (days elapsed since funding)
    and origination (days until due). It never raises for valid terms.

    Example:
        params = FeeParams(target_yield_bps=1000, spread_bps=200, admin_fee_bps=100)
        approval = ApprovalTerms(params, 100_000, 90_000, 1_000, 0, t0, t_due)
        breakdown = compute_fee_breakdown(approval, 30, InvoiceSnapshot(100_000))
        # FeeBreakdown(interest=821, spread_amount=165, admin_fee=82, kickback_amount=7932)

    Raises:
        InvalidTermsError: if days is not a non-negative int.
    """
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise InvalidTermsError(f"days must be a non-negative int, got {days!r}")

    rates = prorate_rates(
        approval.target_yield_bps,
        approval.spread_bps,
        approval.admin_fee_bps,
        days,
    )
    caps = cap_fees(approval, invoice, rates.total_rate)
    interest, admin_fee, spread_amount = allocate_fees(
        caps.total_fees,
        rates.target_yield_rate,
        rates.admin_fee_rate,
        rates.total_rate,
    )
    kickback = settle_kickback(
        caps.available_from_invoice,
        caps.total_fees,
        approval.funded_amount_net,
    )
    return FeeBreakdown(
        interest=interest,
        spread_amount=spread_amount,
        admin_fee=admin_fee,
        kickback_amount=kickback,
    )


def verify_fee_breakdown(
    approval: ApprovalTerms,
    days: int,
    invoice: InvoiceSnapshot,
    breakdown: FeeBreakdown,
) -> None:
    """
    Recompute a breakdown and check a reported one against it.

    Raises:
        BreakdownMismatchError: with a {field: (reported, expected)} mapping
        of every differing field.
    """
    expected = compute_fee_breakdown(approval, days, invoice)
    differences = {}
    for f in fields(FeeBreakdown):
        reported_value = getattr(breakdown, f.name)
        expected_value = getattr(expected, f.name)
        if reported_value != expected_value:
            differences[f.name] = (reported_value, expected_value)
    if differences:
        raise BreakdownMismatchError(
            f"Fee breakdown does not reproduce for {days} days: {differences}",
            differences,
        )
