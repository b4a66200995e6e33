"""
Core types and integer helpers for the factoring fee engine.

This module provides the foundational data structures for fee computation:
1. Constants: basis-point scales, day counts, arithmetic width
2. Exceptions: FactoringError and domain-specific error types
3. Immutable inputs: FeeParams, ApprovalTerms, InvoiceSnapshot
4. Immutable results: ProratedRates, FeeCaps, FeeBreakdown, KickbackResult,
   FundingProjection
5. Integer helpers: saturating_sub, mul_div, to_timestamp

All amounts are Python ints denominated in the underlying asset's smallest
unit. Python ints never overflow, so every a * b // c is computed on an
exact product before the final floor division.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Optional, Tuple, Union


# ============================================================================
# CONSTANTS
# ============================================================================

# One basis point is 1 / BPS_DENOMINATOR.
BPS_DENOMINATOR = 10_000

# Prorated rates are carried in milli-basis-points so that short day counts
# do not truncate to zero.
MILLI_BPS_PER_BPS = 1_000

DAYS_PER_YEAR = 365

# Converts a milli-basis-point rate back into an absolute amount:
# BPS_DENOMINATOR * MILLI_BPS_PER_BPS.
RATE_DENOMINATOR = 10_000_000

SECONDS_PER_DAY = 86_400

# Rate parameters are stored as 16-bit unsigned integers.
MAX_BPS = 65_535

# Amounts and timestamps must fit the settlement asset's 256-bit width.
UINT256_MAX = 2 ** 256 - 1


# ============================================================================
# EXCEPTIONS
# ============================================================================

class FactoringError(Exception):
    """Base exception for all factoring fee engine errors."""
    pass


class InvalidTermsError(FactoringError, ValueError):
    """Raised when approval terms, fee parameters or an invoice snapshot are malformed."""
    pass


class DueDateInPastError(FactoringError, ValueError):
    """Raised when an origination projection is requested for an invoice that is already due."""
    pass


class InvoiceNotFoundError(FactoringError, KeyError):
    """Raised when an invoice source has no snapshot for the requested invoice."""
    pass


class BreakdownMismatchError(FactoringError):
    """Raised when a reported fee breakdown does not match an independent recomputation."""

    def __init__(self, message: str, differences: Optional[dict] = None):
        super().__init__(message)
        self.differences = differences or {}


class UnknownPoolError(FactoringError, KeyError):
    """Raised when a pool preset name is not configured."""
    pass


# ============================================================================
# INTEGER HELPERS
# ============================================================================

def saturating_sub(a: int, b: int) -> int:
    """Return a - b, or 0 when b >= a."""
    return a - b if a > b else 0


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    Floor of a * b / denominator, using the exact product.

    Raises:
        ZeroDivisionError: if denominator is zero. Callers guard this.
    """
    return (a * b) // denominator


def to_timestamp(value: Union[int, datetime]) -> int:
    """
    Normalize a point in time to integer seconds since the epoch.

    Naive datetimes are read as UTC. Fractional seconds are truncated.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTermsError(f"timestamp must be an int or datetime, got {type(value).__name__}")
    return value


def _check_uint(owner: str, name: str, value, upper: int = UINT256_MAX) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTermsError(f"{owner}.{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise InvalidTermsError(f"{owner}.{name} cannot be negative: {value}")
    if value > upper:
        raise InvalidTermsError(f"{owner}.{name} exceeds maximum {upper}: {value}")


# ============================================================================
# INPUTS
# ============================================================================

@dataclass(frozen=True, slots=True)
class FeeParams:
    """
    Annualized rate parameters negotiated for a funding, in basis points.

    Each value must fit in 16 bits (0-65535).
    """
    target_yield_bps: int  # Yield owed to pool capital providers
    spread_bps: int        # Platform margin
    admin_fee_bps: int     # Pool administration fee

    def __post_init__(self):
        for f in fields(self):
            _check_uint("FeeParams", f.name, getattr(self, f.name), MAX_BPS)


@dataclass(frozen=True, slots=True)
class ApprovalTerms:
    """
    Immutable funding terms captured when an invoice is approved.

    Set once at approval, never changes afterwards. Every later fee
    computation for this invoice takes these terms as an explicit input.
    """
    fee_params: FeeParams
    initial_invoice_value: int   # Face value at approval time
    funded_amount_net: int       # Principal actually advanced to the creditor
    protocol_fee: int            # Fee taken off the top at origination
    initial_paid_amount: int     # Already paid on the invoice before funding
    funded_timestamp: int        # Seconds since epoch
    invoice_due_date: int        # Seconds since epoch

    def __post_init__(self):
        if not isinstance(self.fee_params, FeeParams):
            raise InvalidTermsError(
                f"ApprovalTerms.fee_params must be FeeParams, got {type(self.fee_params).__name__}"
            )
        for f in fields(self):
            if f.name != "fee_params":
                _check_uint("ApprovalTerms", f.name, getattr(self, f.name))

    @property
    def target_yield_bps(self) -> int:
        return self.fee_params.target_yield_bps

    @property
    def spread_bps(self) -> int:
        return self.fee_params.spread_bps

    @property
    def admin_fee_bps(self) -> int:
        return self.fee_params.admin_fee_bps


@dataclass(frozen=True, slots=True)
class InvoiceSnapshot:
    """Current value of the underlying invoice, including any interest accrued on its own terms."""
    invoice_amount: int

    def __post_init__(self):
        _check_uint("InvoiceSnapshot", "invoice_amount", self.invoice_amount)


# ============================================================================
# RESULTS
# ============================================================================

@dataclass(frozen=True, slots=True)
class ProratedRates:
    """Time-prorated rates in milli-basis-points."""
    target_yield_rate: int
    spread_rate: int
    admin_fee_rate: int
    total_rate: int


@dataclass(frozen=True, slots=True)
class FeeCaps:
    """
    Intermediate results of fee capping.

    minimum_fees <= total_fees <= cap_total_fees. The rate-implied amount
    only decides where inside that band the fee lands.
    """
    available_from_invoice: int
    cap_total_fees: int
    cap_kickback: int
    minimum_fees: int
    rate_based_fees: int
    total_fees: int


@dataclass(frozen=True, slots=True)
class FeeBreakdown:
    """
    Decomposition of the money flowing through one funding.

    Returned fresh by every computation and never stored by the engine.
    """
    interest: int
    spread_amount: int
    admin_fee: int
    kickback_amount: int

    @property
    def total_fees(self) -> int:
        return self.interest + self.spread_amount + self.admin_fee


@dataclass(frozen=True, slots=True)
class KickbackResult:
    """Settlement-time result, including the elapsed day count it was computed for."""
    kickback: int
    interest: int
    spread_amount: int
    admin_fee: int
    days: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """(kickback, interest, spread, admin_fee)"""
        return (self.kickback, self.interest, self.spread_amount, self.admin_fee)


@dataclass(frozen=True, slots=True)
class FundingProjection:
    """Origination-time estimate of amounts to disburse and fee composition."""
    funded_amount_gross: int
    admin_fee: int
    interest: int
    spread_amount: int
    protocol_fee: int
    net_funded_amount: int
    days: int

    @property
    def total_fees(self) -> int:
        return self.admin_fee + self.interest + self.spread_amount

    def as_tuple(self) -> Tuple[int, int, int, int, int, int]:
        """(funded_amount_gross, admin_fee, interest, spread, protocol_fee, net_funded_amount)"""
        return (
            self.funded_amount_gross,
            self.admin_fee,
            self.interest,
            self.spread_amount,
            self.protocol_fee,
            self.net_funded_amount,
        )
