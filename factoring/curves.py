"""
curves.py - Fee accrual curves

Evaluates the fee breakdown over a range of day counts, e.g. to chart how
fees grow until they plateau at the fee ceiling.

Arrays use object dtype so every element stays an exact Python int; fixed
width numpy integers would overflow on large invoice amounts.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Union

import numpy as np

from .core import ApprovalTerms, InvoiceSnapshot, InvalidTermsError
from .fees import compute_fee_breakdown, prorate_rates


@dataclass(frozen=True)
class FeeCurve:
    """Fee components indexed by day count."""
    days: np.ndarray
    total_rate: np.ndarray
    interest: np.ndarray
    spread_amount: np.ndarray
    admin_fee: np.ndarray
    kickback_amount: np.ndarray

    @property
    def total_fees(self) -> np.ndarray:
        return self.interest + self.spread_amount + self.admin_fee

    def cap_reached_day(self, cap_total_fees: int) -> Optional[int]:
        """First day count whose total fees equal the cap, or None."""
        hits = np.flatnonzero(np.asarray(self.total_fees == cap_total_fees, dtype=bool))
        if hits.size == 0:
            return None
        return int(self.days[hits[0]])


def fee_accrual_curve(
    approval: ApprovalTerms,
    invoice: InvoiceSnapshot,
    days: Union[Iterable[int], np.ndarray],
) -> FeeCurve:
    """
    Compute the fee breakdown at each day count.

    Args:
        approval: Funding terms
        invoice: Invoice snapshot held fixed across the curve
        days: 1-D sequence of non-negative whole day counts

    Returns:
        FeeCurve of equally sized object-dtype arrays.
    """
    days_arr = np.asarray(list(days) if not isinstance(days, np.ndarray) else days)
    if days_arr.ndim != 1:
        raise InvalidTermsError(f"days must be one-dimensional, got shape {days_arr.shape}")
    if days_arr.size and not np.issubdtype(days_arr.dtype, np.integer):
        raise InvalidTermsError(f"days must be integers, got dtype {days_arr.dtype}")

    day_list = [int(d) for d in days_arr]
    breakdowns = [compute_fee_breakdown(approval, d, invoice) for d in day_list]
    rates = [
        prorate_rates(approval.target_yield_bps, approval.spread_bps, approval.admin_fee_bps, d).total_rate
        for d in day_list
    ]

    def _column(values) -> np.ndarray:
        arr = np.empty(len(values), dtype=object)
        arr[:] = values
        return arr

    return FeeCurve(
        days=_column(day_list),
        total_rate=_column(rates),
        interest=_column([b.interest for b in breakdowns]),
        spread_amount=_column([b.spread_amount for b in breakdowns]),
        admin_fee=_column([b.admin_fee for b in breakdowns]),
        kickback_amount=_column([b.kickback_amount for b in breakdowns]),
    )
