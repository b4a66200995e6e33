"""
invoice_source.py - Invoice data adapters

Supplies fresh invoice snapshots to the fee engine.

Classes:
- InvoiceSource: Protocol defining the adapter interface
- StaticInvoiceSource: Time-independent invoice amounts
- TimeSeriesInvoiceSource: Invoice amounts that change over time, e.g. as
  interest accrues on the invoice's own terms

Convenience functions load a snapshot at the settlement/origination time and
then call the pure wrappers, so the snapshot is never reused across calls.
"""

from bisect import bisect_right
from datetime import datetime
from typing import Dict, List, Optional, Protocol, Tuple, Union, runtime_checkable

from .core import (
    ApprovalTerms, InvoiceSnapshot, KickbackResult, FundingProjection,
    InvoiceNotFoundError, to_timestamp,
)
from .logging_config import get_logger
from .projection import project_target_fees
from .settlement import compute_kickback

logger = get_logger("invoice_source")

Timestamp = Union[int, datetime]


@runtime_checkable
class InvoiceSource(Protocol):
    """
    Protocol for invoice data adapters.

    An invoice source returns the current total value of an invoice at a
    point in time, or None when it knows nothing about the invoice.
    """

    def get_invoice(self, invoice_id: str, timestamp: Timestamp) -> Optional[InvoiceSnapshot]:
        """Get the invoice snapshot as of a timestamp."""
        ...


class StaticInvoiceSource:
    """
    Invoice source with fixed amounts (time-independent).
    """

    def __init__(self, amounts: Optional[Dict[str, int]] = None):
        """
        Args:
            amounts: Dictionary mapping invoice ids to invoice amounts
        """
        self.amounts: Dict[str, int] = dict(amounts or {})

    def get_invoice(self, invoice_id: str, timestamp: Timestamp) -> Optional[InvoiceSnapshot]:
        """Get static snapshot (timestamp is ignored)."""
        amount = self.amounts.get(invoice_id)
        if amount is None:
            return None
        return InvoiceSnapshot(amount)

    def update_invoice(self, invoice_id: str, amount: int):
        """Update the amount of an invoice."""
        self.amounts[invoice_id] = amount

    def __repr__(self):
        return f"StaticInvoiceSource({len(self.amounts)} invoices)"


class TimeSeriesInvoiceSource:
    """
    Invoice source with time-varying amounts.

    Uses the most recent observation at or before the requested timestamp.
    Timestamps are stored as epoch seconds; datetimes are converted on entry.
    """

    def __init__(self, amount_paths: Optional[Dict[str, List[Tuple[Timestamp, int]]]] = None):
        """
        Args:
            amount_paths: Optional dict mapping invoice ids to lists of
                (timestamp, amount) tuples, in any order.

        Example:
            source = TimeSeriesInvoiceSource({
                'INV-1': [(t0, 100_000), (t30, 100_800)],
            })
        """
        self.history: Dict[str, List[Tuple[int, int]]] = {}

        if amount_paths:
            for invoice_id, path in amount_paths.items():
                if not path:
                    continue
                self.history[invoice_id] = sorted(
                    ((to_timestamp(ts), amount) for ts, amount in path),
                    key=lambda x: x[0],
                )

    def add_observation(self, invoice_id: str, timestamp: Timestamp, amount: int):
        """Record the invoice amount observed at a specific time."""
        if invoice_id not in self.history:
            self.history[invoice_id] = []

        self.history[invoice_id].append((to_timestamp(timestamp), amount))
        self.history[invoice_id].sort(key=lambda x: x[0])

    def get_invoice(self, invoice_id: str, timestamp: Timestamp) -> Optional[InvoiceSnapshot]:
        """
        Get the latest snapshot at or before the timestamp.

        Returns None if there is no observation before the timestamp.
        """
        history = self.history.get(invoice_id)
        if not history:
            return None

        timestamps = [ts for ts, _ in history]
        idx = bisect_right(timestamps, to_timestamp(timestamp))

        if idx == 0:
            return None

        return InvoiceSnapshot(history[idx - 1][1])

    def __repr__(self):
        total_observations = sum(len(h) for h in self.history.values())
        return f"TimeSeriesInvoiceSource({len(self.history)} invoices, {total_observations} observations)"


# ============================================================================
# CONVENIENCE FUNCTIONS - load snapshot + pure wrapper
# ============================================================================

def load_invoice(source: InvoiceSource, invoice_id: str, timestamp: Timestamp) -> InvoiceSnapshot:
    """
    Fetch a snapshot from a source.

    Raises:
        InvoiceNotFoundError: if the source has no data for the invoice.
    """
    snapshot = source.get_invoice(invoice_id, timestamp)
    if snapshot is None:
        raise InvoiceNotFoundError(f"No invoice data for '{invoice_id}' at {timestamp}")
    return snapshot


def compute_kickback_from_source(
    source: InvoiceSource,
    invoice_id: str,
    approval: ApprovalTerms,
    now: Timestamp,
) -> KickbackResult:
    """Settle an invoice against a freshly fetched snapshot."""
    snapshot = load_invoice(source, invoice_id, now)
    logger.debug("loaded invoice snapshot", extra={"invoice_id": invoice_id,
                                                   "invoice_amount": snapshot.invoice_amount})
    return compute_kickback(approval, snapshot, now)


def project_target_fees_from_source(
    source: InvoiceSource,
    invoice_id: str,
    approval: ApprovalTerms,
    upfront_bps: int,
    protocol_fee_bps: int,
    now: Timestamp,
) -> FundingProjection:
    """Project origination amounts against a freshly fetched snapshot."""
    snapshot = load_invoice(source, invoice_id, now)
    logger.debug("loaded invoice snapshot", extra={"invoice_id": invoice_id,
                                                   "invoice_amount": snapshot.invoice_amount})
    return project_target_fees(approval, snapshot, upfront_bps, protocol_fee_bps, now)
