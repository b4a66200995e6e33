"""
factoring - Invoice Factoring Fee Engine

Deterministic decomposition of a funded invoice's cash flows into interest,
spread, admin fee and the kickback owed back to the original creditor.

Usage:
    from factoring import (
        FeeParams, ApprovalTerms, InvoiceSnapshot,
        compute_fee_breakdown, compute_kickback, project_target_fees,
    )

    approval = ApprovalTerms(
        fee_params=FeeParams(target_yield_bps=1000, spread_bps=200, admin_fee_bps=100),
        initial_invoice_value=100_000,
        funded_amount_net=90_000,
        protocol_fee=1_000,
        initial_paid_amount=0,
        funded_timestamp=1_735_689_600,
        invoice_due_date=1_738_281_600,
    )
    invoice = InvoiceSnapshot(invoice_amount=100_000)

    # Core primitive
    breakdown = compute_fee_breakdown(approval, 30, invoice)

    # Settlement: days derived from now - funded_timestamp
    result = compute_kickback(approval, invoice, now=1_738_281_600)
    kickback, interest, spread, admin_fee = result.as_tuple()
"""

# Core types
from .core import (
    FeeParams,
    ApprovalTerms,
    InvoiceSnapshot,
    ProratedRates,
    FeeCaps,
    FeeBreakdown,
    KickbackResult,
    FundingProjection,
    FactoringError,
    InvalidTermsError,
    DueDateInPastError,
    InvoiceNotFoundError,
    BreakdownMismatchError,
    UnknownPoolError,
    saturating_sub,
    mul_div,
    to_timestamp,
    BPS_DENOMINATOR,
    MILLI_BPS_PER_BPS,
    DAYS_PER_YEAR,
    RATE_DENOMINATOR,
    SECONDS_PER_DAY,
    MAX_BPS,
    UINT256_MAX,
)

# Fee decomposition
from .fees import (
    prorate_rates,
    available_from_invoice,
    cap_fees,
    allocate_fees,
    settle_kickback,
    compute_fee_breakdown,
    verify_fee_breakdown,
)

# Call sites
from .settlement import elapsed_days, compute_kickback
from .projection import days_until_due, project_target_fees

# Invoice data adapters
from .invoice_source import (
    InvoiceSource,
    StaticInvoiceSource,
    TimeSeriesInvoiceSource,
    load_invoice,
    compute_kickback_from_source,
    project_target_fees_from_source,
)

# Pool presets
from .pools import PoolFeeConfig, POOL_PRESETS, get_pool_config

# Accrual curves
from .curves import FeeCurve, fee_accrual_curve

__all__ = [
    # Core
    'FeeParams', 'ApprovalTerms', 'InvoiceSnapshot',
    'ProratedRates', 'FeeCaps', 'FeeBreakdown', 'KickbackResult', 'FundingProjection',
    'FactoringError', 'InvalidTermsError', 'DueDateInPastError', 'InvoiceNotFoundError',
    'BreakdownMismatchError', 'UnknownPoolError',
    'saturating_sub', 'mul_div', 'to_timestamp',
    'BPS_DENOMINATOR', 'MILLI_BPS_PER_BPS', 'DAYS_PER_YEAR', 'RATE_DENOMINATOR',
    'SECONDS_PER_DAY', 'MAX_BPS', 'UINT256_MAX',
    # Fees
    'prorate_rates', 'available_from_invoice', 'cap_fees', 'allocate_fees',
    'settle_kickback', 'compute_fee_breakdown', 'verify_fee_breakdown',
    # Call sites
    'elapsed_days', 'compute_kickback', 'days_until_due', 'project_target_fees',
    # Invoice sources
    'InvoiceSource', 'StaticInvoiceSource', 'TimeSeriesInvoiceSource',
    'load_invoice', 'compute_kickback_from_source', 'project_target_fees_from_source',
    # Pools
    'PoolFeeConfig', 'POOL_PRESETS', 'get_pool_config',
    # Curves
    'FeeCurve', 'fee_accrual_curve',
]

__version__ = '1.0.0'
