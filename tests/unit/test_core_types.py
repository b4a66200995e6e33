"""
test_core_types.py - Unit tests for core data structures and helpers

Tests:
- FeeParams: 16-bit bps validation
- ApprovalTerms: field validation, immutability, rate accessors
- InvoiceSnapshot: validation
- Result types: totals and tuple views
- saturating_sub, mul_div, to_timestamp
"""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

from factoring import (
    FeeParams, ApprovalTerms, InvoiceSnapshot, FeeBreakdown,
    KickbackResult, FundingProjection,
    FactoringError, InvalidTermsError,
    saturating_sub, mul_div, to_timestamp,
    MAX_BPS, UINT256_MAX,
)
from tests.scenarios import make_approval, T0


class TestFeeParams:
    """Tests for FeeParams validation."""

    def test_create_valid(self):
        params = FeeParams(target_yield_bps=1000, spread_bps=200, admin_fee_bps=100)
        assert params.target_yield_bps == 1000
        assert params.spread_bps == 200
        assert params.admin_fee_bps == 100

    def test_bps_upper_bound_allowed(self):
        params = FeeParams(MAX_BPS, MAX_BPS, MAX_BPS)
        assert params.spread_bps == 65535

    def test_bps_above_16_bits_raises(self):
        with pytest.raises(InvalidTermsError, match="target_yield_bps exceeds maximum"):
            FeeParams(target_yield_bps=65536, spread_bps=0, admin_fee_bps=0)

    def test_negative_bps_raises(self):
        with pytest.raises(InvalidTermsError, match="spread_bps cannot be negative"):
            FeeParams(target_yield_bps=0, spread_bps=-1, admin_fee_bps=0)

    def test_float_bps_raises(self):
        with pytest.raises(InvalidTermsError, match="admin_fee_bps must be an int"):
            FeeParams(target_yield_bps=0, spread_bps=0, admin_fee_bps=1.5)

    def test_bool_bps_raises(self):
        with pytest.raises(InvalidTermsError):
            FeeParams(target_yield_bps=True, spread_bps=0, admin_fee_bps=0)

    def test_is_frozen(self):
        params = FeeParams(1000, 200, 100)
        with pytest.raises(FrozenInstanceError):
            params.spread_bps = 300


class TestApprovalTerms:
    """Tests for ApprovalTerms validation and accessors."""

    def test_rate_accessors(self):
        approval = make_approval(target_yield_bps=730, spread_bps=50, admin_fee_bps=25)
        assert approval.target_yield_bps == 730
        assert approval.spread_bps == 50
        assert approval.admin_fee_bps == 25

    def test_negative_amount_raises(self):
        with pytest.raises(InvalidTermsError, match="funded_amount_net cannot be negative"):
            make_approval(funded_amount_net=-1)

    def test_amount_above_uint256_raises(self):
        with pytest.raises(InvalidTermsError, match="initial_invoice_value exceeds maximum"):
            make_approval(initial_invoice_value=UINT256_MAX + 1)

    def test_uint256_max_allowed(self):
        approval = make_approval(initial_invoice_value=UINT256_MAX)
        assert approval.initial_invoice_value == UINT256_MAX

    def test_fee_params_type_checked(self):
        with pytest.raises(InvalidTermsError, match="fee_params must be FeeParams"):
            ApprovalTerms(
                fee_params=(1000, 200, 100),
                initial_invoice_value=100_000,
                funded_amount_net=90_000,
                protocol_fee=1_000,
                initial_paid_amount=0,
                funded_timestamp=T0,
                invoice_due_date=T0,
            )

    def test_string_timestamp_raises(self):
        with pytest.raises(InvalidTermsError, match="funded_timestamp must be an int"):
            make_approval(funded_timestamp="2025-01-01")

    def test_is_frozen(self):
        approval = make_approval()
        with pytest.raises(FrozenInstanceError):
            approval.funded_amount_net = 0

    def test_equal_terms_compare_equal(self):
        assert make_approval() == make_approval()

    def test_errors_share_base_class(self):
        with pytest.raises(FactoringError):
            make_approval(protocol_fee=-5)
        with pytest.raises(ValueError):
            make_approval(protocol_fee=-5)


class TestInvoiceSnapshot:
    """Tests for InvoiceSnapshot."""

    def test_create(self):
        assert InvoiceSnapshot(100_000).invoice_amount == 100_000

    def test_zero_allowed(self):
        assert InvoiceSnapshot(0).invoice_amount == 0

    def test_negative_raises(self):
        with pytest.raises(InvalidTermsError):
            InvoiceSnapshot(-1)


class TestResultTypes:
    """Tests for result dataclasses."""

    def test_breakdown_total_fees(self):
        breakdown = FeeBreakdown(interest=821, spread_amount=165, admin_fee=82, kickback_amount=7932)
        assert breakdown.total_fees == 1068

    def test_kickback_result_tuple_order(self):
        result = KickbackResult(kickback=7932, interest=821, spread_amount=165, admin_fee=82, days=30)
        assert result.as_tuple() == (7932, 821, 165, 82)

    def test_funding_projection_tuple_order(self):
        projection = FundingProjection(
            funded_amount_gross=79200,
            admin_fee=82,
            interest=821,
            spread_amount=165,
            protocol_fee=1000,
            net_funded_amount=78132,
            days=30,
        )
        assert projection.as_tuple() == (79200, 82, 821, 165, 1000, 78132)
        assert projection.total_fees == 1068


class TestSaturatingSub:
    """Tests for the guarded subtraction helper."""

    def test_positive_difference(self):
        assert saturating_sub(10, 3) == 7

    def test_equal_operands(self):
        assert saturating_sub(5, 5) == 0

    def test_would_underflow(self):
        assert saturating_sub(3, 10) == 0

    def test_large_values(self):
        assert saturating_sub(UINT256_MAX, 1) == UINT256_MAX - 1


class TestMulDiv:
    """Tests for the widened multiply-then-divide helper."""

    def test_truncates(self):
        assert mul_div(1068, 8219, 106848) == 82

    def test_exact_above_64_bits(self):
        # The product is far beyond any fixed-width integer.
        assert mul_div(UINT256_MAX, 2, 2) == UINT256_MAX

    def test_zero_denominator_raises(self):
        with pytest.raises(ZeroDivisionError):
            mul_div(1, 1, 0)


class TestToTimestamp:
    """Tests for timestamp normalization."""

    def test_int_passthrough(self):
        assert to_timestamp(T0) == T0

    def test_aware_datetime(self):
        assert to_timestamp(datetime(2025, 1, 1, tzinfo=timezone.utc)) == T0

    def test_naive_datetime_is_utc(self):
        assert to_timestamp(datetime(2025, 1, 1)) == T0

    def test_fractional_seconds_truncated(self):
        assert to_timestamp(datetime(2025, 1, 1, 0, 0, 0, 900000)) == T0

    def test_float_raises(self):
        with pytest.raises(InvalidTermsError):
            to_timestamp(1.5)
