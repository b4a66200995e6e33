#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: One Invoice From Origination to Settlement

A walkthrough of the fee engine using a single factored invoice.
Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1: Origination  - Protocol fee, gross advance, projected fees, net advance
  2: Accrual      - How annual bps become milli-bps over a day count
  3: Settlement   - Early payment returns unused fees to the creditor
  4: Caps         - Late payment: fees stop at the ceiling
  5: Floor        - Invoice grew: the creditor is paid exactly the kickback cap
  6: Verification - Any counterparty can reproduce the numbers

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import sys

from factoring import (
    ApprovalTerms, InvoiceSnapshot, FeeBreakdown,
    BreakdownMismatchError,
    get_pool_config, project_target_fees, compute_kickback,
    prorate_rates, cap_fees, verify_fee_breakdown, fee_accrual_curve,
    to_timestamp,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    network: str = "polygon"
    spread_bps: int = 100
    upfront_bps: int = 9000

    face_value: int = 1_000_000
    funded_at: datetime = datetime(2025, 1, 1, tzinfo=timezone.utc)
    term_days: int = 60

    early_payment_day: int = 45
    late_payment_day: int = 400
    grown_invoice_amount: int = 1_050_000


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    """Print a section header within a step."""
    print(f"\n--- {text} ---\n")


def show_settlement(result):
    print(f"Days elapsed: {result.days}")
    print(f"Interest:     {result.interest:>10,}")
    print(f"Spread:       {result.spread_amount:>10,}")
    print(f"Admin fee:    {result.admin_fee:>10,}")
    print(f"Kickback:     {result.kickback:>10,}")


# ============================================================================
# STEPS
# ============================================================================

def step_01_origination():
    """Project what the pool will advance."""
    step_header(1, "Origination",
        "Before money moves, project the gross advance, fees and net advance.")

    pool = get_pool_config(CONFIG.network)
    print(f"Pool: {pool.name}")
    print(f"  protocol fee {pool.protocol_fee_bps} bps, admin fee {pool.admin_fee_bps} bps, "
          f"target yield {pool.target_yield_bps} bps, spread {CONFIG.spread_bps} bps")

    funded_at = to_timestamp(CONFIG.funded_at)
    due = to_timestamp(CONFIG.funded_at + timedelta(days=CONFIG.term_days))
    protocol_fee = CONFIG.face_value * pool.protocol_fee_bps // 10_000
    gross = (CONFIG.face_value - protocol_fee) * CONFIG.upfront_bps // 10_000

    proposed = ApprovalTerms(
        fee_params=pool.fee_params(CONFIG.spread_bps),
        initial_invoice_value=CONFIG.face_value,
        funded_amount_net=gross,
        protocol_fee=protocol_fee,
        initial_paid_amount=0,
        funded_timestamp=funded_at,
        invoice_due_date=due,
    )

    wait_for_enter()

    projection = project_target_fees(
        proposed, InvoiceSnapshot(CONFIG.face_value),
        CONFIG.upfront_bps, pool.protocol_fee_bps, now=funded_at,
    )

    section_header("Projection")
    print(f"Days until due:      {projection.days}")
    print(f"Protocol fee:        {projection.protocol_fee:>10,}")
    print(f"Gross advance:       {projection.funded_amount_gross:>10,}")
    print(f"Projected interest:  {projection.interest:>10,}")
    print(f"Projected spread:    {projection.spread_amount:>10,}")
    print(f"Projected admin fee: {projection.admin_fee:>10,}")
    print(f"Net advance:         {projection.net_funded_amount:>10,}")

    funded = ApprovalTerms(
        fee_params=proposed.fee_params,
        initial_invoice_value=CONFIG.face_value,
        funded_amount_net=projection.net_funded_amount,
        protocol_fee=projection.protocol_fee,
        initial_paid_amount=0,
        funded_timestamp=funded_at,
        invoice_due_date=due,
    )
    return funded


def step_02_accrual(funded: ApprovalTerms):
    """Show rate proration."""
    step_header(2, "Rate Accrual",
        "Annual bps are prorated per day in milli-basis-points.")

    for days in (1, 30, CONFIG.term_days, 365):
        rates = prorate_rates(funded.target_yield_bps, funded.spread_bps, funded.admin_fee_bps, days)
        print(f"{days:>4} days: yield {rates.target_yield_rate:>9,}  spread {rates.spread_rate:>8,}  "
              f"admin {rates.admin_fee_rate:>8,}  total {rates.total_rate:>9,} mbps")

    print("""
    A plain bps result for 1 day would truncate to a handful of units.
    Carrying milli-bps keeps short fundings from accruing nothing.
    """)
    wait_for_enter()


def step_03_early_settlement(funded: ApprovalTerms):
    """Settle before the due date."""
    step_header(3, "Early Settlement",
        "Paying early means fewer fees and a larger kickback to the creditor.")

    now = funded.funded_timestamp + CONFIG.early_payment_day * 86_400
    show_settlement(compute_kickback(funded, InvoiceSnapshot(CONFIG.face_value), now))
    wait_for_enter()


def step_04_late_settlement(funded: ApprovalTerms):
    """Settle long after the due date."""
    step_header(4, "Fee Ceiling",
        "Fees can never exceed what remains after principal is returned.")

    invoice = InvoiceSnapshot(CONFIG.face_value)
    caps = cap_fees(funded, invoice, 0)
    print(f"Fee ceiling: {caps.cap_total_fees:,}")

    now = funded.funded_timestamp + CONFIG.late_payment_day * 86_400
    show_settlement(compute_kickback(funded, invoice, now))

    curve = fee_accrual_curve(funded, invoice, range(0, CONFIG.late_payment_day + 1))
    print(f"\nFees first reach the ceiling on day {curve.cap_reached_day(caps.cap_total_fees)}")
    wait_for_enter()


def step_05_grown_invoice(funded: ApprovalTerms):
    """Invoice worth more than its face value at settlement."""
    step_header(5, "Fee Floor",
        "Value above face value is kept as fees; the creditor gets exactly the kickback cap.")

    invoice = InvoiceSnapshot(CONFIG.grown_invoice_amount)
    caps = cap_fees(funded, invoice, 0)
    print(f"Kickback cap: {caps.cap_kickback:,}   Fee floor: {caps.minimum_fees:,}")

    now = funded.funded_timestamp + CONFIG.early_payment_day * 86_400
    show_settlement(compute_kickback(funded, invoice, now))
    wait_for_enter()


def step_06_verification(funded: ApprovalTerms):
    """Reproduce a reported settlement."""
    step_header(6, "Verification",
        "Outputs are deterministic, so a counterparty can recompute them.")

    invoice = InvoiceSnapshot(CONFIG.face_value)
    result = compute_kickback(funded, invoice, funded.funded_timestamp + CONFIG.early_payment_day * 86_400)
    reported = FeeBreakdown(result.interest, result.spread_amount, result.admin_fee, result.kickback)

    verify_fee_breakdown(funded, result.days, invoice, reported)
    print("Reported settlement reproduces exactly.")

    tampered = FeeBreakdown(result.interest, result.spread_amount - 100, result.admin_fee + 100, result.kickback)
    try:
        verify_fee_breakdown(funded, result.days, invoice, tampered)
    except BreakdownMismatchError as exc:
        print(f"Tampered settlement rejected: {exc.differences}")


def main():
    """Run the complete tutorial."""
    print("=" * 70)
    print("       INVOICE FACTORING FEE ENGINE - TUTORIAL")
    print("=" * 70)

    funded = step_01_origination()
    step_02_accrual(funded)
    step_03_early_settlement(funded)
    step_04_late_settlement(funded)
    step_05_grown_invoice(funded)
    step_06_verification(funded)

    print(f"\n{'='*70}")
    print("Tutorial complete.")


if __name__ == "__main__":
    main()
