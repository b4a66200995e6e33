"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the fee engine.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. conservation.py - Fee components sum exactly; fees + kickback fill the ceiling
2. bounds.py - Fee ceiling, fee floor, kickback cap, non-negativity
3. determinism.py - Identical inputs give identical outputs
4. monotonicity.py - More days never means less accrued rate or fee

These tests use hypothesis for property-based testing.
"""
