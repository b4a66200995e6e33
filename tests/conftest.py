"""
conftest.py - Shared pytest fixtures for factoring tests

Provides common fixtures used across unit, conformance and functional tests:
- Reference funding terms and invoice snapshot
- Fake invoice source
"""

import pytest

from factoring import InvoiceSnapshot

from tests.fake_invoice_source import FakeInvoiceSource
from tests.scenarios import make_approval


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def approval():
    """Reference funding: 100,000 invoice, 90,000 advanced, 1,000 protocol fee."""
    return make_approval()


@pytest.fixture
def invoice():
    """Invoice still worth its face value."""
    return InvoiceSnapshot(invoice_amount=100_000)


@pytest.fixture
def invoice_source():
    """Fake source holding the reference invoice."""
    return FakeInvoiceSource({"INV-001": 100_000})
