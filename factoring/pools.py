"""
pools.py - Pool fee presets

Each factoring pool is deployed with a fixed protocol fee, admin fee and
target yield. The spread is negotiated per invoice, so it is supplied when
building FeeParams.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

from .core import FeeParams, UnknownPoolError, MAX_BPS, InvalidTermsError


@dataclass(frozen=True, slots=True)
class PoolFeeConfig:
    """Fee parameters a pool is deployed with, in basis points."""
    name: str
    protocol_fee_bps: int
    admin_fee_bps: int
    target_yield_bps: int
    tax_bps: int = 0

    def __post_init__(self):
        for attr in ("protocol_fee_bps", "admin_fee_bps", "target_yield_bps", "tax_bps"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_BPS:
                raise InvalidTermsError(f"PoolFeeConfig.{attr} must be an int in [0, {MAX_BPS}], got {value!r}")

    def fee_params(self, spread_bps: int = 0) -> FeeParams:
        """FeeParams for an invoice funded by this pool."""
        return FeeParams(
            target_yield_bps=self.target_yield_bps,
            spread_bps=spread_bps,
            admin_fee_bps=self.admin_fee_bps,
        )


POOL_PRESETS: Dict[str, PoolFeeConfig] = {
    "sepolia": PoolFeeConfig("Bulla TCS Factoring Pool Sepolia Test v2", 25, 50, 730),
    "sepolia_fundora": PoolFeeConfig("Bulla Fundora Factoring Pool Sepolia Test", 25, 50, 730),
    "polygon": PoolFeeConfig("Bulla TCS Factoring Pool - Polygon V2", 100, 50, 1100),
    "mainnet": PoolFeeConfig("Bulla TCS Settlement Pool - Mainnet V2", 100, 50, 1100),
    "base": PoolFeeConfig("Bulla TCS Settlement Pool - Base", 100, 50, 1100),
    # Protocol fee must be non-zero on this deployment
    "redbelly": PoolFeeConfig("TARAM Funding Pool - Redbelly", 1, 100, 1500),
}


def get_pool_config(network: str) -> PoolFeeConfig:
    """
    Look up the fee preset for a deployment.

    Raises:
        UnknownPoolError: for an unconfigured network.
    """
    try:
        return POOL_PRESETS[network]
    except KeyError:
        raise UnknownPoolError(f"Unsupported network: {network}") from None
