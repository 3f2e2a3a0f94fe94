"""
Type definitions for the darts library.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Optional


# -----------------------------
# Configuration
# -----------------------------


@dataclass(frozen=True)
class CDFConfig:
    """Options for a CDF sampler.

    Unspecified fields keep their defaults when merged by `build`.
    """

    precision: int = 4
    default: Any = None
    rate_key: str = "rate"
    weight_accessor: Optional[Callable[[Any], Any]] = None
    verbose: bool = False


# -----------------------------
# Public result data structures
# -----------------------------


@dataclass
class DistributionReport:
    """Summary of a pool's weights, computed at reporting time."""

    item_count: int
    total_weight: Decimal
    is_complete: bool
    missing_weight: Decimal  # negative when the pool is over-complete
    zero_weight_count: int
    negative_weight_count: int
    multiplier: int
