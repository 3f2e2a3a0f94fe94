"""
Darts - weighted random selection with exact decimal weights

A Python library for drawing items from a weighted pool through a cumulative
distribution function, with weights kept as exact decimals.
"""

from .types import CDFConfig, DistributionReport
from .cdf import CDF, build, draw, from_mapping, is_complete, total_weight
from .weights import to_decimal

__version__ = "0.1.0"
__all__ = [
    "CDF",
    "CDFConfig",
    "DistributionReport",
    "build",
    "draw",
    "from_mapping",
    "is_complete",
    "total_weight",
    "to_decimal",
]
