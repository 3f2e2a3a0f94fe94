from collections import Counter
from typing import Any, Dict, Hashable, Iterable, List, Optional

import numpy as np


class FixedRng:
    """Stand-in for ``np.random.Generator`` replaying preset integers.

    Records the ``(low, high, endpoint)`` of every call in `calls`.
    """

    def __init__(self, values: Iterable[int]):
        self.values: List[int] = list(values)
        self.calls: List[tuple] = []

    def integers(self, low, high=None, size=None, endpoint=False):
        self.calls.append((low, high, endpoint))
        if size is None:
            return np.int64(self.values.pop(0))
        out = self.values[:size]
        del self.values[:size]
        return np.array(out, dtype=np.int64)


def _empirical_frequencies(
    draws: List[Any], key: Optional[Any] = None
) -> Dict[Hashable, float]:
    """
    Fraction of draws landing on each outcome.

    Args:
        draws: Results of repeated draws
        key: Optional function mapping a draw to a hashable label

    Returns:
        Mapping of label to observed frequency in [0, 1]
    """
    if not draws:
        return {}
    labels = [key(d) if key is not None else d for d in draws]
    counts = Counter(labels)
    total = len(labels)
    return {label: count / total for label, count in counts.items()}
