"""
Cumulative Distribution Function (CDF) sampler over a pool of weighted items.

A draw picks one uniform integer ``r`` in ``[1, 10**precision]`` and walks the
pool in order, accumulating each item's weight scaled by ``10**precision`` in
exact decimal arithmetic. The first item whose running sum is strictly greater
than ``r`` wins; if none is, the configured default is returned. Weights need
not sum to 1, so a pool may describe an incomplete distribution on purpose.
"""

from dataclasses import fields, replace
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, localcontext
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

import numpy as np

from darts.types import CDFConfig, DistributionReport
from darts.weights import default_weight_accessor, to_decimal

# 10**18 is the largest power of ten below the int64 bound of Generator.integers
CHUNK_DIGITS = 18
COMPLETE_WEIGHT = Decimal(1)

# Weight sums and scaled products never round under this context
_EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

_CONFIG_FIELDS = frozenset(f.name for f in fields(CDFConfig))


def _merge_config(
    config: Union[CDFConfig, Mapping[str, Any], None], overrides: Mapping[str, Any]
) -> CDFConfig:
    if config is None:
        base = CDFConfig()
    elif isinstance(config, CDFConfig):
        base = config
    else:
        base = CDFConfig(**{k: v for k, v in config.items() if k in _CONFIG_FIELDS})
    known = {k: v for k, v in overrides.items() if k in _CONFIG_FIELDS}
    return replace(base, **known) if known else base


class CDF:
    """
    Weighted random selection from an immutable pool.

    Instances are read-only after construction; build a new one to sample
    from a different pool. Use `build` rather than calling this directly.
    """

    def __init__(
        self,
        pool: Sequence[Any],
        config: CDFConfig,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        precision = config.precision
        if isinstance(precision, bool) or not isinstance(precision, int):
            raise ValueError("precision must be an integer")
        if precision < 0:
            raise ValueError("precision must be non-negative")

        self._pool = tuple(pool)
        self._config = config
        self._rng = rng if rng is not None else np.random.default_rng()
        self._multiplier = 10**precision
        self._weight_accessor: Callable[[Any], Any] = (
            config.weight_accessor or default_weight_accessor(config.rate_key)
        )

    def __repr__(self) -> str:
        return (
            f"CDF(items={len(self._pool)}, precision={self._config.precision}, "
            f"default={self._config.default!r})"
        )

    @property
    def pool(self) -> tuple:
        return self._pool

    @property
    def config(self) -> CDFConfig:
        return self._config

    @property
    def multiplier(self) -> int:
        return self._multiplier

    def weight_of(self, item: Any) -> Decimal:
        """Exact weight of a single pool item, via the configured accessor."""
        return to_decimal(self._weight_accessor(item))

    # -----------------
    # Sampling
    # -----------------

    def select(self, r: int) -> Any:
        """Resolve the integer `r` to an item without consuming randomness.

        An item wins when ``r < accu`` after adding its scaled weight, so an
        ``r`` equal to an item's upper cumulative boundary falls through to
        the next item.
        """
        accu = Decimal(0)
        with localcontext(_EXACT_CONTEXT):
            for item in self._pool:
                accu += self.weight_of(item) * self._multiplier
                if r < accu:
                    return item
        return self._config.default

    def _uniform(self, size: Optional[int] = None) -> Any:
        """Integers uniform on ``[1, multiplier]``; a list when `size` is given.

        Above `CHUNK_DIGITS` digits of precision the integer is composed from
        several generator calls, most significant digits first.
        """
        precision = self._config.precision
        if precision <= CHUNK_DIGITS:
            values = self._rng.integers(1, self._multiplier, size=size, endpoint=True)
            return int(values) if size is None else [int(v) for v in values]

        widths = [CHUNK_DIGITS] * (precision // CHUNK_DIGITS)
        if precision % CHUNK_DIGITS:
            widths.insert(0, precision % CHUNK_DIGITS)
        count = 1 if size is None else size
        totals = [0] * count
        for width in widths:
            chunk = self._rng.integers(0, 10**width, size=count)
            totals = [t * 10**width + int(c) for t, c in zip(totals, chunk)]
        totals = [t + 1 for t in totals]
        return totals[0] if size is None else totals

    def draw(self) -> Any:
        """Draw one item, or the configured default when nothing is hit."""
        return self.select(self._uniform())

    def cumulative_weights(self) -> List[Decimal]:
        """Scaled running sums in pool order, as compared against by `select`."""
        sums = []
        accu = Decimal(0)
        with localcontext(_EXACT_CONTEXT):
            for item in self._pool:
                accu += self.weight_of(item) * self._multiplier
                sums.append(accu)
        return sums

    def draw_many(self, n: int) -> List[Any]:
        """Perform `n` independent draws.

        Random integers are generated in one call and the running sums are
        computed once. Each draw is resolved with the same first-match rule
        as `select`.
        """
        if n < 0:
            raise ValueError("n must be non-negative")
        if n == 0:
            return []

        sums = self.cumulative_weights()
        rs = self._uniform(size=n)
        default = self._config.default
        results = []
        misses = 0
        for r in rs:
            for item, accu in zip(self._pool, sums):
                if r < accu:
                    results.append(item)
                    break
            else:
                results.append(default)
                misses += 1

        if self._config.verbose:
            print(f"Draws: {n}, defaults returned: {misses}")
        return results

    # -----------------
    # Reporting
    # -----------------

    def total_weight(self) -> Decimal:
        """Unscaled sum of every item's weight."""
        total = Decimal(0)
        with localcontext(_EXACT_CONTEXT):
            for item in self._pool:
                total += self.weight_of(item)
        return total

    def is_complete(self) -> bool:
        """Whether the weights sum to exactly 1."""
        return self.total_weight() == COMPLETE_WEIGHT

    def report(self) -> DistributionReport:
        """Summarize the pool's weights without drawing.

        Zero, negative and over-complete weights are counted here rather
        than rejected at build time.
        """
        total = Decimal(0)
        zeros = 0
        negatives = 0
        with localcontext(_EXACT_CONTEXT):
            for item in self._pool:
                weight = self.weight_of(item)
                total += weight
                if weight == 0:
                    zeros += 1
                elif weight < 0:
                    negatives += 1
            missing = COMPLETE_WEIGHT - total

        result = DistributionReport(
            item_count=len(self._pool),
            total_weight=total,
            is_complete=total == COMPLETE_WEIGHT,
            missing_weight=missing,
            zero_weight_count=zeros,
            negative_weight_count=negatives,
            multiplier=self._multiplier,
        )
        if self._config.verbose:
            print(
                f"Pool: {result.item_count} items, total weight {result.total_weight}, "
                f"missing {result.missing_weight}"
            )
        return result


# -----------------
# Functional API
# -----------------


def build(
    pool: Sequence[Any],
    config: Union[CDFConfig, Mapping[str, Any], None] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    **overrides: Any,
) -> CDF:
    """Create a CDF from a pool and configuration.

    Args:
        pool: Ordered items; ``(key, weight)`` pairs or records carrying a
            weight field (``"rate"`` unless `rate_key` says otherwise).
        config: A `CDFConfig` or a mapping of option names. Unknown names
            are ignored.
        rng: Uniform integer source; defaults to ``np.random.default_rng()``.
        **overrides: Options merged over `config`.

    Weights are not inspected here; malformed weights surface on `draw`,
    `total_weight` and friends. The pool is copied into a tuple, a shallow
    O(n) snapshot, so later changes to the caller's sequence are not seen.
    """
    return CDF(pool, _merge_config(config, overrides), rng=rng)


def from_mapping(
    mapping: Mapping[Any, Any],
    config: Union[CDFConfig, Mapping[str, Any], None] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    **overrides: Any,
) -> CDF:
    """Build a CDF over the ``(key, weight)`` items of a mapping."""
    return build(tuple(mapping.items()), config, rng=rng, **overrides)


def draw(cdf: CDF) -> Any:
    return cdf.draw()


def total_weight(cdf: CDF) -> Decimal:
    return cdf.total_weight()


def is_complete(cdf: CDF) -> bool:
    return cdf.is_complete()
