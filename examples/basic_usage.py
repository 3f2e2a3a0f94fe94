"""
Basic usage example for the darts library.

This example draws prizes from a weighted pool whose weights are written as
decimal strings, and shows how an incomplete pool falls back to a default.
"""

import numpy as np
from darts import build, from_mapping


def example_record_pool():
    """Example 1: Records carrying a "rate" field."""
    print("=" * 60)
    print("EXAMPLE 1: Record Pool")
    print("=" * 60)

    pool = [
        {"id": 1, "name": "gold", "rate": "0.1"},
        {"id": 2, "name": "silver", "rate": "0.3"},
        {"id": 3, "name": "bronze", "rate": "0.4"},
    ]
    cdf = build(pool, default={"id": 0, "name": "nothing"}, rng=np.random.default_rng(7))

    report = cdf.report()
    print(f"Total weight: {report.total_weight}")
    print(f"Complete: {report.is_complete} (missing {report.missing_weight})")

    for _ in range(5):
        print(f"Drew: {cdf.draw()['name']}")
    return cdf


def example_pair_pool():
    """Example 2: (key, weight) pairs and many draws at once."""
    print("\n" + "=" * 60)
    print("EXAMPLE 2: Pair Pool")
    print("=" * 60)

    cdf = from_mapping(
        {"common": "0.70", "rare": "0.25", "epic": "0.05"},
        precision=6,
        verbose=True,
        rng=np.random.default_rng(11),
    )
    print(f"Complete: {cdf.is_complete()}")

    draws = cdf.draw_many(10000)
    counts = {}
    for item in draws:
        key = item[0] if item is not None else None
        counts[key] = counts.get(key, 0) + 1
    for key, count in sorted(counts.items(), key=lambda kv: -kv[1]):
        print(f"  {key}: {count}")
    return cdf


def example_boundary():
    """Example 3: Resolving fixed integers against the cumulative sums."""
    print("\n" + "=" * 60)
    print("EXAMPLE 3: Boundaries")
    print("=" * 60)

    cdf = build([("A", "0.4"), ("B", "0.3"), ("C", "0.1")], default="-")
    print(f"Cumulative: {[str(s) for s in cdf.cumulative_weights()]}")
    for r in (1, 4000, 7999, 8000):
        print(f"r={r}: {cdf.select(r)}")


if __name__ == "__main__":
    example_record_pool()
    example_pair_pool()
    example_boundary()
