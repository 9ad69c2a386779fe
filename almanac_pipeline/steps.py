from __future__ import annotations
from enum import Enum
from numbers import Integral
from typing import List, Sequence
import numpy as np

from .errors import EmptySeedSet, EnumerationLimitExceeded, MalformedRange, MalformedSeeds
from .interval_map import IntervalMap, Range, normalize_ranges, total_length

class SeedMode(str, Enum):
    SINGLE = "single"   # every number is its own length-1 range
    PAIRED = "paired"   # numbers read pairwise as (start, length)

# -----------------------------
# Seeds -> initial range set
# -----------------------------
def seeds_to_ranges(numbers: Sequence[int], mode: SeedMode | str = SeedMode.SINGLE) -> List[Range]:
    """Build the initial disjoint range set from raw seed numbers."""
    mode = SeedMode(mode)
    for n in numbers:
        if isinstance(n, bool) or not isinstance(n, Integral) or n < 0:
            raise MalformedSeeds(f"seed numbers must be non-negative integers, got {n!r}")
    numbers = [int(n) for n in numbers]

    if mode is SeedMode.SINGLE:
        ranges = [Range(n, 1) for n in numbers]
    else:
        if len(numbers) % 2:
            raise MalformedSeeds(f"paired seeds need an even count, got {len(numbers)}")
        ranges = []
        for start, length in zip(numbers[0::2], numbers[1::2]):
            try:
                ranges.append(Range(start, length))
            except MalformedRange as e:
                raise MalformedSeeds(f"bad seed pair ({start}, {length}): {e}") from e
    # overlapping seeds would break disjointness downstream
    return normalize_ranges(ranges, merge_adjacent=False)

# -----------------------------
# One fold step
# -----------------------------
def apply_layer(ranges: Sequence[Range], layer: IntervalMap, coalesce: bool = False) -> List[Range]:
    return layer.map_ranges(ranges, coalesce=coalesce)

# -----------------------------
# Brute-force oracle (small inputs only)
# -----------------------------
def _map_values(values: np.ndarray, layer: IntervalMap) -> np.ndarray:
    starts = np.array([r.source_start for r in layer.rules], dtype=np.int64)
    ends = np.array([r.source_end for r in layer.rules], dtype=np.int64)
    offsets = np.array([r.offset for r in layer.rules], dtype=np.int64)
    idx = np.searchsorted(starts, values, side="right") - 1
    safe = idx.clip(0)
    hit = (idx >= 0) & (values < ends[safe])
    return np.where(hit, values + offsets[safe], values)

def enumerate_minimum(ranges: Sequence[Range], layers: Sequence[IntervalMap], limit: int = 1_000_000) -> int:
    """Push every single value through every layer and return the smallest result.

    Cost grows with the total length of the ranges, so this refuses inputs
    larger than `limit` values. Use it to cross-check the interval fold.
    """
    if not ranges:
        raise EmptySeedSet()
    count = total_length(ranges)
    if count > limit:
        raise EnumerationLimitExceeded(count, limit)
    values = np.concatenate([np.arange(r.start, r.end, dtype=np.int64) for r in ranges])
    for layer in layers:
        values = _map_values(values, layer)
    return int(values.min())
