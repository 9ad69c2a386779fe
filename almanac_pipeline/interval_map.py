from __future__ import annotations
from bisect import bisect_right
from numbers import Integral
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .errors import MalformedRange, MalformedRule, OverlappingRules

Triple = Tuple[int, int, int]  # (destination_start, source_start, length)

@dataclass(frozen=True, order=True)
class Range:
    """Half-open integer interval [start, start + length)."""
    start: int
    length: int

    def __post_init__(self):
        if self.start < 0:
            raise MalformedRange(f"range start must be >= 0, got {self.start}")
        if self.length <= 0:
            raise MalformedRange(f"range length must be > 0, got {self.length}")

    @property
    def end(self) -> int:
        return self.start + self.length

    def __contains__(self, value: int) -> bool:
        return self.start <= value < self.end

    def as_pair(self) -> Tuple[int, int]:
        return (self.start, self.length)

def normalize_ranges(ranges: Iterable[Range], merge_adjacent: bool = True) -> List[Range]:
    """Sort and merge overlapping ranges (touching ones too unless merge_adjacent=False)."""
    xs = sorted(ranges)
    if not xs:
        return []
    merged = []
    cs, ce = xs[0].start, xs[0].end
    for r in xs[1:]:
        if r.start < ce or (merge_adjacent and r.start == ce):
            ce = max(ce, r.end)
        else:
            merged.append(Range(cs, ce - cs))
            cs, ce = r.start, r.end
    merged.append(Range(cs, ce - cs))
    return merged

def ranges_are_disjoint(ranges: Iterable[Range]) -> bool:
    xs = sorted(ranges)
    return all(a.end <= b.start for a, b in zip(xs, xs[1:]))

def total_length(ranges: Iterable[Range]) -> int:
    return sum(r.length for r in ranges)

@dataclass(frozen=True)
class Rule:
    """Maps [source_start, source_start + length) onto [destination_start, ...) by a constant offset."""
    source_start: int
    length: int
    destination_start: int

    def __post_init__(self):
        if self.length <= 0:
            raise MalformedRule(f"rule length must be > 0, got {self.length}", self.as_triple())
        if self.source_start < 0 or self.destination_start < 0:
            raise MalformedRule("rule starts must be >= 0", self.as_triple())

    @property
    def source_end(self) -> int:
        return self.source_start + self.length

    @property
    def offset(self) -> int:
        return self.destination_start - self.source_start

    def as_triple(self) -> Triple:
        return (self.destination_start, self.source_start, self.length)

    @staticmethod
    def from_triple(triple: Sequence) -> "Rule":
        """Build a rule from a (destination_start, source_start, length) triple."""
        try:
            fields = list(triple)
        except TypeError:
            raise MalformedRule(f"rule must be a triple, got {triple!r}", triple) from None
        if len(fields) != 3:
            raise MalformedRule(f"rule needs 3 fields, got {len(fields)}", triple)
        for v in fields:
            # bool is an int subclass but never a valid almanac number
            if isinstance(v, bool) or not isinstance(v, Integral):
                raise MalformedRule(f"rule fields must be integers, got {v!r}", triple)
        dest, src, length = (int(v) for v in fields)
        return Rule(source_start=src, length=length, destination_start=dest)

class IntervalMap:
    """One remapping layer: disjoint offset rules plus identity for uncovered values.

    Rules are sorted by source start once, here. Because they are disjoint,
    their source ends are sorted as well, which lets a bisect find the first
    rule that can still intersect a given position.
    """

    def __init__(self, rules: Iterable[Rule], name: str = ""):
        self.name = name
        rules = sorted(rules, key=lambda r: r.source_start)
        if not rules:
            raise MalformedRule(f"layer '{name}' has no rules")
        for prev, cur in zip(rules, rules[1:]):
            if cur.source_start < prev.source_end:
                raise OverlappingRules(prev, cur, name)
        self._rules: Tuple[Rule, ...] = tuple(rules)
        self._starts = [r.source_start for r in rules]
        self._ends = [r.source_end for r in rules]

    @classmethod
    def from_triples(cls, triples: Iterable[Sequence], name: str = "") -> "IntervalMap":
        return cls([Rule.from_triple(t) for t in triples], name=name)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"IntervalMap(name={self.name!r}, rules={len(self._rules)})"

    def map_value(self, value: int) -> int:
        i = bisect_right(self._starts, value) - 1
        if i >= 0 and value < self._ends[i]:
            return value + self._rules[i].offset
        return value

    def map_range(self, r: Range) -> List[Range]:
        """Split r at rule boundaries; covered pieces are shifted, the rest pass through."""
        res = []
        cur, end = r.start, r.end
        i = bisect_right(self._ends, cur)
        while cur < end:
            if i >= len(self._rules) or self._rules[i].source_start >= end:
                # nothing else intersects: remainder is identity
                res.append(Range(cur, end - cur))
                break
            rule = self._rules[i]
            if cur < rule.source_start:
                res.append(Range(cur, rule.source_start - cur))
                cur = rule.source_start
            chunk_end = min(end, rule.source_end)
            res.append(Range(cur + rule.offset, chunk_end - cur))
            cur = chunk_end
            i += 1
        return res

    def map_ranges(self, ranges: Iterable[Range], coalesce: bool = False) -> List[Range]:
        """Map a disjoint range set; the result is disjoint and sorted.

        Destinations of distinct pieces may land on the same values, so
        overlapping outputs are collapsed. Touching outputs are only joined
        when coalesce is set.
        """
        out = []
        for r in ranges:
            out.extend(self.map_range(r))
        return normalize_ranges(out, merge_adjacent=coalesce)
