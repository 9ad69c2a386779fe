from __future__ import annotations
from typing import Any

class AlmanacError(ValueError):
    """Base class for every failure raised while building or evaluating an almanac."""

class MalformedRange(AlmanacError):
    pass

class MalformedRule(AlmanacError):
    """A rule triple is missing a field, is non-numeric, or has a non-positive length."""

    def __init__(self, message: str, triple: Any = None):
        super().__init__(message)
        self.triple = triple

class MalformedSeeds(AlmanacError):
    pass

class OverlappingRules(AlmanacError):
    """Two rules of one layer claim the same source value."""

    def __init__(self, first, second, layer: str = ""):
        where = f" in layer '{layer}'" if layer else ""
        super().__init__(
            f"rules overlap{where}: source [{first.source_start}, {first.source_end}) "
            f"and [{second.source_start}, {second.source_end})"
        )
        self.first = first
        self.second = second
        self.layer = layer

class EmptySeedSet(AlmanacError):
    def __init__(self, message: str = "no seed ranges to evaluate"):
        super().__init__(message)

class AlmanacParseError(AlmanacError):
    def __init__(self, message: str, line_no: int | None = None):
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
        self.line_no = line_no

class EnumerationLimitExceeded(AlmanacError):
    """Per-value enumeration was asked to walk more values than its limit allows."""

    def __init__(self, count: int, limit: int):
        super().__init__(f"refusing to enumerate {count} values (limit {limit})")
        self.count = count
        self.limit = limit
