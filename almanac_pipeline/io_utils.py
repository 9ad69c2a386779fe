from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, TextIO, Tuple, Union
import json
import re
from pathlib import Path

from .errors import AlmanacParseError
from .interval_map import Range, Triple
from .logger import logger

SEEDS_RE = re.compile(r"^seeds:((?:\s+\d+)+)$")
HEADER_RE = re.compile(r"^(\w+)-to-(\w+) map:$")
RULE_RE = re.compile(r"^(\d+)\s+(\d+)\s+(\d+)$")

@dataclass
class Almanac:
    """Parsed almanac records: raw seed numbers plus named layers of (dest, src, len) triples."""
    seed_numbers: List[int]
    layers: List[Tuple[str, List[Triple]]] = field(default_factory=list)

def parse_almanac(lines: Iterable[str]) -> Almanac:
    """Parse the almanac text format.

    The first non-blank line is ``seeds: n n ...``. Each map block starts with
    a ``<a>-to-<b> map:`` header followed by ``dest src len`` lines and ends at
    a blank line.
    """
    seed_numbers = None
    layers: List[Tuple[str, List[Triple]]] = []
    current = None
    prev_target = None
    for line_no, raw in enumerate(lines, start=1):
        ln = raw.strip()
        if not ln:
            current = None
            continue
        if seed_numbers is None:
            m = SEEDS_RE.match(ln)
            if not m:
                raise AlmanacParseError(f"expected 'seeds: ...', got {ln!r}", line_no)
            seed_numbers = [int(x) for x in m.group(1).split()]
            logger.debug(f"Found seeds: {seed_numbers}")
            continue
        m = HEADER_RE.match(ln)
        if m:
            source, target = m.group(1), m.group(2)
            if prev_target is not None and source != prev_target:
                logger.warning(f"line {line_no}: map '{source}-to-{target}' does not follow '{prev_target}'")
            prev_target = target
            current = []
            layers.append((f"{source}-to-{target}", current))
            continue
        if current is None:
            raise AlmanacParseError(f"rule outside of a map block: {ln!r}", line_no)
        m = RULE_RE.match(ln)
        if not m:
            raise AlmanacParseError(f"expected 'destination source length', got {ln!r}", line_no)
        current.append((int(m.group(1)), int(m.group(2)), int(m.group(3))))
    if seed_numbers is None:
        raise AlmanacParseError("no seeds line found")
    for name, triples in layers:
        logger.debug(f"Found map {name} with {len(triples)} rules")
    return Almanac(seed_numbers, layers)

def read_almanac(stream: TextIO) -> Almanac:
    return parse_almanac(stream)

def load_almanac(path: Union[str, Path]) -> Almanac:
    p = Path(path)
    return parse_almanac(p.read_text(encoding="utf-8").splitlines())

def save_ranges_json(ranges: List[Range], path: Union[str, Path]):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([[int(r.start), int(r.length)] for r in ranges], f, ensure_ascii=False, indent=2)

def save_result_json(result, path: Union[str, Path]):
    """Write a PipelineResult summary (minimum, per-stage counts) as JSON."""
    summary = {
        "minimum": int(result.minimum),
        "seed_ranges": len(result.seeds),
        "final_ranges": len(result.final_ranges),
        "stages": [
            {"name": s.name, "ranges_in": s.ranges_in, "ranges_out": s.ranges_out, "covered": s.covered}
            for s in result.stages
        ],
    }
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Path(path).write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    return summary
