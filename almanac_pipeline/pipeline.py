from __future__ import annotations
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from itertools import chain
from typing import Callable, Iterable, List, Optional, Sequence

from .config import PipelineConfig
from .errors import EmptySeedSet
from .interval_map import IntervalMap, Range, normalize_ranges, total_length
from .logger import logger
from .steps import SeedMode, apply_layer, seeds_to_ranges

# (stage_index, layer, ranges_in, ranges_out)
TraceHook = Callable[[int, IntervalMap, List[Range], List[Range]], None]

@dataclass
class StageSummary:
    index: int
    name: str
    ranges_in: int
    ranges_out: int
    covered: int            # number of values in the output set

@dataclass
class PipelineResult:
    seeds: List[Range]
    final_ranges: List[Range]
    minimum: int
    stages: List[StageSummary] = field(default_factory=list)
    # seeds first, then the output of every layer; only seeds and final when memory_lean
    stage_ranges: List[List[Range]] = field(default_factory=list)

def _fold_seed(layers: Sequence[IntervalMap], coalesce: bool, seed: Range) -> List[List[Range]]:
    """Worker entry point: the range set before the first layer and after each one, for one seed."""
    stages = [[seed]]
    for layer in layers:
        stages.append(apply_layer(stages[-1], layer, coalesce=coalesce))
    return stages

class AlmanacPipeline:
    """Fold a disjoint seed range set through an ordered sequence of layers."""

    def __init__(
        self,
        layers: Iterable[IntervalMap],
        seeds: Iterable[Range],
        config: Optional[PipelineConfig] = None,
        trace: Optional[TraceHook] = None,
        memory_lean: bool = True,
    ):
        self.layers = tuple(layers)
        self.seeds = tuple(normalize_ranges(seeds, merge_adjacent=False))
        self.cfg = config or PipelineConfig()
        self.trace = trace
        self.memory_lean = memory_lean

    @classmethod
    def from_almanac(cls, almanac, mode: SeedMode | str | None = None,
                     config: Optional[PipelineConfig] = None, **kwargs) -> "AlmanacPipeline":
        """Build layers and seeds from a parsed Almanac record."""
        cfg = config or PipelineConfig()
        mode = SeedMode(mode) if mode is not None else cfg.seed_mode
        layers = [IntervalMap.from_triples(triples, name=name) for name, triples in almanac.layers]
        seeds = seeds_to_ranges(almanac.seed_numbers, mode)
        return cls(layers, seeds, config=cfg, **kwargs)

    def _fold(self, ranges: Sequence[Range], on_stage=None) -> List[Range]:
        ranges = list(ranges)
        for i, layer in enumerate(self.layers):
            out = apply_layer(ranges, layer, coalesce=self.cfg.coalesce)
            if on_stage is not None:
                on_stage(i, layer, ranges, out)
            ranges = out
        return ranges

    def _fold_parallel(self, on_stage) -> List[Range]:
        # Seed ranges never interact, so each one runs the whole pipeline in its own
        # worker process; the per-stage sets are unioned afterwards in layer order.
        n_workers = min(self.cfg.workers, len(self.seeds))
        chunksize = max(1, len(self.seeds) // (n_workers * 4))
        work = partial(_fold_seed, self.layers, self.cfg.coalesce)
        with ProcessPoolExecutor(max_workers=n_workers) as pool:
            per_seed = list(pool.map(work, self.seeds, chunksize=chunksize))
        merged = [
            normalize_ranges(chain.from_iterable(p[k] for p in per_seed), merge_adjacent=self.cfg.coalesce)
            for k in range(len(self.layers) + 1)
        ]
        for i, layer in enumerate(self.layers):
            on_stage(i, layer, merged[i], merged[i + 1])
        return merged[-1]

    def run(self) -> PipelineResult:
        if not self.seeds:
            raise EmptySeedSet()

        stages: List[StageSummary] = []
        stage_ranges: List[List[Range]] = [list(self.seeds)]

        def on_stage(i, layer, before, after):
            summary = StageSummary(i, layer.name or f"layer-{i}", len(before), len(after), total_length(after))
            stages.append(summary)
            logger.debug(f"Stage {i} ({summary.name}): {summary.ranges_in} -> {summary.ranges_out} ranges")
            if self.cfg.trace:
                logger.debug(f"Stage {i} ranges: {[r.as_pair() for r in after]}")
            if not self.memory_lean:
                stage_ranges.append(after)
            if self.trace is not None:
                self.trace(i, layer, before, after)

        logger.debug(f"Seeds: {[r.as_pair() for r in self.seeds]}")
        if self.cfg.workers > 1 and len(self.seeds) > 1:
            final = self._fold_parallel(on_stage)
        else:
            final = self._fold(self.seeds, on_stage)

        if self.memory_lean and self.layers:
            stage_ranges.append(final)

        # every range is non-empty, so its start is its smallest value
        minimum = min(r.start for r in final)
        logger.debug(f"Lowest result: {minimum}")
        return PipelineResult(
            seeds=list(self.seeds),
            final_ranges=final,
            minimum=minimum,
            stages=stages,
            stage_ranges=stage_ranges,
        )

    def evaluate(self) -> int:
        return self.run().minimum
