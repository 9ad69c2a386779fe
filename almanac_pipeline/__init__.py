from .errors import (
    AlmanacError, MalformedRange, MalformedRule, MalformedSeeds, OverlappingRules, EmptySeedSet, AlmanacParseError,
    EnumerationLimitExceeded,
)
from .interval_map import Range, Rule, IntervalMap, normalize_ranges, ranges_are_disjoint, total_length
from .steps import SeedMode, seeds_to_ranges, apply_layer, enumerate_minimum
from .config import PlotParams, PipelineConfig, load_config_yaml
from .pipeline import AlmanacPipeline, PipelineResult, StageSummary
from .plotting import plot_stage_ranges
from .io_utils import Almanac, parse_almanac, read_almanac, load_almanac, save_ranges_json, save_result_json
from .logger import logger, setup_logger
