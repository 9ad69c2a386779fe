from dataclasses import dataclass, field
import os
import yaml

from .logger import check_level
from .steps import SeedMode

@dataclass
class PlotParams:
    enabled: bool = False
    log_scale: bool = False     # log x-axis; helps when ranges span orders of magnitude
    max_ranges: int = 500       # per stage, the rest are dropped from the figure

@dataclass
class PipelineConfig:
    seed_mode: SeedMode = SeedMode.SINGLE
    coalesce: bool = True           # join touching ranges after every layer
    workers: int = 1                # >1 evaluates seed ranges on a process pool
    enumerate_limit: int = 1_000_000
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    trace: bool = False             # log every range set between layers
    plot: PlotParams = field(default_factory=PlotParams)

    def __post_init__(self):
        self.seed_mode = SeedMode(self.seed_mode)
        self.log_level = check_level(self.log_level)
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

def load_config_yaml(path: str) -> PipelineConfig:
    """Load config from a YAML file into PipelineConfig dataclasses.
    Raises OSError when the file cannot be read and ValueError when its content is invalid.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(data).__name__}")

    def merge_dataclass(dc_cls, values):
        obj = dc_cls()
        for k, v in (values or {}).items():
            if hasattr(obj, k):
                setattr(obj, k, v)
        return obj

    plot_cfg = merge_dataclass(PlotParams, data.get("plot"))

    defaults = PipelineConfig()
    cfg = PipelineConfig(
        seed_mode=data.get("seed_mode", defaults.seed_mode),
        coalesce=bool(data.get("coalesce", defaults.coalesce)),
        workers=int(data.get("workers", defaults.workers)),
        enumerate_limit=int(data.get("enumerate_limit", defaults.enumerate_limit)),
        log_level=str(data.get("log_level", defaults.log_level)),
        trace=bool(data.get("trace", defaults.trace)),
        plot=plot_cfg,
    )
    return cfg
