from __future__ import annotations
from typing import List, Optional
import matplotlib.pyplot as plt

from .interval_map import Range

def _bars(ax, ranges: List[Range], row: int, max_ranges: int, height: float = 0.6):
    if not ranges:
        return
    spans = [(r.start, r.length) for r in ranges[:max_ranges]]
    ax.broken_barh(spans, (row - height / 2, height), alpha=0.6)

def plot_stage_ranges(
    result,
    title: str = "",
    log_scale: bool = False,
    max_ranges: int = 500,
    show: bool = True,
    save_path: Optional[str] = None,
):
    """Plot the candidate range set of every stage, one row per stage.
    Needs a PipelineResult built with memory_lean=False to show the middle stages.
    """
    rows = result.stage_ranges
    labels = ["seeds"] + [s.name for s in result.stages]
    if len(rows) < len(labels):
        # memory-lean result: only the seeds and the final set were kept
        labels = ["seeds", "final"][:len(rows)]

    fig, ax = plt.subplots(figsize=(12, 1 + 0.6 * len(rows)))
    for row, ranges in enumerate(rows):
        _bars(ax, ranges, row, max_ranges)
    ax.axvline(result.minimum, color="red", linewidth=1.0, linestyle="--", label="minimum=%d" % result.minimum)
    ax.set_yticks(range(len(rows)))
    ax.set_yticklabels(labels)
    ax.invert_yaxis()
    if log_scale:
        ax.set_xscale("symlog")
    ax.set_title(title)
    ax.set_xlabel("Value")
    ax.legend(loc="upper right", fontsize=8, framealpha=0.3)
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    if show:
        plt.show()
    plt.close(fig)
    return labels
