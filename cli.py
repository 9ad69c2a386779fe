#!/usr/bin/env python3
import argparse, json, sys
from pathlib import Path

from almanac_pipeline import (
    AlmanacError, AlmanacPipeline, PipelineConfig, SeedMode, enumerate_minimum, load_almanac,
    load_config_yaml, logger, plot_stage_ranges, read_almanac, save_ranges_json, save_result_json, setup_logger
)

PART_MODES = {"part1": SeedMode.SINGLE, "part2": SeedMode.PAIRED}

def build_argparser():
    ap = argparse.ArgumentParser(description="Almanac range pipeline: lowest location reachable from the seeds")
    ap.add_argument("part", choices=sorted(PART_MODES), help="part1: single seeds, part2: (start, length) seed pairs")
    ap.add_argument("-i", "--input-file", type=str, default="", help="Almanac text file (stdin if omitted)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    ap.add_argument("--config", type=str, default="", help="YAML config file (optional)")
    ap.add_argument("--workers", type=int, default=0, help="Evaluate seed ranges on N worker processes; pays off only with many seed ranges")
    ap.add_argument("--output-dir", type=str, default="", help="Directory to store summary and final ranges")
    ap.add_argument("--plot", action="store_true", help="Show stage plot interactively")
    ap.add_argument("--save-plots", action="store_true", help="Save stage plot as PNG in output-dir")
    ap.add_argument("--check", action="store_true", help="Cross-check against per-value enumeration (small inputs)")
    return ap

def main(argv=None):
    args = build_argparser().parse_args(argv)

    try:
        if args.config:
            cfg = load_config_yaml(args.config)
        else:
            cfg = PipelineConfig()

        cfg.seed_mode = PART_MODES[args.part]
        if args.workers > 0:
            cfg.workers = args.workers
        if args.verbose:
            cfg.log_level = "DEBUG"
        if args.plot or args.save_plots:
            cfg.plot.enabled = True
        setup_logger(level=cfg.log_level)

        if args.input_file:
            almanac = load_almanac(args.input_file)
        else:
            almanac = read_almanac(sys.stdin)
        pipe = AlmanacPipeline.from_almanac(almanac, config=cfg, memory_lean=not cfg.plot.enabled)
        res = pipe.run()
        if args.check:
            expected = enumerate_minimum(pipe.seeds, pipe.layers, limit=cfg.enumerate_limit)
            if expected != res.minimum:
                raise AlmanacError(f"interval fold gave {res.minimum}, enumeration gave {expected}")
            logger.info("Enumeration check passed")
    # AlmanacError is a ValueError; bad config values raise plain ValueError
    except (ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    logger.info(f"{args.part.capitalize()}: {res.minimum}")

    if args.output_dir:
        out_dir = Path(args.output_dir); out_dir.mkdir(parents=True, exist_ok=True)
        summary = save_result_json(res, out_dir / "summary.json")
        save_ranges_json(res.final_ranges, out_dir / "final_ranges.json")
        logger.debug(json.dumps(summary))

    if cfg.plot.enabled:
        save_path = None
        if args.save_plots:
            save_dir = Path(args.output_dir or "."); save_dir.mkdir(parents=True, exist_ok=True)
            save_path = str(save_dir / f"plot_stages_{args.part}.png")
        plot_stage_ranges(
            res,
            title=f"Almanac ranges per stage ({cfg.seed_mode.value} seeds)",
            log_scale=cfg.plot.log_scale,
            max_ranges=cfg.plot.max_ranges,
            show=args.plot,
            save_path=save_path,
        )

    print(res.minimum)
    return 0

if __name__ == "__main__":
    sys.exit(main())
