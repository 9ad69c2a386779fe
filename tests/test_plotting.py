from almanac_pipeline import AlmanacPipeline, SeedMode, plot_stage_ranges


def test_plot_all_stages(tmp_path, example_almanac):
    res = AlmanacPipeline.from_almanac(example_almanac, SeedMode.PAIRED, memory_lean=False).run()
    out = tmp_path / "stages.png"
    labels = plot_stage_ranges(res, title="example", show=False, save_path=str(out))
    assert out.exists() and out.stat().st_size > 0
    assert labels[0] == "seeds"
    assert labels[-1] == "humidity-to-location"
    assert len(labels) == 8


def test_plot_memory_lean_result(tmp_path, example_almanac):
    res = AlmanacPipeline.from_almanac(example_almanac, SeedMode.SINGLE).run()
    out = tmp_path / "lean.png"
    labels = plot_stage_ranges(res, log_scale=True, show=False, save_path=str(out))
    assert labels == ["seeds", "final"]
    assert out.exists()
