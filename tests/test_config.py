import pytest

from almanac_pipeline import PipelineConfig, PlotParams, SeedMode, load_config_yaml


def test_defaults():
    cfg = PipelineConfig()
    assert cfg.seed_mode is SeedMode.SINGLE
    assert cfg.coalesce is True
    assert cfg.workers == 1
    assert cfg.plot == PlotParams()


def test_plot_params_not_shared():
    a, b = PipelineConfig(), PipelineConfig()
    a.plot.enabled = True
    assert b.plot.enabled is False


def test_load_yaml(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "seed_mode: paired\n"
        "workers: 3\n"
        "coalesce: false\n"
        "log_level: debug\n"
        "plot:\n"
        "  log_scale: true\n"
        "  colour: blue\n",
        encoding="utf-8",
    )
    cfg = load_config_yaml(str(path))
    assert cfg.seed_mode is SeedMode.PAIRED
    assert cfg.workers == 3
    assert cfg.coalesce is False
    assert cfg.log_level == "DEBUG"
    assert cfg.plot.log_scale is True
    assert not hasattr(cfg.plot, "colour")


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config_yaml(str(path)) == PipelineConfig()


def test_bad_seed_mode(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("seed_mode: triples\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config_yaml(str(path))


def test_bad_log_level():
    with pytest.raises(ValueError, match="unknown log level"):
        PipelineConfig(log_level="chatty")


def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert PipelineConfig().log_level == "WARNING"


def test_yaml_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config_yaml(str(path))
