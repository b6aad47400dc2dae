"""Tests for configuration loading and the settings it installs."""

import logging

import jsonschema
import pytest

from countnll.config import apply_config, load_config, setup_logging
from countnll.constants import (
    JITTER_MEAN,
    JITTER_SD,
    NL_INF,
    jitter_mean_from_config,
    jitter_sd_from_config,
    penalty_big_from_config,
    random_seed_from_config,
)
from countnll.nll_single import nlogl_pois
from countnll.penalty import get_penalty_settings


class TestConfigHelpers:
    """Defaults are returned for absent or partial configuration."""

    @pytest.mark.parametrize("cfg", [None, {}, {"likelihood": {}}, {"likelihood": None}])
    def test_defaults(self, cfg):
        assert penalty_big_from_config(cfg) == NL_INF
        assert jitter_mean_from_config(cfg) == JITTER_MEAN
        assert jitter_sd_from_config(cfg) == JITTER_SD
        assert random_seed_from_config(cfg) is None

    def test_values_from_config(self):
        cfg = {
            "likelihood": {
                "penalty": {"big": 1e10, "jitter_mean": 5.0, "jitter_sd": 1.0},
                "random_seed": 7,
            }
        }
        assert penalty_big_from_config(cfg) == 1e10
        assert jitter_mean_from_config(cfg) == 5.0
        assert jitter_sd_from_config(cfg) == 1.0
        assert random_seed_from_config(cfg) == 7


class TestLoadConfig:
    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "pipeline:\n"
            "  log_level: DEBUG\n"
            "likelihood:\n"
            "  penalty:\n"
            "    big: 1.0e+10\n"
            "  random_seed: 3\n"
        )
        cfg = load_config(path)
        assert cfg["likelihood"]["penalty"]["big"] == 1e10
        assert cfg["pipeline"]["log_level"] == "DEBUG"

    def test_empty_yaml_is_empty_config(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_config(path) == {}

    def test_mapping_is_validated(self):
        with pytest.raises(jsonschema.ValidationError):
            load_config({"likelihood": {"penalty": {"big": -1.0}}})
        with pytest.raises(jsonschema.ValidationError):
            load_config({"likelihood": {"penalty": {"jiter_sd": 1.0}}})

    def test_duplicate_keys_rejected(self, tmp_path):
        path = tmp_path / "dup.yaml"
        path.write_text("likelihood:\n  random_seed: 1\n  random_seed: 2\n")
        with pytest.raises(ValueError, match="Duplicate key"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_non_yaml_suffix(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{}")
        with pytest.raises(ValueError, match="YAML"):
            load_config(path)


class TestApplyConfig:
    def test_installs_penalty_settings(self):
        settings = apply_config(
            {"likelihood": {"penalty": {"big": 1e10, "jitter_sd": 0.0}}}
        )
        assert settings is get_penalty_settings()
        assert settings.big == 1e10
        assert nlogl_pois([1, 2], [-1.0]) == 1e10 + JITTER_MEAN**2

    def test_seed_makes_penalties_reproducible(self):
        cfg = {"likelihood": {"penalty": {"big": 1e10}, "random_seed": 42}}
        apply_config(cfg)
        first = [nlogl_pois([1], [-1.0]) for _ in range(3)]
        apply_config(cfg)
        assert [nlogl_pois([1], [-1.0]) for _ in range(3)] == first
        assert len(set(first)) == 3

    def test_logs_settings(self, caplog):
        with caplog.at_level(logging.INFO, logger="countnll.config"):
            apply_config({})
        assert "Penalty big=1e+100" in caplog.text


def test_setup_logging_uses_configured_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    setup_logging({"pipeline": {"log_level": "debug"}})
    assert calls["level"] == logging.DEBUG
    setup_logging(None)
    assert calls["level"] == logging.INFO
