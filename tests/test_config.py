"""Tests for YAML configuration."""

import pytest
import yaml
from aeonsim import PRESETS, DEFAULT_PARAMS
from aeonsim.utils.config import DEFAULT_CONFIG, load_config, save_config, params_from_config


class TestLoadConfig:
    def test_creates_default(self, tmp_path):
        path = tmp_path / "config.yaml"
        config = load_config(path)
        assert path.exists()
        assert config == DEFAULT_CONFIG

    def test_no_create(self, tmp_path):
        path = tmp_path / "config.yaml"
        load_config(path, create_default=False)
        assert not path.exists()

    def test_merges_over_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"preset": "spacefaring", "logging": {"level": "DEBUG"}}))
        config = load_config(path)
        assert config["preset"] == "spacefaring"
        assert config["logging"]["level"] == "DEBUG"
        assert config["logging"]["log_dir"] == DEFAULT_CONFIG["logging"]["log_dir"]

    def test_defaults_not_mutated(self, tmp_path):
        config = load_config(tmp_path / "config.yaml")
        config["projection"]["workers"] = 8
        assert DEFAULT_CONFIG["projection"]["workers"] == 1

    def test_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_round_trip(self, tmp_path):
        path = tmp_path / "sub" / "config.yaml"
        save_config(DEFAULT_CONFIG, path)
        assert load_config(path) == DEFAULT_CONFIG


class TestParamsFromConfig:
    def test_defaults(self):
        assert params_from_config(DEFAULT_CONFIG) == DEFAULT_PARAMS

    def test_preset(self):
        config = dict(DEFAULT_CONFIG, preset="fossil-boom")
        assert params_from_config(config) == PRESETS["fossil-boom"]["params"]

    def test_override_on_preset(self):
        parameters = dict(DEFAULT_CONFIG["parameters"], space_colonization=60)
        config = dict(DEFAULT_CONFIG, preset="fossil-boom", parameters=parameters)
        params = params_from_config(config)
        assert params.space_colonization == 60
        assert params.co2_emission_rate == PRESETS["fossil-boom"]["params"].co2_emission_rate

    def test_out_of_range_clamped(self):
        config = dict(DEFAULT_CONFIG, parameters={"conflict_probability": 250})
        assert params_from_config(config).conflict_probability == 100

    def test_unknown_parameter(self):
        with pytest.raises(ValueError):
            params_from_config(dict(DEFAULT_CONFIG, parameters={"warp_drive": 1}))
