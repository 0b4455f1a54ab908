"""Tests for the projection model boundary layer."""

import logging

import pytest
from aeonsim import ProjectionModel, SimulationParams, DEFAULT_PARAMS, PRESETS, get_preset, list_presets
from aeonsim.core.params import params_from_mapping


class TestProjectionModel:
    def test_initialization(self):
        model = ProjectionModel()
        assert model.workers == 1
        assert model.show_progress is False

    def test_invalid_workers(self):
        with pytest.raises(ValueError):
            ProjectionModel(workers=0)

    def test_run_defaults(self, default_results):
        assert len(default_results) == 596
        assert default_results.params == DEFAULT_PARAMS
        assert default_results.preset_key is None

    def test_run_with_preset(self, preset_results):
        results = preset_results["green-transition"]
        assert results.params == PRESETS["green-transition"]["params"]
        assert results.preset_key == "green-transition"

    def test_mapping_overrides_preset(self):
        model = ProjectionModel()
        params = model.resolve_params({"spaceColonization": 80}, preset="fossil-boom")
        assert params.space_colonization == 80
        assert params.co2_emission_rate == PRESETS["fossil-boom"]["params"].co2_emission_rate

    def test_out_of_range_params_clamped(self, caplog):
        model = ProjectionModel()
        with caplog.at_level(logging.WARNING, logger="aeonsim"):
            params = model.resolve_params(SimulationParams(co2_emission_rate=150, ai_regulation=-5))
        assert params.co2_emission_rate == 100
        assert params.ai_regulation == 0
        assert "Clamped" in caplog.text

    def test_workers_match_serial(self):
        serial = ProjectionModel().run()
        threaded = ProjectionModel(workers=3).run()
        assert serial.records == threaded.records

    def test_diagnostics(self, default_results):
        diag = default_results.diagnostics
        assert diag["peak_temperature"] == max(r.temperature for r in default_results)
        assert diag["n_events"] == len(default_results.events)
        assert diag["final_civilization_level"] == default_results.final.civilization_level
        if diag["first_2c_year"] is not None:
            assert default_results.nearest(diag["first_2c_year"]).temperature >= 2.0

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            ProjectionModel().run(preset="nonexistent")


class TestSensitivity:
    def test_sweep(self):
        model = ProjectionModel()
        sweep = model.sensitivity_analysis("renewable_adoption", values=[0, 50, 100])
        assert [value for value, _ in sweep] == [0, 50, 100]
        finals = [results.final.atmospheric_co2_ppm for _, results in sweep]
        assert finals[0] >= finals[1] >= finals[2]

    def test_unknown_parameter(self):
        with pytest.raises(ValueError):
            ProjectionModel().sensitivity_analysis("warp_drive")


class TestParams:
    def test_defaults(self):
        assert DEFAULT_PARAMS.to_dict() == {
            "co2_emission_rate": 50,
            "renewable_adoption": 30,
            "population_growth_rate": 50,
            "ai_regulation": 30,
            "conflict_probability": 30,
            "economic_expansion": 50,
            "geo_engineering_level": 20,
            "space_colonization": 10,
        }

    def test_clamped_reports_changes(self):
        params, changed = SimulationParams(conflict_probability=101.4, economic_expansion=42.5).clamped()
        assert params.conflict_probability == 100
        assert params.economic_expansion == 43
        assert set(changed) == {"conflict_probability", "economic_expansion"}

    def test_in_range_untouched(self):
        params, changed = DEFAULT_PARAMS.clamped()
        assert params == DEFAULT_PARAMS
        assert changed == []
        assert DEFAULT_PARAMS.out_of_range() == []

    def test_mapping_rejects_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown parameter"):
            params_from_mapping({"warp_drive": 10})

    def test_mapping_rejects_non_numeric(self):
        with pytest.raises(ValueError, match="numeric"):
            params_from_mapping({"ai_regulation": "lots"})

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), "nan", "inf"])
    def test_mapping_rejects_non_finite(self, value):
        with pytest.raises(ValueError, match="numeric"):
            params_from_mapping({"co2_emission_rate": value})

    def test_clamped_rejects_nan(self):
        with pytest.raises(ValueError, match="co2_emission_rate"):
            SimulationParams(co2_emission_rate=float("nan")).clamped()

    def test_model_rejects_infinite(self):
        with pytest.raises(ValueError, match="finite"):
            ProjectionModel().run(SimulationParams(space_colonization=float("inf")))

    def test_mapping_accepts_camel_case(self):
        params = params_from_mapping({"geoEngineeringLevel": 77, "co2_emission_rate": "12"})
        assert params.geo_engineering_level == 77
        assert params.co2_emission_rate == 12


class TestPresets:
    def test_all_presets_exist(self):
        expected = ["baseline", "green-transition", "fossil-boom", "fractured-world", "spacefaring"]
        assert list_presets() == expected

    def test_preset_structure(self):
        for key, preset in PRESETS.items():
            assert {"name", "subtitle", "params", "description"} <= set(preset)
            assert preset["params"].out_of_range() == []

    def test_aliases(self):
        assert get_preset("green") is PRESETS["green-transition"]
        assert get_preset("Fossil_Boom") is PRESETS["fossil-boom"]

    def test_unknown(self):
        with pytest.raises(KeyError, match="Available"):
            get_preset("utopia")
