"""
DopplerSim Scenario I/O Test Suite

Tests for YAML scenario loading and export.

Test ID | Description                    | Expected
--------|--------------------------------|------------------------------
1       | Load full scenario file        | Radar + targets parsed
2       | Speed-list shorthand           | "80,110,60" -> 3 targets
3       | Missing / malformed files      | FileNotFoundError / raises
4       | Export omits default fields    | Only non-default radar keys
5       | Export -> load round trip      | Same radar and targets
"""

import os
import sys
import textwrap

import pytest
import yaml

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dopplersim.errors import ConfigurationError
from dopplersim.io.exporter import export_scenario_to_yaml, scenario_to_dict
from dopplersim.io.scenario_loader import ScenarioLoader, load_scenario_from_dict
from dopplersim.simulation.engine import DopplerRadarSimulation
from dopplersim.simulation.objects import RadarConfig, Target, targets_from_speeds


def write_yaml(tmp_path, text, name="scenario.yaml"):
    path = tmp_path / name
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return str(path)


# =============================================================================
# TEST 1: Loading
# =============================================================================


class TestScenarioLoading:
    def test_full_scenario(self, tmp_path):
        path = write_yaml(
            tmp_path,
            """
            scenario:
              name: Motorway
              description: Three lanes
            radar:
              frequency_ghz: 34.7
              fft_size: 1024
            targets:
              - {id: 3, speed_kmh: 95, lane: 2}
              - {id: 8, speed_kmh: 130.5}
            """,
        )
        config = ScenarioLoader(path).get_config()

        assert config.name == "Motorway"
        assert config.description == "Three lanes"
        assert config.radar == RadarConfig(frequency_ghz=34.7, fft_size=1024)
        assert config.targets == (
            Target(target_id=3, radial_speed_kmh=95.0, lane=2),
            Target(target_id=8, radial_speed_kmh=130.5, lane=1),
        )

    def test_empty_file_uses_defaults(self, tmp_path):
        path = write_yaml(tmp_path, "")
        config = ScenarioLoader(path).get_config()

        assert config.name == "Unnamed Scenario"
        assert config.radar == RadarConfig()
        assert [t.radial_speed_kmh for t in config.targets] == [80.0, 110.0, 60.0]

    def test_create_simulation(self, tmp_path):
        path = write_yaml(tmp_path, "speeds: [80]\n")
        sim = ScenarioLoader(path).create_simulation(seed=5)

        assert isinstance(sim, DopplerRadarSimulation)
        assert sim.measurement().bin_index == 42

    def test_from_scenario(self, tmp_path):
        path = write_yaml(tmp_path, "radar: {fft_size: 128}\n")
        sim = DopplerRadarSimulation.from_scenario(path, seed=5)

        assert sim.config.fft_size == 128
        assert len(sim.step().spectrum) == 64

    def test_get_config_before_load(self):
        with pytest.raises(ValueError):
            ScenarioLoader().get_config()


# =============================================================================
# TEST 2: Speed-list Shorthand
# =============================================================================


class TestSpeedShorthand:
    def test_string(self):
        config = load_scenario_from_dict({"speeds": "80,110,60"})

        assert config.targets == targets_from_speeds([80, 110, 60])

    def test_string_skips_bad_entries(self):
        config = load_scenario_from_dict({"speeds": "80, fast, 95.5"})

        assert [t.radial_speed_kmh for t in config.targets] == [80.0, 95.0]

    def test_list(self):
        config = load_scenario_from_dict({"speeds": [50, 70.5]})

        assert [t.radial_speed_kmh for t in config.targets] == [50.0, 70.5]
        assert [t.lane for t in config.targets] == [0, 1]

    def test_targets_take_precedence(self):
        config = load_scenario_from_dict(
            {"targets": [{"speed_kmh": 40}], "speeds": "80,110"}
        )

        assert len(config.targets) == 1


# =============================================================================
# TEST 3: Invalid Input
# =============================================================================


class TestInvalidScenarios:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScenarioLoader(str(tmp_path / "missing.yaml"))

    def test_too_small_fft_rejected_before_simulation(self, tmp_path):
        path = write_yaml(tmp_path, "radar: {fft_size: 2}\n")
        loader = ScenarioLoader(path)

        with pytest.raises(ConfigurationError):
            loader.create_simulation(seed=1)

    def test_invalid_yaml(self, tmp_path):
        path = write_yaml(tmp_path, "radar: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            ScenarioLoader(path)

    @pytest.mark.parametrize(
        "document",
        [
            ["not", "a", "mapping"],
            {"radar": ["fft_size", 512]},
            {"radar": {"fft_size": 0}},
            {"radar": {"baseband_sample_rate_hz": -1}},
            {"targets": "80,110"},
            {"targets": [{"id": 0}]},
            {"targets": [{"speed_kmh": -10}]},
            {"targets": [{"id": 1, "speed_kmh": 80}, {"id": 1, "speed_kmh": 90}]},
            {"speeds": 80},
            {"targets": [{"id": "abc", "speed_kmh": 80}]},
            {"targets": [{"id": [1], "speed_kmh": 80}]},
            {"targets": [{"speed_kmh": 80, "lane": None}]},
        ],
    )
    def test_malformed_documents(self, document):
        with pytest.raises(ConfigurationError):
            load_scenario_from_dict(document)


# =============================================================================
# TEST 4: Export
# =============================================================================


class TestExport:
    def test_defaults_omitted(self):
        data = scenario_to_dict(RadarConfig(fft_size=2048), targets_from_speeds([80]))

        assert data["radar"] == {"fft_size": 2048}
        assert data["targets"] == [{"id": 0, "speed_kmh": 80.0, "lane": 0}]
        assert data["scenario"]["version"] == "1.0"

    def test_default_description_is_timestamp(self):
        data = scenario_to_dict(RadarConfig(), [])

        assert data["scenario"]["description"].startswith("Exported on ")

    def test_write_failure_returns_false(self, tmp_path):
        path = str(tmp_path / "no_such_dir" / "out.yaml")

        assert export_scenario_to_yaml(RadarConfig(), [], path) is False


# =============================================================================
# TEST 5: Round Trip
# =============================================================================


class TestRoundTrip:
    def test_export_then_load(self, tmp_path):
        radar = RadarConfig(frequency_ghz=10.525, baseband_sample_rate_hz=8000, fft_size=256)
        targets = (
            Target(target_id=0, radial_speed_kmh=45.0, lane=0),
            Target(target_id=4, radial_speed_kmh=72.5, lane=2),
        )
        path = str(tmp_path / "export.yaml")

        assert export_scenario_to_yaml(radar, targets, path, scenario_name="Town", description="30 zone")

        config = ScenarioLoader(path).get_config()
        assert config.name == "Town"
        assert config.description == "30 zone"
        assert config.radar == radar
        assert config.targets == targets
