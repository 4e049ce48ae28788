"""
DopplerSim Simulation Validation Test Suite

Tests for speed measurement, target editing, and the simulation engine.

Test ID | Description                    | Reference              | Tolerance
--------|--------------------------------|------------------------|------------
1       | Quantised speed measurement    | round(fd/Δf)·Δf        | ±1e-6 km/h
2       | Fastest-target selection       | First of equal speeds  | Exact
3       | Target validation              | v >= 0, unique ids     | Raises
4       | Target list editing            | Max 10, lane = i mod 3 | Exact
5       | Derived metrics                | Δv, v_max, T_obs       | ±1e-6
6       | Engine state on bad updates    | Last valid config kept | Exact

References:
    - Skolnik (2008). "Radar Handbook", 3rd Ed., Ch. 14 (CW Radar)
"""

import math
import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dopplersim.errors import ConfigurationError
from dopplersim.physics.constants import MAX_TARGETS
from dopplersim.simulation.engine import (
    DopplerRadarSimulation,
    compute_derived_metrics,
    simulate,
)
from dopplersim.simulation.measurement import (
    NO_TARGET,
    compute_measurement,
    select_fastest_target,
)
from dopplersim.simulation.objects import (
    RadarConfig,
    Target,
    add_target,
    parse_speed_list,
    randomize_speeds,
    remove_last_target,
    targets_from_speeds,
    update_target_speed,
    validate_targets,
)


@pytest.fixture
def kband():
    return RadarConfig()


# =============================================================================
# TEST 1: Quantised Speed Measurement
# =============================================================================


class TestMeasurement:
    """
    80 km/h at 24.15 GHz, Fs = 44.1 kHz, N = 512:
        fd = 3580.25 Hz -> bin 42 -> 3617.58 Hz -> 80.834 km/h
    """

    def test_traffic_radar_example(self, kband):
        result = compute_measurement(kband, [Target(target_id=0, radial_speed_kmh=80.0)])

        assert result.target_id == 0
        assert result.bin_index == 42
        assert result.true_doppler_shift_hz == pytest.approx(3580.25, abs=0.01)
        assert result.measured_shift_hz == pytest.approx(42 * 86.1328125)
        assert result.measured_speed_kmh == pytest.approx(80.833985, abs=1e-6)
        assert result.error_kmh == pytest.approx(result.measured_speed_kmh - 80.0)

    def test_error_within_half_resolution(self, kband):
        half_res = compute_derived_metrics(kband).speed_resolution_kmh / 2
        for speed in range(1, 400, 7):
            result = compute_measurement(kband, [Target(target_id=0, radial_speed_kmh=speed)])

            assert abs(result.error_kmh) <= half_res + 1e-9

    def test_finer_fft_reduces_error_bound(self):
        targets = [Target(target_id=0, radial_speed_kmh=80.0)]
        for n in (128, 2048):
            config = RadarConfig(fft_size=n)
            result = compute_measurement(config, targets)
            half_res = compute_derived_metrics(config).speed_resolution_kmh / 2

            assert abs(result.error_kmh) <= half_res + 1e-9

    def test_no_targets(self, kband):
        result = compute_measurement(kband, [])

        assert result == NO_TARGET
        assert result.target_id is None
        assert result.measured_speed_kmh == 0.0
        assert result.error_kmh == 0.0

    def test_stationary_target(self, kband):
        result = compute_measurement(kband, [Target(target_id=3, radial_speed_kmh=0.0)])

        assert result.target_id == 3
        assert result.bin_index == 0
        assert result.measured_speed_kmh == 0.0
        assert result.error_kmh == 0.0

    def test_no_alias_fold_in_measurement(self, kband):
        """600 km/h exceeds v_max; the reading is taken from the unfolded shift"""
        result = compute_measurement(kband, [Target(target_id=0, radial_speed_kmh=600.0)])

        assert result.bin_index == 312
        assert result.measured_speed_kmh == pytest.approx(600.0, abs=1.0)

    def test_aliasing_flag(self, kband):
        """v_max ≈ 492.7 km/h at 44.1 kHz: 600 km/h is aliased, 110 km/h is not"""
        assert compute_measurement(kband, targets_from_speeds([600])).is_aliased
        assert not compute_measurement(kband, targets_from_speeds([110])).is_aliased
        assert not NO_TARGET.is_aliased

    def test_aliasing_flag_follows_sample_rate(self):
        """96 kHz raises v_max to ≈ 1072.6 km/h"""
        config = RadarConfig(baseband_sample_rate_hz=96000)

        assert not compute_measurement(config, targets_from_speeds([600])).is_aliased

    def test_overflowing_speed_rejected(self, kband):
        with pytest.raises(ConfigurationError):
            compute_measurement(kband, [Target(target_id=0, radial_speed_kmh=1e300)])

    def test_to_dict(self, kband):
        data = compute_measurement(kband, targets_from_speeds([80])).to_dict()

        assert data["bin_index"] == 42
        assert set(data) == {
            "target_id",
            "true_speed_kmh",
            "true_doppler_shift_hz",
            "bin_index",
            "measured_shift_hz",
            "measured_speed_kmh",
            "error_kmh",
            "is_speeding",
            "is_aliased",
        }


# =============================================================================
# TEST 2: Fastest-Target Selection
# =============================================================================


class TestFastestTarget:
    def test_default_scene_measures_110(self, kband):
        result = compute_measurement(kband, targets_from_speeds([80, 110, 60]))

        assert result.target_id == 1
        assert result.true_speed_kmh == 110.0
        assert result.bin_index == 57
        assert result.measured_speed_kmh == pytest.approx(109.703266, abs=1e-6)

    def test_speeding_flag_uses_measured_speed(self, kband):
        assert compute_measurement(kband, targets_from_speeds([110])).is_speeding
        assert not compute_measurement(kband, targets_from_speeds([80])).is_speeding
        assert not NO_TARGET.is_speeding

    def test_tie_goes_to_first(self):
        targets = [
            Target(target_id=5, radial_speed_kmh=110.0),
            Target(target_id=7, radial_speed_kmh=110.0),
        ]

        assert select_fastest_target(targets).target_id == 5

    def test_empty(self):
        assert select_fastest_target([]) is None


# =============================================================================
# TEST 3: Target Validation
# =============================================================================


class TestTargetValidation:
    @pytest.mark.parametrize("speed", [-1.0, math.nan, math.inf, True, "80"])
    def test_invalid_speed(self, speed):
        with pytest.raises(ConfigurationError):
            Target(target_id=0, radial_speed_kmh=speed)

    def test_integer_speed_normalised(self):
        target = Target(target_id=0, radial_speed_kmh=80)

        assert isinstance(target.radial_speed_kmh, float)

    def test_duplicate_ids(self):
        targets = [
            Target(target_id=1, radial_speed_kmh=80.0),
            Target(target_id=1, radial_speed_kmh=90.0),
        ]

        with pytest.raises(ConfigurationError):
            validate_targets(targets)

    def test_non_target_entry(self):
        with pytest.raises(ConfigurationError):
            validate_targets([80.0])

    def test_snapshot_is_tuple(self):
        source = [Target(target_id=0, radial_speed_kmh=80.0)]
        snapshot = validate_targets(source)
        source.append(Target(target_id=1, radial_speed_kmh=90.0))

        assert len(snapshot) == 1

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            RadarConfig(frequency_ghz=-24.15)


# =============================================================================
# TEST 4: Target List Editing
# =============================================================================


class TestTargetEditing:
    def test_targets_from_speeds(self):
        targets = targets_from_speeds([80, 110, 60, 90])

        assert [t.target_id for t in targets] == [0, 1, 2, 3]
        assert [t.lane for t in targets] == [0, 1, 2, 0]

    def test_parse_speed_list(self):
        assert parse_speed_list("80,110,60") == (80, 110, 60)
        assert parse_speed_list(" 80 , 95.5,abc,,120km/h") == (80, 95, 120)
        assert parse_speed_list("") == ()

    def test_add_target_next_id(self):
        targets = (
            Target(target_id=0, radial_speed_kmh=80.0),
            Target(target_id=4, radial_speed_kmh=90.0),
        )
        added = add_target(targets)

        assert added[-1].target_id == 5
        assert added[-1].radial_speed_kmh == 80.0
        assert added[-1].lane == 2
        assert len(targets) == 2

    def test_add_to_empty(self):
        added = add_target(())

        assert added == (Target(target_id=0, radial_speed_kmh=80.0, lane=0),)

    def test_add_target_limit(self):
        full = targets_from_speeds([80] * MAX_TARGETS)

        assert add_target(full) == full

    def test_remove_last(self):
        targets = targets_from_speeds([80, 110, 60])

        assert [t.target_id for t in remove_last_target(targets)] == [0, 1]
        assert remove_last_target(()) == ()

    def test_update_speed(self):
        targets = targets_from_speeds([80, 110, 60])
        updated = update_target_speed(targets, 1, 130.0)

        assert [t.radial_speed_kmh for t in updated] == [80.0, 130.0, 60.0]
        assert targets[1].radial_speed_kmh == 110.0

    def test_update_unknown_id_is_noop(self):
        targets = targets_from_speeds([80, 110])

        assert update_target_speed(targets, 9, 130.0) == targets

    def test_update_rejects_negative(self):
        with pytest.raises(ConfigurationError):
            update_target_speed(targets_from_speeds([80]), 0, -5.0)

    def test_randomize_range(self):
        targets = randomize_speeds(targets_from_speeds([80] * 10), rng=3)

        for t in targets:
            assert 40 <= t.radial_speed_kmh < 140
            assert t.radial_speed_kmh == int(t.radial_speed_kmh)
        assert [t.target_id for t in targets] == list(range(10))

    def test_randomize_reproducible(self):
        targets = targets_from_speeds([80, 110, 60])

        assert randomize_speeds(targets, rng=3) == randomize_speeds(targets, rng=3)


# =============================================================================
# TEST 5: Derived Metrics
# =============================================================================


class TestDerivedMetrics:
    def test_kband_defaults(self, kband):
        metrics = compute_derived_metrics(kband)

        assert metrics.wavelength_mm == pytest.approx(12.413766, abs=1e-6)
        assert metrics.frequency_resolution_hz == pytest.approx(86.1328125)
        assert metrics.speed_resolution_kmh == pytest.approx(1.924619, abs=1e-6)
        assert metrics.max_unambiguous_speed_kmh == pytest.approx(492.702387, abs=1e-6)
        assert metrics.observation_time_ms == pytest.approx(11.609977, abs=1e-6)

    def test_to_dict(self, kband):
        data = compute_derived_metrics(kband).to_dict()

        assert data["frequency_resolution_hz"] == pytest.approx(86.1328125)
        assert len(data) == 5


# =============================================================================
# TEST 6: Simulation Engine
# =============================================================================


class TestSimulationEngine:
    def test_defaults(self):
        sim = DopplerRadarSimulation(seed=1)

        assert sim.config == RadarConfig()
        assert [t.radial_speed_kmh for t in sim.targets] == [80.0, 110.0, 60.0]
        assert sim.frame_count == 0

    def test_step_and_run(self):
        sim = DopplerRadarSimulation(seed=1)
        snapshot = sim.step()
        frames = sim.run(3)

        assert sim.frame_count == 4
        assert len(frames) == 3
        assert snapshot.measurement.target_id == 1
        assert len(snapshot.spectrum) == 256

    def test_frames_have_fresh_noise(self):
        sim = DopplerRadarSimulation(seed=1)
        a, b = sim.run(2)

        assert not np.array_equal(a.spectrum.amplitude, b.spectrum.amplitude)

    def test_reset_reproduces(self):
        sim = DopplerRadarSimulation(seed=1)
        first = sim.step()
        sim.reset(seed=1)
        again = sim.step()

        assert sim.frame_count == 1
        np.testing.assert_array_equal(first.spectrum.amplitude, again.spectrum.amplitude)

    def test_update_config(self):
        sim = DopplerRadarSimulation(seed=1)
        config = sim.update_config(fft_size=2048)

        assert sim.config is config
        assert sim.metrics().speed_resolution_kmh == pytest.approx(1.924619 / 4, abs=1e-6)

    @pytest.mark.parametrize(
        "changes",
        [
            {"fft_size": 0},
            {"fft_size": 2},
            {"baseband_sample_rate_hz": -44100.0},
            {"frequency_ghz": math.nan},
        ],
    )
    def test_invalid_update_keeps_last_valid(self, changes):
        sim = DopplerRadarSimulation(seed=1)
        before = sim.config

        with pytest.raises(ConfigurationError):
            sim.update_config(**changes)

        assert sim.config is before
        assert len(sim.step().spectrum) == 256

    def test_too_small_fft_rejected_at_construction(self):
        with pytest.raises(ConfigurationError):
            DopplerRadarSimulation(config=RadarConfig(fft_size=2), seed=1)

    def test_unknown_config_field(self):
        sim = DopplerRadarSimulation(seed=1)
        before = sim.config

        with pytest.raises(ConfigurationError):
            sim.update_config(fft_len=1024)

        assert sim.config is before

    def test_invalid_targets_keep_last_valid(self):
        sim = DopplerRadarSimulation(seed=1)
        before = sim.targets
        duplicate = [Target(target_id=0, radial_speed_kmh=50.0)] * 2

        with pytest.raises(ConfigurationError):
            sim.set_targets(duplicate)

        assert sim.targets is before

    def test_measurement_follows_targets(self):
        sim = DopplerRadarSimulation(seed=1)
        sim.set_targets(targets_from_speeds([80]))

        assert sim.measurement().bin_index == 42

    def test_simulate_snapshot(self, kband):
        snapshot = simulate(kband, targets_from_speeds([80, 110, 60]), noise_source=42)
        data = snapshot.to_dict()

        assert set(data) == {"radar", "targets", "metrics", "measurement", "spectrum"}
        assert data["measurement"]["bin_index"] == 57
        assert len(data["targets"]) == 3
