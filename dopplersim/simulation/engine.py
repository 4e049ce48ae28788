"""
Simulation Engine

Functional API of the CW Doppler radar simulator plus a small stateful
engine that holds the "last valid" configuration for an interactive
consumer.

Features:
    - Derived radar metrics (wavelength, resolution, Nyquist speed, T_obs)
    - Quantised speed measurement of the fastest target
    - Synthesised baseband spectrum with seedable noise floor
    - Invalid updates are rejected without disturbing the current state
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import ConfigurationError
from ..physics.constants import DEFAULT_TARGET_SPEEDS_KMH
from ..physics.doppler import (
    max_unambiguous_speed_kmh,
    observation_time_ms,
    speed_resolution_kmh,
    wavelength_mm,
)
from .measurement import MeasurementResult, compute_measurement
from .objects import RadarConfig, SeedLike, Target, targets_from_speeds, validate_targets
from .spectrum import Spectrum, require_spectrum_bins, synthesize_spectrum

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedMetrics:
    """
    Scalar radar figures derived from a RadarConfig.

    Attributes:
        wavelength_mm: Carrier wavelength [mm]
        frequency_resolution_hz: FFT bin width [Hz]
        speed_resolution_kmh: Speed per bin [km/h]
        max_unambiguous_speed_kmh: Nyquist speed limit [km/h]
        observation_time_ms: FFT frame duration [ms]
    """

    wavelength_mm: float
    frequency_resolution_hz: float
    speed_resolution_kmh: float
    max_unambiguous_speed_kmh: float
    observation_time_ms: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "wavelength_mm": self.wavelength_mm,
            "frequency_resolution_hz": self.frequency_resolution_hz,
            "speed_resolution_kmh": self.speed_resolution_kmh,
            "max_unambiguous_speed_kmh": self.max_unambiguous_speed_kmh,
            "observation_time_ms": self.observation_time_ms,
        }


def compute_derived_metrics(config: RadarConfig) -> DerivedMetrics:
    """
    Compute the scalar figures of merit for a radar configuration.

    T_obs = N / Fs
    Δv    = c * (Fs / N) / (2 * f0)
    v_max = c * (Fs / 2) / (2 * f0)
    """
    fs = config.baseband_sample_rate_hz
    n = config.fft_size
    f0 = config.frequency_ghz

    return DerivedMetrics(
        wavelength_mm=wavelength_mm(f0),
        frequency_resolution_hz=config.frequency_resolution_hz,
        speed_resolution_kmh=speed_resolution_kmh(fs, n, f0),
        max_unambiguous_speed_kmh=max_unambiguous_speed_kmh(fs, f0),
        observation_time_ms=observation_time_ms(fs, n),
    )


@dataclass(frozen=True)
class SimulationSnapshot:
    """Everything a display needs for one update."""

    config: RadarConfig
    targets: Tuple[Target, ...]
    metrics: DerivedMetrics
    measurement: MeasurementResult
    spectrum: Spectrum

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "radar": self.config.to_dict(),
            "targets": [t.to_dict() for t in self.targets],
            "metrics": self.metrics.to_dict(),
            "measurement": self.measurement.to_dict(),
            "spectrum": self.spectrum.to_dict(),
        }


def simulate(
    config: RadarConfig, targets: Sequence[Target], noise_source: SeedLike = None
) -> SimulationSnapshot:
    """Run metrics, measurement and spectrum synthesis for one snapshot."""
    targets = validate_targets(targets)
    return SimulationSnapshot(
        config=config,
        targets=targets,
        metrics=compute_derived_metrics(config),
        measurement=compute_measurement(config, targets),
        spectrum=synthesize_spectrum(config, targets, noise_source),
    )


class DopplerRadarSimulation:
    """
    Stateful wrapper for interactive consumers.

    Holds the current radar configuration and target list. An update that
    fails validation raises ConfigurationError and leaves the previous,
    valid state untouched, so a display can keep showing it.

    Usage:
        sim = DopplerRadarSimulation(seed=42)
        sim.update_config(fft_size=2048)
        snapshot = sim.step()
    """

    def __init__(
        self,
        config: Optional[RadarConfig] = None,
        targets: Optional[Iterable[Target]] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize simulation.

        Args:
            config: Radar configuration (default: K-band 24.15 GHz, 44.1 kHz, N=512)
            targets: Initial targets (default: three cars at 80/110/60 km/h)
            seed: Seed for the noise-floor generator

        Raises:
            ConfigurationError: If config is too small for spectrum synthesis
                                or the targets are invalid
        """
        self.config = config if config is not None else RadarConfig()
        require_spectrum_bins(self.config)
        if targets is None:
            targets = targets_from_speeds(DEFAULT_TARGET_SPEEDS_KMH)
        self.targets = validate_targets(targets)
        self.rng = np.random.default_rng(seed)
        self.frame_count = 0

        logger.info(
            "Doppler simulation initialised: %s, %d targets",
            self.config.to_dict(),
            len(self.targets),
        )

    @classmethod
    def from_scenario(cls, filepath: str, seed: Optional[int] = None) -> "DopplerRadarSimulation":
        """Create a simulation from a YAML scenario file."""
        # Import here to avoid circular dependencies
        from ..io.scenario_loader import ScenarioLoader

        return ScenarioLoader(filepath).create_simulation(seed=seed)

    def update_config(self, **changes: Any) -> RadarConfig:
        """
        Replace fields of the radar configuration.

        Raises:
            ConfigurationError: If the resulting configuration is invalid;
                                the current configuration is kept.
        """
        try:
            new_config = replace(self.config, **changes)
        except TypeError as e:
            raise ConfigurationError(f"Unknown radar configuration field: {e}") from e
        require_spectrum_bins(new_config)
        self.config = new_config
        logger.info("Radar configuration updated: %s", new_config.to_dict())
        return new_config

    def set_targets(self, targets: Iterable[Target]) -> Tuple[Target, ...]:
        """Replace the target list (validated snapshot)."""
        self.targets = validate_targets(targets)
        return self.targets

    def metrics(self) -> DerivedMetrics:
        return compute_derived_metrics(self.config)

    def measurement(self) -> MeasurementResult:
        return compute_measurement(self.config, self.targets)

    def step(self) -> SimulationSnapshot:
        """Produce one display update with a fresh noise floor."""
        snapshot = simulate(self.config, self.targets, self.rng)
        self.frame_count += 1
        return snapshot

    def run(self, n_frames: int) -> List[SimulationSnapshot]:
        """Produce n_frames consecutive updates."""
        return [self.step() for _ in range(n_frames)]

    def reset(self, seed: Optional[int] = None) -> None:
        """Reseed the noise generator and clear the frame counter."""
        self.rng = np.random.default_rng(seed)
        self.frame_count = 0
