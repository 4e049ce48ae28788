"""
Simulation Objects

Radar configuration and moving targets for CW Doppler traffic simulation.

Features:
    - Immutable, validated RadarConfig (carrier, baseband rate, FFT size)
    - Targets as closing-speed reflectors (no range/angle state)
    - Pure target-list editing helpers returning new tuples
"""

import logging
import math
import re
from dataclasses import dataclass, replace
from numbers import Real
from typing import Any, Dict, Iterable, Sequence, Tuple, Union

import numpy as np

from ..errors import ConfigurationError
from ..physics.constants import (
    DEFAULT_FFT_SIZE,
    DEFAULT_FREQUENCY_GHZ,
    DEFAULT_NEW_TARGET_SPEED_KMH,
    DEFAULT_SAMPLE_RATE_HZ,
    MAX_TARGETS,
    NUM_LANES,
    RANDOM_SPEED_MAX_KMH,
    RANDOM_SPEED_MIN_KMH,
)
from ..physics.doppler import _require_fft_size, _require_positive

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.Generator]

_LEADING_INT = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class RadarConfig:
    """
    CW radar configuration, immutable per computation.

    All derived quantities (resolution, Nyquist limit) are pure functions
    of these three fields and the speed of light.

    Attributes:
        frequency_ghz: Carrier frequency [GHz]
        baseband_sample_rate_hz: Baseband sample rate Fs [Hz]
        fft_size: FFT length N (conventionally a power of two)

    Raises:
        ConfigurationError: If any field is non-positive or non-finite
    """

    frequency_ghz: float = DEFAULT_FREQUENCY_GHZ
    baseband_sample_rate_hz: float = DEFAULT_SAMPLE_RATE_HZ
    fft_size: int = DEFAULT_FFT_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "frequency_ghz", _require_positive("frequency_ghz", self.frequency_ghz)
        )
        object.__setattr__(
            self,
            "baseband_sample_rate_hz",
            _require_positive("baseband_sample_rate_hz", self.baseband_sample_rate_hz),
        )
        object.__setattr__(self, "fft_size", _require_fft_size(self.fft_size))

    @property
    def frequency_resolution_hz(self) -> float:
        """Bin width Fs / N [Hz]."""
        return self.baseband_sample_rate_hz / self.fft_size

    @property
    def nyquist_hz(self) -> float:
        """Highest unambiguous baseband frequency Fs / 2 [Hz]."""
        return self.baseband_sample_rate_hz / 2.0

    @property
    def num_bins(self) -> int:
        """Number of positive-frequency bins, N // 2."""
        return self.fft_size // 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frequency_ghz": self.frequency_ghz,
            "baseband_sample_rate_hz": self.baseband_sample_rate_hz,
            "fft_size": self.fft_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RadarConfig":
        """Create from a mapping; missing keys take the K-band defaults."""
        return cls(
            frequency_ghz=data.get("frequency_ghz", DEFAULT_FREQUENCY_GHZ),
            baseband_sample_rate_hz=data.get("baseband_sample_rate_hz", DEFAULT_SAMPLE_RATE_HZ),
            fft_size=data.get("fft_size", DEFAULT_FFT_SIZE),
        )


@dataclass(frozen=True)
class Target:
    """
    Moving reflector seen by the radar.

    Speeds are closing speeds along the boresight: non-negative magnitudes,
    with zero meaning no Doppler return.

    Attributes:
        target_id: Identifier, unique within a scenario
        radial_speed_kmh: Closing speed [km/h]
        lane: Display lane (not used by the physics)
    """

    target_id: int
    radial_speed_kmh: float
    lane: int = 0

    def __post_init__(self) -> None:
        speed = self.radial_speed_kmh
        if isinstance(speed, bool) or not isinstance(speed, Real):
            raise ConfigurationError(
                f"Target {self.target_id}: speed must be a real number, got {speed!r}"
            )
        speed = float(speed)
        if not math.isfinite(speed) or speed < 0.0:
            raise ConfigurationError(
                f"Target {self.target_id}: speed must be finite and >= 0, got {speed!r}"
            )
        object.__setattr__(self, "radial_speed_kmh", speed)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.target_id, "speed_kmh": self.radial_speed_kmh, "lane": self.lane}


def validate_targets(targets: Iterable[Target]) -> Tuple[Target, ...]:
    """
    Snapshot a target sequence, checking id uniqueness.

    Returns:
        Tuple of the targets in input order

    Raises:
        ConfigurationError: On duplicate ids or non-Target entries
    """
    snapshot = tuple(targets)
    seen = set()
    for target in snapshot:
        if not isinstance(target, Target):
            raise ConfigurationError(f"Expected Target, got {type(target).__name__}")
        if target.target_id in seen:
            raise ConfigurationError(f"Duplicate target id: {target.target_id}")
        seen.add(target.target_id)
    return snapshot


# =============================================================================
# TARGET LIST EDITING
# =============================================================================


def targets_from_speeds(speeds: Iterable[float]) -> Tuple[Target, ...]:
    """Build targets with ids 0..n-1, spread round-robin over the lanes."""
    return tuple(
        Target(target_id=i, radial_speed_kmh=speed, lane=i % NUM_LANES)
        for i, speed in enumerate(speeds)
    )


def parse_speed_list(text: str) -> Tuple[int, ...]:
    """
    Parse a comma-separated speed list such as "80,110,60".

    Each entry keeps its leading integer part ("95.5" -> 95); entries
    without one are skipped.
    """
    speeds = []
    for token in text.split(","):
        match = _LEADING_INT.match(token.strip())
        if match:
            speeds.append(int(match.group()))
    return tuple(speeds)


def add_target(
    targets: Sequence[Target], speed_kmh: float = DEFAULT_NEW_TARGET_SPEED_KMH
) -> Tuple[Target, ...]:
    """
    Append a target with the next free id.

    The list is returned unchanged once it holds MAX_TARGETS targets.
    """
    targets = tuple(targets)
    if len(targets) >= MAX_TARGETS:
        logger.debug("Target limit (%d) reached; not adding", MAX_TARGETS)
        return targets
    new_id = max(t.target_id for t in targets) + 1 if targets else 0
    return targets + (
        Target(target_id=new_id, radial_speed_kmh=speed_kmh, lane=len(targets) % NUM_LANES),
    )


def remove_last_target(targets: Sequence[Target]) -> Tuple[Target, ...]:
    return tuple(targets)[:-1]


def update_target_speed(
    targets: Sequence[Target], target_id: int, speed_kmh: float
) -> Tuple[Target, ...]:
    """Replace the speed of the target with target_id; other targets are untouched."""
    return tuple(
        replace(t, radial_speed_kmh=speed_kmh) if t.target_id == target_id else t for t in targets
    )


def randomize_speeds(targets: Sequence[Target], rng: SeedLike = None) -> Tuple[Target, ...]:
    """
    Give every target a random integer speed.

    Speeds are uniform over [RANDOM_SPEED_MIN_KMH, RANDOM_SPEED_MAX_KMH).

    Args:
        targets: Current targets
        rng: Seed or numpy Generator (None = fresh entropy)
    """
    rng = np.random.default_rng(rng)
    targets = tuple(targets)
    speeds = rng.integers(RANDOM_SPEED_MIN_KMH, RANDOM_SPEED_MAX_KMH, size=len(targets))
    return tuple(
        replace(t, radial_speed_kmh=float(speed)) for t, speed in zip(targets, speeds)
    )

