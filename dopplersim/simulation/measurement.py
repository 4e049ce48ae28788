"""
Speed Measurement Extraction

Reports the speed a CW traffic radar would display for its strongest
(fastest) target. The true Doppler shift is snapped to the nearest FFT
bin centre before converting back to speed, so the reported error is the
quantisation error of the finite-length FFT.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..physics.constants import SPEED_LIMIT_KMH
from ..physics.doppler import (
    doppler_shift_hz,
    max_unambiguous_speed_kmh,
    nearest_bin_index,
    speed_from_shift_kmh,
)
from .objects import RadarConfig, Target

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeasurementResult:
    """
    Truth vs measured speed for the dominant target.

    Attributes:
        true_speed_kmh: Actual closing speed [km/h]
        true_doppler_shift_hz: Exact Doppler shift [Hz]
        measured_shift_hz: Shift quantised to the nearest bin centre [Hz]
        measured_speed_kmh: Speed recovered from measured_shift_hz [km/h]
        error_kmh: measured - true [km/h]
        target_id: Id of the measured target (None if no targets)
        bin_index: Bin the shift was quantised to
        is_aliased: True speed exceeds the Nyquist speed, so the spectrum
                    peak sits at a folded (wrong) frequency
    """

    true_speed_kmh: float
    true_doppler_shift_hz: float
    measured_shift_hz: float
    measured_speed_kmh: float
    error_kmh: float
    target_id: Optional[int] = None
    bin_index: int = 0
    is_aliased: bool = False

    @property
    def is_speeding(self) -> bool:
        """Measured (displayed) speed exceeds the posted limit."""
        return self.measured_speed_kmh > SPEED_LIMIT_KMH

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "target_id": self.target_id,
            "true_speed_kmh": self.true_speed_kmh,
            "true_doppler_shift_hz": self.true_doppler_shift_hz,
            "bin_index": self.bin_index,
            "measured_shift_hz": self.measured_shift_hz,
            "measured_speed_kmh": self.measured_speed_kmh,
            "error_kmh": self.error_kmh,
            "is_speeding": self.is_speeding,
            "is_aliased": self.is_aliased,
        }


NO_TARGET = MeasurementResult(
    true_speed_kmh=0.0,
    true_doppler_shift_hz=0.0,
    measured_shift_hz=0.0,
    measured_speed_kmh=0.0,
    error_kmh=0.0,
)


def select_fastest_target(targets: Sequence[Target]) -> Optional[Target]:
    """
    Target with the highest closing speed, or None for an empty list.

    Ties resolve to the first occurrence in input order.
    """
    best = None
    for target in targets:
        if best is None or target.radial_speed_kmh > best.radial_speed_kmh:
            best = target
    return best


def compute_measurement(config: RadarConfig, targets: Sequence[Target]) -> MeasurementResult:
    """
    Simulate the radar's speed reading for the fastest target.

    measured_shift = round(fd / Δf) * Δf   (halves round up)
    measured_speed = c * measured_shift / (2 * f0)

    No alias folding is applied here: a target beyond the Nyquist speed
    is reported from its true shift and flagged with is_aliased.

    Args:
        config: Radar configuration
        targets: Target snapshot (read only)

    Returns:
        MeasurementResult; all zeros when there are no targets
    """
    target = select_fastest_target(targets)
    if target is None:
        return NO_TARGET

    freq_res = config.frequency_resolution_hz
    true_shift = doppler_shift_hz(target.radial_speed_kmh, config.frequency_ghz)
    bin_index = nearest_bin_index(true_shift / freq_res)
    measured_shift = bin_index * freq_res
    measured_speed = speed_from_shift_kmh(measured_shift, config.frequency_ghz)

    result = MeasurementResult(
        true_speed_kmh=target.radial_speed_kmh,
        true_doppler_shift_hz=true_shift,
        measured_shift_hz=measured_shift,
        measured_speed_kmh=measured_speed,
        error_kmh=measured_speed - target.radial_speed_kmh,
        target_id=target.target_id,
        bin_index=bin_index,
        is_aliased=target.radial_speed_kmh
        > max_unambiguous_speed_kmh(config.baseband_sample_rate_hz, config.frequency_ghz),
    )
    logger.debug("Measurement: %s", result.to_dict())
    return result
