"""
Baseband Spectrum Synthesis

Analytic model of the positive-frequency half of an N-point FFT of a CW
Doppler radar's baseband signal. No waveform is sampled: each target's
energy is placed directly into the bin its (aliased) Doppler shift falls
into, on top of a random noise floor and static DC clutter.

Model:
    - Noise floor: uniform in [NOISE_FLOOR_MIN, NOISE_FLOOR_MAX] per bin
    - Target: MAIN_LOBE_AMPLITUDE at its bin, LEAKAGE_AMPLITUDE either side
    - Clutter: DC_CLUTTER_AMPLITUDE at bin 0, DC_ADJACENT_AMPLITUDE at bin 1

Reference: Richards, "Fundamentals of Radar Signal Processing", 2nd Ed., Ch. 5
"""

import logging
from collections import abc
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence

import numpy as np

from ..errors import ConfigurationError
from ..physics.doppler import (
    doppler_shift_hz,
    fold_alias_hz,
    nearest_bin_index,
    speed_from_shift_kmh,
)
from .objects import RadarConfig, SeedLike, Target

logger = logging.getLogger(__name__)

NOISE_FLOOR_MIN = 2.0
NOISE_FLOOR_MAX = 4.0
MAIN_LOBE_AMPLITUDE = 100.0
LEAKAGE_AMPLITUDE = 30.0
DC_CLUTTER_AMPLITUDE = 150.0
DC_ADJACENT_AMPLITUDE = 50.0

# Bins 0 and 1 carry static clutter
CLUTTER_BINS = 2

# Display window never narrower than this [km/h]
MIN_DISPLAY_SPEED_KMH = 200.0
DISPLAY_SPEED_FRACTION = 0.8


@dataclass(frozen=True)
class SpectrumBin:
    """
    One positive-frequency FFT bin.

    Attributes:
        index: Bin number, 0 <= index < N/2
        frequency_hz: index * Fs / N [Hz]
        equivalent_speed_kmh: Closing speed whose Doppler shift is frequency_hz [km/h]
        amplitude: Synthetic power (relative units)
    """

    index: int
    frequency_hz: float
    equivalent_speed_kmh: float
    amplitude: float


class Spectrum(abc.Sequence):
    """
    Ordered, read-only sequence of SpectrumBin backed by numpy arrays.

    Column arrays are exposed directly for vectorised consumers; they are
    flagged non-writeable so a computed spectrum cannot be altered in place.
    """

    def __init__(
        self,
        index: np.ndarray,
        frequency_hz: np.ndarray,
        equivalent_speed_kmh: np.ndarray,
        amplitude: np.ndarray,
    ):
        self.index = index
        self.frequency_hz = frequency_hz
        self.equivalent_speed_kmh = equivalent_speed_kmh
        self.amplitude = amplitude
        for column in (self.index, self.frequency_hz, self.equivalent_speed_kmh, self.amplitude):
            column.flags.writeable = False

    def __len__(self) -> int:
        return len(self.index)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [self[j] for j in range(*i.indices(len(self)))]
        return SpectrumBin(
            index=int(self.index[i]),
            frequency_hz=float(self.frequency_hz[i]),
            equivalent_speed_kmh=float(self.equivalent_speed_kmh[i]),
            amplitude=float(self.amplitude[i]),
        )

    def __iter__(self) -> Iterator[SpectrumBin]:
        for i in range(len(self)):
            yield self[i]

    def peak_index(self) -> Optional[int]:
        """Index of the strongest bin outside the DC clutter, or None."""
        if len(self) <= CLUTTER_BINS:
            return None
        return int(self.index[CLUTTER_BINS + int(np.argmax(self.amplitude[CLUTTER_BINS:]))])

    def crop_for_display(self, max_unambiguous_speed_kmh: float) -> "Spectrum":
        """
        Keep bins below the chart's visual speed cut-off.

        cutoff = max(200 km/h, 0.8 * v_max), so the bin structure stays
        visible at realistic traffic speeds.
        """
        cutoff = max(MIN_DISPLAY_SPEED_KMH, max_unambiguous_speed_kmh * DISPLAY_SPEED_FRACTION)
        mask = self.equivalent_speed_kmh < cutoff
        return Spectrum(
            index=self.index[mask],
            frequency_hz=self.frequency_hz[mask],
            equivalent_speed_kmh=self.equivalent_speed_kmh[mask],
            amplitude=self.amplitude[mask],
        )

    def to_dict(self) -> Dict[str, List[Any]]:
        """Convert to column lists for JSON export."""
        return {
            "index": self.index.tolist(),
            "frequency_hz": self.frequency_hz.tolist(),
            "equivalent_speed_kmh": self.equivalent_speed_kmh.tolist(),
            "amplitude": self.amplitude.tolist(),
        }


def require_spectrum_bins(config: RadarConfig) -> None:
    """
    Check that config leaves room for the DC clutter bins.

    Raises:
        ConfigurationError: If N // 2 < CLUTTER_BINS
    """
    if config.num_bins < CLUTTER_BINS:
        raise ConfigurationError(
            f"fft_size must be >= {2 * CLUTTER_BINS} to synthesise a spectrum, got {config.fft_size}"
        )


def synthesize_spectrum(
    config: RadarConfig, targets: Sequence[Target], noise_source: SeedLike = None
) -> Spectrum:
    """
    Build the discretised baseband power spectrum for a set of targets.

    Steps:
        1. Noise floor from noise_source
        2. Per moving target: Doppler shift -> alias fold -> nearest bin,
           main lobe plus leakage into the neighbouring bins (clamped at
           the array edges)
        3. DC clutter on bins 0 and 1

    Targets sharing a bin accumulate additively.

    Args:
        config: Radar configuration
        targets: Target snapshot (read only)
        noise_source: Seed or numpy Generator for the noise floor
                      (None = fresh entropy)

    Returns:
        Spectrum with N // 2 bins

    Raises:
        ConfigurationError: If N // 2 < 2 (no room for the clutter bins) or a
                            target speed overflows the Doppler shift
    """
    require_spectrum_bins(config)
    num_bins = config.num_bins

    freq_res = config.frequency_resolution_hz
    rng = np.random.default_rng(noise_source)

    amplitude = rng.uniform(NOISE_FLOOR_MIN, NOISE_FLOOR_MAX, size=num_bins)

    for target in targets:
        if target.radial_speed_kmh <= 0:
            continue

        shift = doppler_shift_hz(target.radial_speed_kmh, config.frequency_ghz)
        effective = fold_alias_hz(shift, config.baseband_sample_rate_hz)
        bin_index = nearest_bin_index(effective / freq_res)

        if bin_index >= num_bins:
            # Folded frequency within half a bin of Nyquist (N odd: rounds to N//2 + 1)
            logger.debug(
                "Target %s at %.1f Hz rounds past the last bin; not drawn",
                target.target_id,
                effective,
            )
            continue
        assert bin_index >= 0, f"alias fold produced bin {bin_index}"

        amplitude[bin_index] += MAIN_LOBE_AMPLITUDE
        if bin_index > 0:
            amplitude[bin_index - 1] += LEAKAGE_AMPLITUDE
        if bin_index < num_bins - 1:
            amplitude[bin_index + 1] += LEAKAGE_AMPLITUDE

    amplitude[0] += DC_CLUTTER_AMPLITUDE
    amplitude[1] += DC_ADJACENT_AMPLITUDE

    index = np.arange(num_bins)
    frequency = index * freq_res
    speed = np.array([speed_from_shift_kmh(f, config.frequency_ghz) for f in frequency])

    logger.debug(
        "Synthesised %d bins (%.3f Hz/bin) for %d targets", num_bins, freq_res, len(targets)
    )

    return Spectrum(
        index=index,
        frequency_hz=frequency,
        equivalent_speed_kmh=speed,
        amplitude=amplitude,
    )
