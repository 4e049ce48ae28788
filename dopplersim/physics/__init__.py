"""
DopplerSim Physics Package

Doppler-shift and DFT-resolution physics for CW traffic radar simulation.

Modules:
    - constants: Physical constants (SI units) and default radar parameters
    - doppler: Doppler shift, inverse Doppler, resolution and Nyquist limits
    - presets: Named radar band configurations
"""

from .constants import (
    DEFAULT_FFT_SIZE,
    DEFAULT_FREQUENCY_GHZ,
    DEFAULT_SAMPLE_RATE_HZ,
    SPEED_LIMIT_KMH,
    SPEED_OF_LIGHT,
)
from .doppler import (
    doppler_shift_hz,
    fold_alias_hz,
    frequency_resolution_hz,
    max_unambiguous_speed_kmh,
    nearest_bin_index,
    observation_time_ms,
    speed_from_shift_kmh,
    speed_resolution_kmh,
    validate_traffic_radar_example,
    wavelength_mm,
)
from .presets import RADAR_PRESETS, RadarPreset, get_preset, get_preset_names

__all__ = [
    # Constants
    "SPEED_OF_LIGHT",
    "DEFAULT_FREQUENCY_GHZ",
    "DEFAULT_SAMPLE_RATE_HZ",
    "DEFAULT_FFT_SIZE",
    "SPEED_LIMIT_KMH",
    # Doppler / DFT
    "doppler_shift_hz",
    "speed_from_shift_kmh",
    "wavelength_mm",
    "frequency_resolution_hz",
    "speed_resolution_kmh",
    "max_unambiguous_speed_kmh",
    "observation_time_ms",
    "fold_alias_hz",
    "nearest_bin_index",
    "validate_traffic_radar_example",
    # Presets
    "RadarPreset",
    "RADAR_PRESETS",
    "get_preset",
    "get_preset_names",
]
