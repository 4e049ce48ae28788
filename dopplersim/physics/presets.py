"""
CW Traffic Radar Presets

Band presets for common speed-enforcement radars. Each preset fixes the
carrier frequency and the baseband DSP parameters; derived quantities
(wavelength, resolution, Nyquist speed) follow from RadarConfig.

References:
    - ETSI EN 300 440 (24.05 - 24.25 GHz)
    - NHTSA, "Speed-Measuring Device Performance Specifications", 2013
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .constants import DEFAULT_FFT_SIZE, DEFAULT_FREQUENCY_GHZ, DEFAULT_SAMPLE_RATE_HZ


@dataclass(frozen=True)
class RadarPreset:
    """
    Named radar configuration.

    Attributes:
        name: Human-readable preset name
        frequency_ghz: Carrier frequency [GHz]
        baseband_sample_rate_hz: Baseband sample rate [Hz]
        fft_size: FFT length N
        description: Short note on the band's use
    """

    name: str
    frequency_ghz: float
    baseband_sample_rate_hz: float
    fft_size: int
    description: str = ""

    def to_config(self):
        """Build the RadarConfig for this preset."""
        # Import here to avoid circular dependencies
        from ..simulation.objects import RadarConfig

        return RadarConfig(
            frequency_ghz=self.frequency_ghz,
            baseband_sample_rate_hz=self.baseband_sample_rate_hz,
            fft_size=self.fft_size,
        )


RADAR_PRESETS: Dict[str, RadarPreset] = {
    # Legacy handheld units
    "X-Band (10.525 GHz)": RadarPreset(
        name="X-Band (10.525 GHz)",
        frequency_ghz=10.525,
        baseband_sample_rate_hz=DEFAULT_SAMPLE_RATE_HZ,
        fft_size=DEFAULT_FFT_SIZE,
        description="Older handheld units; half the Doppler sensitivity of K-band",
    ),
    "K-Band (24.15 GHz)": RadarPreset(
        name="K-Band (24.15 GHz)",
        frequency_ghz=DEFAULT_FREQUENCY_GHZ,
        baseband_sample_rate_hz=DEFAULT_SAMPLE_RATE_HZ,
        fft_size=DEFAULT_FFT_SIZE,
        description="Standard traffic radar band",
    ),
    # Short frame, fast update, coarse bins
    "K-Band Fast Update (24.15 GHz)": RadarPreset(
        name="K-Band Fast Update (24.15 GHz)",
        frequency_ghz=DEFAULT_FREQUENCY_GHZ,
        baseband_sample_rate_hz=DEFAULT_SAMPLE_RATE_HZ,
        fft_size=128,
        description="Short observation time at the cost of ~7.7 km/h bins",
    ),
    "Ka-Band (34.7 GHz)": RadarPreset(
        name="Ka-Band (34.7 GHz)",
        frequency_ghz=34.7,
        baseband_sample_rate_hz=DEFAULT_SAMPLE_RATE_HZ,
        fft_size=1024,
        description="Modern moving-mode units; narrow beam",
    ),
}


def get_preset(name: str) -> Optional[RadarPreset]:
    """
    Get a radar preset by name.

    Args:
        name: Preset name (e.g., "K-Band (24.15 GHz)")

    Returns:
        RadarPreset instance or None if not found
    """
    return RADAR_PRESETS.get(name)


def get_preset_names() -> List[str]:
    """Get list of available preset names."""
    return list(RADAR_PRESETS.keys())
