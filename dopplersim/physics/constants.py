"""
Physical Constants and Defaults for CW Doppler Radar Simulation

All physical constants are in SI units as per CODATA 2018.
Default radar parameters correspond to a K-band traffic radar feeding an
audio-rate baseband digitiser.

References:
    - CODATA 2018: Fundamental Physical Constants
    - ETSI EN 300 440: Short range devices, 24.05 - 24.25 GHz band
"""

from typing import Final, Tuple

# =============================================================================
# FUNDAMENTAL CONSTANTS (CODATA 2018 - Exact definitions)
# =============================================================================

SPEED_OF_LIGHT: Final[float] = 299_792_458.0
"""Speed of light in vacuum [m/s] - Exact SI definition"""

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

KMH_PER_MPS: Final[float] = 3.6
"""Kilometres per hour in one metre per second"""

HZ_PER_GHZ: Final[float] = 1e9
"""Hertz in one gigahertz"""

MM_PER_M: Final[float] = 1000.0
"""Millimetres in one metre"""

MS_PER_S: Final[float] = 1000.0
"""Milliseconds in one second"""

# =============================================================================
# DEFAULT RADAR CONFIGURATION
# =============================================================================

DEFAULT_FREQUENCY_GHZ: Final[float] = 24.15
"""K-band CW carrier frequency [GHz]"""

DEFAULT_SAMPLE_RATE_HZ: Final[float] = 44100.0
"""Baseband (audio codec) sample rate [Hz]"""

DEFAULT_FFT_SIZE: Final[int] = 512
"""FFT length N [samples]"""

# =============================================================================
# TRAFFIC SCENARIO DEFAULTS
# =============================================================================

DEFAULT_TARGET_SPEEDS_KMH: Final[Tuple[int, ...]] = (80, 110, 60)
"""Initial closing speeds of the default three-car scenario [km/h]"""

DEFAULT_NEW_TARGET_SPEED_KMH: Final[float] = 80.0
"""Speed given to a target added to an existing scenario [km/h]"""

SPEED_LIMIT_KMH: Final[float] = 100.0
"""Posted speed limit used by consumers to flag speeding targets [km/h]"""

MAX_TARGETS: Final[int] = 10
"""Maximum number of simultaneous targets in a scenario"""

NUM_LANES: Final[int] = 3
"""Number of traffic lanes targets are distributed over"""

RANDOM_SPEED_MIN_KMH: Final[int] = 40
"""Lower bound (inclusive) for randomised target speeds [km/h]"""

RANDOM_SPEED_MAX_KMH: Final[int] = 140
"""Upper bound (exclusive) for randomised target speeds [km/h]"""
