"""
DopplerSim Exceptions

Error taxonomy for the simulation engine. Every computation either succeeds
fully or is rejected up front with a ConfigurationError.
"""


class DopplerSimError(Exception):
    """Base class for all DopplerSim errors."""


class ConfigurationError(DopplerSimError, ValueError):
    """
    Invalid radar configuration, target list or scenario document.

    Raised instead of silently returning NaN/Infinity, e.g. for a zero FFT
    size, a non-positive carrier frequency or a negative target speed.
    """
