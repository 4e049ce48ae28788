"""
DopplerSim Source Package

CW Doppler traffic radar simulation:
- Doppler shift physics and DFT resolution limits
- Synthesised baseband spectrum (aliasing, leakage, DC clutter)
- Quantised speed measurement vs ground truth
- YAML scenario loading and export
"""

from dopplersim.errors import ConfigurationError, DopplerSimError
from dopplersim.io import ScenarioLoader, export_scenario_to_yaml
from dopplersim.physics import (
    SPEED_OF_LIGHT,
    doppler_shift_hz,
    frequency_resolution_hz,
    max_unambiguous_speed_kmh,
    speed_from_shift_kmh,
    speed_resolution_kmh,
    wavelength_mm,
)
from dopplersim.simulation import (
    DerivedMetrics,
    DopplerRadarSimulation,
    MeasurementResult,
    RadarConfig,
    Spectrum,
    SpectrumBin,
    Target,
    compute_derived_metrics,
    compute_measurement,
    synthesize_spectrum,
)

__version__ = "1.0.0"
__author__ = "DopplerSim Contributors"

__all__ = [
    # Errors
    "DopplerSimError",
    "ConfigurationError",
    # Physics
    "SPEED_OF_LIGHT",
    "doppler_shift_hz",
    "speed_from_shift_kmh",
    "wavelength_mm",
    "frequency_resolution_hz",
    "speed_resolution_kmh",
    "max_unambiguous_speed_kmh",
    # Simulation
    "RadarConfig",
    "Target",
    "Spectrum",
    "SpectrumBin",
    "MeasurementResult",
    "DerivedMetrics",
    "compute_derived_metrics",
    "compute_measurement",
    "synthesize_spectrum",
    "DopplerRadarSimulation",
    # I/O
    "ScenarioLoader",
    "export_scenario_to_yaml",
]
