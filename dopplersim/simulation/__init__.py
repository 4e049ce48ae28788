"""
DopplerSim Simulation Package

Radar/target model, spectrum synthesis and speed measurement.
"""

from .engine import (
    DerivedMetrics,
    DopplerRadarSimulation,
    SimulationSnapshot,
    compute_derived_metrics,
    simulate,
)
from .measurement import MeasurementResult, compute_measurement, select_fastest_target
from .objects import (
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
from .spectrum import Spectrum, SpectrumBin, require_spectrum_bins, synthesize_spectrum

__all__ = [
    "RadarConfig",
    "Target",
    "validate_targets",
    "targets_from_speeds",
    "parse_speed_list",
    "add_target",
    "remove_last_target",
    "update_target_speed",
    "randomize_speeds",
    "Spectrum",
    "SpectrumBin",
    "synthesize_spectrum",
    "require_spectrum_bins",
    "MeasurementResult",
    "compute_measurement",
    "select_fastest_target",
    "DerivedMetrics",
    "SimulationSnapshot",
    "compute_derived_metrics",
    "simulate",
    "DopplerRadarSimulation",
]
