"""
DopplerSim I/O Package

YAML scenario loading and export.
"""

from .exporter import export_scenario_to_yaml, scenario_to_dict
from .scenario_loader import ScenarioConfig, ScenarioLoader, load_scenario_from_dict

__all__ = [
    "ScenarioConfig",
    "ScenarioLoader",
    "load_scenario_from_dict",
    "export_scenario_to_yaml",
    "scenario_to_dict",
]
