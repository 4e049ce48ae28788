"""
Scenario Exporter

Serializes a radar configuration and target list to the DopplerSim YAML
format, allowing users to save and share scenarios. Radar fields left at
their defaults are omitted so shared files stay short.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Sequence

import yaml

from ..physics.constants import DEFAULT_FFT_SIZE, DEFAULT_FREQUENCY_GHZ, DEFAULT_SAMPLE_RATE_HZ
from ..simulation.objects import RadarConfig, Target

logger = logging.getLogger(__name__)

_RADAR_DEFAULTS = {
    "frequency_ghz": DEFAULT_FREQUENCY_GHZ,
    "baseband_sample_rate_hz": DEFAULT_SAMPLE_RATE_HZ,
    "fft_size": DEFAULT_FFT_SIZE,
}


def scenario_to_dict(
    radar: RadarConfig,
    targets: Sequence[Target],
    scenario_name: str = "Custom Scenario",
    description: str = "",
) -> Dict[str, Any]:
    """
    Build the scenario document without writing it.

    Args:
        radar: Radar configuration
        targets: Targets in display order
        scenario_name: Human-readable scenario name
        description: Scenario description (default: export timestamp)

    Returns:
        Scenario document as nested dicts
    """
    radar_section = {
        key: value for key, value in radar.to_dict().items() if value != _RADAR_DEFAULTS[key]
    }

    return {
        "scenario": {
            "name": scenario_name,
            "description": description
            or f"Exported on {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            "version": "1.0",
        },
        "radar": radar_section,
        "targets": [t.to_dict() for t in targets],
    }


def export_scenario_to_yaml(
    radar: RadarConfig,
    targets: Sequence[Target],
    filepath: str,
    scenario_name: str = "Custom Scenario",
    description: str = "",
) -> bool:
    """
    Export a scenario to a YAML file.

    Args:
        radar: Radar configuration
        targets: Targets in display order
        filepath: Output file path
        scenario_name: Human-readable scenario name
        description: Scenario description

    Returns:
        True if export successful, False otherwise
    """
    scenario_data = scenario_to_dict(radar, targets, scenario_name, description)

    try:
        with open(filepath, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                scenario_data, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )
    except OSError as e:
        logger.warning("Failed to export scenario to %s: %s", filepath, e)
        return False

    logger.info("Scenario saved to: %s", filepath)
    return True
