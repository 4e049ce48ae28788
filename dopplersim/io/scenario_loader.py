"""
Scenario Loader

YAML-based scenario configuration parser for DopplerSim.

Loads a radar configuration and target list from YAML files and creates
configured DopplerRadarSimulation instances.

Scenario format:
    scenario:
      name: Motorway
      description: Three lanes of traffic
    radar:                       # any field may be omitted (K-band defaults)
      frequency_ghz: 24.15
      baseband_sample_rate_hz: 44100
      fft_size: 512
    targets:                     # either a list of mappings ...
      - {id: 0, speed_kmh: 80, lane: 0}
    speeds: "80,110,60"          # ... or a speed list (string or sequence)

Usage:
    loader = ScenarioLoader('scenarios/motorway.yaml')
    sim = loader.create_simulation(seed=1)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import yaml

from ..errors import ConfigurationError
from ..physics.constants import DEFAULT_TARGET_SPEEDS_KMH, NUM_LANES
from ..simulation.engine import DopplerRadarSimulation
from ..simulation.objects import (
    RadarConfig,
    Target,
    parse_speed_list,
    targets_from_speeds,
    validate_targets,
)

logger = logging.getLogger(__name__)


@dataclass
class ScenarioConfig:
    """Complete scenario configuration."""

    name: str = "Default Scenario"
    description: str = ""
    radar: RadarConfig = field(default_factory=RadarConfig)
    targets: Tuple[Target, ...] = field(
        default_factory=lambda: targets_from_speeds(DEFAULT_TARGET_SPEEDS_KMH)
    )


def _as_int(value: Any, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{what} must be an integer, got {value!r}") from e


def _parse_targets(data: Dict[str, Any]) -> Tuple[Target, ...]:
    """Parse the 'targets' list or the 'speeds' shorthand."""
    if "targets" in data and data["targets"] is not None:
        entries = data["targets"]
        if not isinstance(entries, list):
            raise ConfigurationError("'targets' must be a list")

        targets = []
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict) or "speed_kmh" not in entry:
                raise ConfigurationError(f"Target #{idx} must be a mapping with 'speed_kmh'")
            targets.append(
                Target(
                    target_id=_as_int(entry.get("id", idx), f"Target #{idx} id"),
                    radial_speed_kmh=entry["speed_kmh"],
                    lane=_as_int(entry.get("lane", idx % NUM_LANES), f"Target #{idx} lane"),
                )
            )
        return validate_targets(targets)

    if "speeds" in data and data["speeds"] is not None:
        speeds = data["speeds"]
        if isinstance(speeds, str):
            return targets_from_speeds(parse_speed_list(speeds))
        if isinstance(speeds, list):
            return targets_from_speeds(speeds)
        raise ConfigurationError("'speeds' must be a string or a list")

    return targets_from_speeds(DEFAULT_TARGET_SPEEDS_KMH)


def load_scenario_from_dict(data: Optional[Dict[str, Any]]) -> ScenarioConfig:
    """
    Parse an in-memory scenario document.

    Args:
        data: Parsed YAML document (None = empty document, all defaults)

    Returns:
        ScenarioConfig

    Raises:
        ConfigurationError: If the document is malformed or holds invalid values
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Scenario document must be a mapping")

    meta = data.get("scenario") or {}
    radar = data.get("radar") or {}
    if not isinstance(meta, dict) or not isinstance(radar, dict):
        raise ConfigurationError("'scenario' and 'radar' sections must be mappings")

    return ScenarioConfig(
        name=str(meta.get("name", "Unnamed Scenario")),
        description=str(meta.get("description", "")),
        radar=RadarConfig.from_dict(radar),
        targets=_parse_targets(data),
    )


class ScenarioLoader:
    """
    Loads simulation scenarios from YAML files.

    Usage:
        loader = ScenarioLoader('scenarios/motorway.yaml')
        config = loader.get_config()
        sim = loader.create_simulation()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize scenario loader.

        Args:
            filepath: Path to YAML scenario file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[ScenarioConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> bool:
        """
        Load scenario from YAML file.

        Args:
            filepath: Path to YAML scenario file

        Returns:
            True if loaded successfully

        Raises:
            FileNotFoundError: If file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ConfigurationError: If the scenario contents are invalid
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Scenario file not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            self.data = yaml.safe_load(f) or {}

        self._config = load_scenario_from_dict(self.data)
        logger.info(
            "Loaded scenario '%s' from %s (%d targets)",
            self._config.name,
            filepath,
            len(self._config.targets),
        )
        return True

    def get_config(self) -> ScenarioConfig:
        """
        Get the parsed scenario.

        Raises:
            ValueError: If no scenario is loaded
        """
        if not self._config:
            raise ValueError("No scenario loaded. Call load() first.")
        return self._config

    def create_simulation(self, seed: Optional[int] = None) -> DopplerRadarSimulation:
        """
        Create a DopplerRadarSimulation from the loaded scenario.

        Raises:
            ValueError: If no scenario is loaded
        """
        config = self.get_config()

        return DopplerRadarSimulation(config=config.radar, targets=config.targets, seed=seed)
