"""Preset scenario generators for gravity simulations."""

from typing import List

from gravity_lace.presets.base import Preset
from gravity_lace.presets.cluster import RandomCluster
from gravity_lace.presets.solar_system import SolarSystem
from gravity_lace.presets.two_body import TwoBodyOrbit

PRESETS = {
    "two_body": TwoBodyOrbit,
    "solar_system": SolarSystem,
    "cluster": RandomCluster,
}


def list_presets() -> List[str]:
    return list(PRESETS.keys())


def get_preset(name: str, **kwargs) -> Preset:
    """Instantiate a preset by name.

    Raises:
        ValueError: If the preset is unknown
    """
    preset_class = PRESETS.get(name.lower())
    if preset_class is None:
        raise ValueError(f"Unknown preset: {name}. Available: {list_presets()}")
    return preset_class(**kwargs)


__all__ = [
    "Preset",
    "RandomCluster",
    "SolarSystem",
    "TwoBodyOrbit",
    "get_preset",
    "list_presets",
]
