"""
Building-specific logic

Height resolution and display naming for parsed buildings
"""

import math
from typing import Dict, Optional
from loguru import logger

from ...config import get_config


def _parse_height_tag(value: str) -> Optional[float]:
    cleaned = value.strip()
    if cleaned.endswith("m"):
        cleaned = cleaned[:-1].strip()
    try:
        height = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(height):
        return None
    return height


def resolve_height(
    tags: Dict[str, str],
    level_height: Optional[float] = None,
    default_height: Optional[float] = None
) -> float:
    """
    Resolve a building's extrusion height from its OSM tags

    Priority:
    1. Direct height tag ("12.5", "12.5m", " 12.5 m ")
    2. building:levels (integer) x level height
    3. Default height

    Never raises; unparseable tags fall through to the next rule.
    """
    config = get_config()
    if level_height is None:
        level_height = config.level_height_m
    if default_height is None:
        default_height = config.default_height_m

    if "height" in tags:
        height = _parse_height_tag(tags["height"])
        if height is not None:
            return height
        logger.debug(f"Failed to parse height tag '{tags['height']}'")

    if "building:levels" in tags:
        try:
            levels = int(tags["building:levels"])
            return levels * level_height
        except ValueError:
            logger.debug(f"Failed to parse building:levels '{tags['building:levels']}'")

    return default_height


def display_name(tags: Dict[str, str], position: int) -> str:
    """Name tag if present, else "Space N" (1-based position)"""
    if "name" in tags:
        return tags["name"]
    return f"Space {position}"
