"""
Validation utilities for server-side input validation.
"""
import math
import re
from typing import Any, Dict, Optional, Tuple

from games.grid import KEY_DIRECTIONS
from games.modes import Mode


def validate_mode(mode: Any) -> Tuple[bool, Optional[str], str]:
    """
    Validate a game mode selector value.

    Args:
        mode: The mode to validate

    Returns:
        (is_valid, error_message, corrected_mode)
    """
    if not mode or not isinstance(mode, str):
        return False, "Mode is required", Mode.CLASSIC.value

    normalized = mode.strip().lower()
    if normalized not in Mode.values():
        return False, f"Unknown mode: {mode}. Available: {Mode.values()}", Mode.CLASSIC.value

    return True, None, normalized


def validate_key(key: Any) -> bool:
    """Whether a key symbol is one the game reacts to."""
    return isinstance(key, str) and key in KEY_DIRECTIONS


def validate_frame_rate(fps: Any) -> Tuple[bool, Optional[str], int]:
    """
    Validate a frame rate for the host frame loop.

    Returns:
        (is_valid, error_message, corrected_value)
    """
    try:
        fps = int(fps)
    except (TypeError, ValueError):
        return False, "Frame rate must be a number", 60

    if fps < 1:
        return False, "Frame rate must be at least 1", 1

    if fps > 240:
        return False, "Frame rate must be at most 240", 240

    return True, None, fps


def validate_seed(seed: Any) -> Tuple[bool, Optional[str], Optional[int]]:
    """
    Validate an optional random seed.

    Returns:
        (is_valid, error_message, seed_or_None)
    """
    if seed is None:
        return True, None, None
    if isinstance(seed, bool):
        return False, "Seed must be an integer", None
    if isinstance(seed, str) and not re.match(r'^-?\d+$', seed.strip()):
        return False, "Seed must be an integer", None
    try:
        return True, None, int(seed)
    except (TypeError, ValueError):
        return False, "Seed must be an integer", None


def validate_config_overrides(params: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
    """
    Validate numeric game config overrides sent by the frontend.

    Args:
        params: Dictionary of override values (unknown keys are dropped)

    Returns:
        (is_valid, errors_dict, corrected_params)
    """
    CONSTRAINTS = {
        'initial_interval_ms': {'min': 50.0, 'max': 2000.0, 'default': 150.0},
        'min_interval_ms': {'min': 10.0, 'max': 1000.0, 'default': 50.0},
        'speed_factor': {'min': 0.5, 'max': 1.0, 'default': 0.9},
        'food_points': {'min': 1, 'max': 1000, 'default': 10},
    }

    errors = {}
    corrected = {}

    if not isinstance(params, dict):
        errors['config'] = "Config overrides must be an object"
        params = {}

    for key, constraint in CONSTRAINTS.items():
        if key not in params:
            continue
        value = params[key]

        try:
            value = float(value)
        except (TypeError, ValueError):
            errors[key] = f"{key} must be a number"
            corrected[key] = constraint['default']
            continue

        if not math.isfinite(value):
            errors[key] = f"{key} must be a finite number"
            corrected[key] = constraint['default']
            continue

        if value < constraint['min']:
            errors[key] = f"{key} must be at least {constraint['min']}"
            corrected[key] = constraint['min']
        elif value > constraint['max']:
            errors[key] = f"{key} must be at most {constraint['max']}"
            corrected[key] = constraint['max']
        else:
            corrected[key] = value

    if 'food_points' in corrected:
        corrected['food_points'] = int(corrected['food_points'])

    # The floor must not sit above the starting interval
    start = corrected.get('initial_interval_ms', CONSTRAINTS['initial_interval_ms']['default'])
    floor = corrected.get('min_interval_ms', CONSTRAINTS['min_interval_ms']['default'])
    if floor > start:
        errors['min_interval_ms'] = "min_interval_ms must not exceed initial_interval_ms"
        corrected['min_interval_ms'] = start

    is_valid = len(errors) == 0
    return is_valid, errors, corrected
