"""
Configuration utilities for the missing-hour filler

Provides utilities for loading configuration from config.json and
overriding individual values via command-line arguments.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_CONFIG: Dict[str, Any] = {
    "datetime_column": "dateTime",
    "name_column": "name",
    "holiday_column": "holiday",
    "sentinel": "-1",
    # Columns that repeat the missing hour in placeholder rows instead of the sentinel
    "echo_columns": ["mapTime"],
    "strict_ordering": False,
    "output_suffix": ".filled.csv",
}

# Keys whose values are always written or matched as text, never coerced
TEXT_KEYS = {"datetime_column", "name_column", "holiday_column", "sentinel", "output_suffix"}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from config.json

    Args:
        config_path: Path to config.json (default: same directory as this file)

    Returns:
        Dict with configuration values; keys missing from the file take
        their DEFAULT_CONFIG value
    """
    if config_path is None:
        config_path = Path(__file__).parent / "config.json"

    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path.exists():
        with open(config_path, "r") as f:
            config.update(json.load(f))
    config["echo_columns"] = as_column_list(config.get("echo_columns"))
    return config


def as_column_list(value: Any) -> List[str]:
    """Normalize a column list given as a list or a comma-separated string."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(c).strip() for c in value if str(c).strip()]


def parse_config_value(value: str) -> Any:
    """
    Parse a config value string to appropriate Python type

    Args:
        value: String value to parse

    Returns:
        Parsed value (bool, int, float, or str)
    """
    value = value.strip()

    # Boolean
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    # Number (int or float)
    if value.replace(".", "").replace("-", "").isdigit():
        try:
            return float(value) if "." in value else int(value)
        except ValueError:
            return value

    # String
    return value


def apply_config_overrides(
    config: Dict[str, Any], overrides: List[str], verbose: bool = True
) -> Dict[str, Any]:
    """
    Apply command-line config overrides to a config dict

    Args:
        config: Configuration dict to modify (will be modified in-place)
        overrides: List of "KEY=VALUE" override strings
        verbose: If True, print override changes

    Returns:
        Modified config dict (same object as input)

    Example:
        >>> config = load_config()
        >>> apply_config_overrides(config, ["strict_ordering=true", "sentinel=NA"])
    """
    if not overrides:
        return config

    if verbose:
        print("Applying config overrides:")

    for override in overrides:
        if "=" not in override:
            if verbose:
                print(f"  Warning: Invalid override format '{override}' (expected KEY=VALUE)")
            continue

        key, value = override.split("=", 1)
        key = key.strip()

        original_value = config.get(key)
        if key == "echo_columns":
            parsed_value: Any = as_column_list(value)
        elif key in TEXT_KEYS:
            parsed_value = value.strip()
        else:
            parsed_value = parse_config_value(value)

        config[key] = parsed_value

        if verbose:
            print(f"  {key}: {original_value} -> {parsed_value}")

    if verbose:
        print()

    return config


def add_config_override_argument(parser):
    """
    Add --config-override argument to an ArgumentParser

    Args:
        parser: argparse.ArgumentParser instance

    Example:
        >>> import argparse
        >>> parser = argparse.ArgumentParser()
        >>> add_config_override_argument(parser)
        >>> args = parser.parse_args()
        >>> config = load_config()
        >>> apply_config_overrides(config, args.config_override or [])
    """
    parser.add_argument(
        "--config-override",
        action="append",
        metavar="KEY=VALUE",
        help=(
            "Override config values (can be used multiple times). "
            "Format: KEY=VALUE. Boolean values: true/false. "
            "echo_columns takes a comma-separated list. "
            "Examples: --config-override strict_ordering=true "
            "--config-override echo_columns=mapTime,fixedTime"
        ),
    )
