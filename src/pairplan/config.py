"""
Configuration management for pairplan.

Loads and validates TOML config against strict bounds.
All tunable parameters are bounded and validated at startup.
"""

import copy
import os
from pathlib import Path
from typing import Dict, Any, Optional
import toml
import logging

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when config validation fails."""
    pass


class Config:
    """Configuration loader and validator."""

    PARAM_BOUNDS = {
        "plan": {
            "group_size": (2, 10),
            "strategy": None,  # Checked against PARAM_CHOICES
            "seed": None,
        },
        "items": {
            "source_path": None,
        },
        "execute": {
            "retry_delay_seconds": (0, 600),
            "max_retries": (0, 100),
        },
        "cache": {
            "results_path": None,
        },
        "report": {
            "top_n": (1, 1000),
        },
    }

    PARAM_CHOICES = {
        "plan": {
            "strategy": ("naive", "greedy_anchor", "global_greedy"),
        },
    }

    DEFAULT_CONFIG = {
        "config_version": "1.0",
        "plan": {
            "group_size": 5,
            "strategy": "global_greedy",
        },
        "items": {
            "source_path": "",  # Empty: built-in US states
        },
        "execute": {
            "retry_delay_seconds": 15,
            "max_retries": 5,
        },
        "cache": {
            "results_path": "data/results.json",
        },
        "report": {
            "top_n": 10,
        },
    }

    def __init__(self, config_dict: Dict[str, Any]):
        """Initialize config from dictionary."""
        self.data = config_dict
        self._validate()

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """
        Load config from TOML file.

        Args:
            config_path: Path to pairplan.toml. If None, uses PAIRPLAN_CONFIG_PATH env var
                        or defaults to configs/pairplan.toml.

        Returns:
            Config instance.

        Raises:
            ConfigError: If config is invalid or unreadable.
        """
        if config_path is None:
            config_path = os.getenv("PAIRPLAN_CONFIG_PATH", "configs/pairplan.toml")

        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
            return cls(copy.deepcopy(cls.DEFAULT_CONFIG))

        try:
            config_dict = toml.load(config_path)
        except (toml.TomlDecodeError, OSError) as e:
            raise ConfigError(f"Failed to load config from {config_path}: {e}")

        logger.info(f"Loaded config from {config_path}")
        return cls(config_dict)

    def _validate(self) -> None:
        """
        Validate all config parameters against bounds.

        Raises:
            ConfigError: If any parameter is out of bounds.
        """
        for section, params in self.PARAM_BOUNDS.items():
            if section not in self.data:
                logger.warning(f"Missing config section: {section}. Using defaults.")
                self.data[section] = copy.deepcopy(self.DEFAULT_CONFIG.get(section, {}))
                continue

            section_data = self.data[section]

            for param, bounds in params.items():
                if param not in section_data:
                    default_val = self.DEFAULT_CONFIG.get(section, {}).get(param)
                    if default_val is not None:
                        logger.warning(f"Missing param {section}.{param}. Using default: {default_val}")
                        section_data[param] = default_val
                    continue

                value = section_data[param]

                choices = self.PARAM_CHOICES.get(section, {}).get(param)
                if choices is not None and value not in choices:
                    raise ConfigError(
                        f"Parameter {section}.{param}={value!r} not one of {', '.join(choices)}"
                    )

                # Free-form values (no bounds check needed)
                if bounds is None:
                    continue

                # Handle numeric ranges
                if isinstance(bounds, tuple) and len(bounds) == 2:
                    min_val, max_val = bounds
                    if not (min_val <= value <= max_val):
                        raise ConfigError(
                            f"Parameter {section}.{param}={value} out of bounds "
                            f"[{min_val}, {max_val}]"
                        )

        logger.info("✅ Config validation passed")

    def get(self, section: str, param: str, default: Any = None) -> Any:
        """Get a config parameter safely."""
        return self.data.get(section, {}).get(param, default)

    def __getitem__(self, section: str) -> Dict[str, Any]:
        """Allow dict-like access: config["plan"]"""
        return self.data.get(section, {})

    def __repr__(self) -> str:
        version = self.data.get('config_version', 'unknown')
        return f"Config(version={version})"
