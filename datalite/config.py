"""
Datalite Configuration System

Manages configuration for the solver, result output and logging.
Supports both YAML and JSON formats.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict

import yaml

from .errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SolverConfig:
    """Fixpoint solver configuration"""
    max_iterations: Optional[int] = None  # None means no cap
    trace_enabled: bool = False


@dataclass
class OutputConfig:
    """How answers are rendered by the command line"""
    terminator: str = "."
    sort_results: bool = False


@dataclass
class DataliteConfig:
    """Main Datalite configuration"""
    solver: SolverConfig = field(default_factory=SolverConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    structured_logging: bool = False

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "DataliteConfig":
        """
        Load configuration from file.

        Args:
            path: Path to config file. If None, searches for:
                  1. ~/.datalite/config.yaml (or .yml)
                  2. ~/.datalite/config.json
                  3. ./datalite_config.yaml (or .yml)
                  4. ./datalite_config.json

        Returns:
            DataliteConfig instance
        """
        if path:
            return cls._load_from_file(Path(path))

        search_paths = [
            Path.home() / ".datalite" / "config.yaml",
            Path.home() / ".datalite" / "config.yml",
            Path.home() / ".datalite" / "config.json",
            Path("datalite_config.yaml"),
            Path("datalite_config.yml"),
            Path("datalite_config.json"),
        ]

        for config_path in search_paths:
            if config_path.exists():
                return cls._load_from_file(config_path)

        return cls()

    @classmethod
    def _load_from_file(cls, path: Path) -> "DataliteConfig":
        """Load config from specific file"""
        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataliteConfig":
        """
        Create config from dictionary.

        Raises:
            ConfigError: if a section has unknown keys or the log level is unknown
        """
        config = cls()

        try:
            if 'solver' in data:
                config.solver = SolverConfig(**data['solver'])

            if 'output' in data:
                config.output = OutputConfig(**data['output'])
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        for key in ['log_level', 'log_file', 'structured_logging']:
            if key in data:
                setattr(config, key, data[key])

        config.log_level = normalize_log_level(config.log_level)
        return config

    def save(self, path: Union[str, Path]) -> None:
        """
        Save configuration to file.

        Args:
            path: Path to save config (extension determines format)
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict()

        with open(path, 'w') as f:
            if path.suffix in ['.yaml', '.yml']:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(data, f, indent=2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return {
            'solver': asdict(self.solver),
            'output': asdict(self.output),
            'log_level': self.log_level,
            'log_file': self.log_file,
            'structured_logging': self.structured_logging
        }


def normalize_log_level(level: str) -> str:
    """
    Upper-case a log level name and check that logging knows it.

    Raises:
        ConfigError: for anything but DEBUG, INFO, WARNING, ERROR or CRITICAL
    """
    name = str(level).upper()
    if name not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}")
    return name


# Global config instance
_config: Optional[DataliteConfig] = None


def get_config() -> DataliteConfig:
    """Get the global config instance"""
    global _config
    if _config is None:
        _config = DataliteConfig.load()
    return _config


def set_config(config: DataliteConfig) -> None:
    """Set the global config instance"""
    global _config
    _config = config


def reset_config() -> None:
    """Reset to default config"""
    global _config
    _config = DataliteConfig()
