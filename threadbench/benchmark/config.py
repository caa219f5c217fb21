#!/usr/bin/env python3
"""
Configuration management for the threadbench suite.

This module provides a flexible configuration system that allows users to:
1. Define workload sizes and paths in a YAML config file
2. Override config values via command-line arguments
3. Use sensible defaults when no config is provided

Config file format (threadbench.yaml):
---
# Global settings
default_number_of_threads: 10
debug_mode: false

# CPU benchmark: perfect number scan
cpu:
  range_width: 1000000
  lower_bound: 33550300
  upper_bound: 33550400

# File benchmark: write/read/delete
files:
  target_dir: __target__
  filename_pattern: "text-{index:03d}.txt"
  number_of_files: 200
  total_number_of_bytes: 2000000000
  buffer_size: 8192

# Worker pools
pool:
  shutdown_timeout: 300
"""

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from threadbench.core.errors import ConfigurationError

DEFAULT_CONFIG = {
    'default_number_of_threads': 10,
    'debug_mode': False,
    'cpu': {
        'range_width': 1_000_000,
        'lower_bound': 33_550_300,
        'upper_bound': 33_550_400,
    },
    'files': {
        'target_dir': '__target__',
        'filename_pattern': 'text-{index:03d}.txt',
        'number_of_files': 200,
        'total_number_of_bytes': 2_000_000_000,
        'buffer_size': 1024 * 8,
    },
    'pool': {
        'shutdown_timeout': 5 * 60,
    },
}


@dataclass(frozen=True)
class CpuWorkloadConfig:
    """Parameters of the perfect number scan."""
    range_width: int = DEFAULT_CONFIG['cpu']['range_width']
    lower_bound: int = DEFAULT_CONFIG['cpu']['lower_bound']
    upper_bound: int = DEFAULT_CONFIG['cpu']['upper_bound']

    def __post_init__(self):
        if self.range_width < 1:
            raise ConfigurationError("range_width must be at least 1", config_key="cpu.range_width")
        if self.lower_bound < 1:
            raise ConfigurationError("lower_bound must be at least 1", config_key="cpu.lower_bound")
        if self.upper_bound < self.lower_bound:
            raise ConfigurationError(
                f"upper_bound ({self.upper_bound}) must not be below lower_bound ({self.lower_bound})",
                config_key="cpu.upper_bound",
            )

    @classmethod
    def from_dict(cls, section: Dict[str, Any]) -> "CpuWorkloadConfig":
        return cls(
            range_width=int(section['range_width']),
            lower_bound=int(section['lower_bound']),
            upper_bound=int(section['upper_bound']),
        )


@dataclass(frozen=True)
class FileWorkloadConfig:
    """Parameters of the write/read/delete file benchmark."""
    target_dir: Path = Path(DEFAULT_CONFIG['files']['target_dir'])
    filename_pattern: str = DEFAULT_CONFIG['files']['filename_pattern']
    number_of_files: int = DEFAULT_CONFIG['files']['number_of_files']
    total_number_of_bytes: int = DEFAULT_CONFIG['files']['total_number_of_bytes']
    buffer_size: int = DEFAULT_CONFIG['files']['buffer_size']

    def __post_init__(self):
        object.__setattr__(self, 'target_dir', Path(self.target_dir))
        if self.number_of_files < 1:
            raise ConfigurationError("number_of_files must be at least 1", config_key="files.number_of_files")
        if self.buffer_size < 1:
            raise ConfigurationError("buffer_size must be at least 1", config_key="files.buffer_size")
        if self.total_number_of_bytes < 0:
            raise ConfigurationError(
                "total_number_of_bytes must not be negative", config_key="files.total_number_of_bytes"
            )
        try:
            self.filename_pattern.format(index=1)
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(
                f"filename_pattern must use an '{{index}}' field: {e}", config_key="files.filename_pattern"
            )

    @property
    def file_size(self) -> int:
        return self.total_number_of_bytes // self.number_of_files

    @property
    def number_of_writes(self) -> int:
        return self.file_size // self.buffer_size

    @classmethod
    def from_dict(cls, section: Dict[str, Any]) -> "FileWorkloadConfig":
        return cls(
            target_dir=Path(section['target_dir']),
            filename_pattern=str(section['filename_pattern']),
            number_of_files=int(section['number_of_files']),
            total_number_of_bytes=int(section['total_number_of_bytes']),
            buffer_size=int(section['buffer_size']),
        )


class BenchmarkConfig:
    """Configuration manager for the benchmark suite."""

    DEFAULT_CONFIG_FILENAME = "threadbench.yaml"

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to YAML config file. If None, will search for
                        default config file in current directory and home directory.
        """
        self.config_file = Path(config_file) if config_file is not None else None
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._apply_defaults()

    def _find_default_config(self) -> Optional[Path]:
        """Search for default config file in common locations."""
        search_paths = [
            Path.cwd() / self.DEFAULT_CONFIG_FILENAME,
            Path.home() / ".threadbench" / self.DEFAULT_CONFIG_FILENAME,
        ]
        for path in search_paths:
            if path.exists():
                return path
        return None

    def _load_config(self):
        """Load configuration from YAML file."""
        if self.config_file is None:
            self.config_file = self._find_default_config()

        if self.config_file is None:
            # No config file found, use empty config (will use defaults)
            return

        if not self.config_file.exists():
            raise ConfigurationError(f"Config file not found: {self.config_file}")

        try:
            with open(self.config_file, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse configuration file {self.config_file}: {e}")

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Configuration file {self.config_file} must contain a mapping")
        self.config = loaded

    def _apply_defaults(self):
        """Apply default values for missing configuration."""
        for key, value in DEFAULT_CONFIG.items():
            if isinstance(value, dict):
                section = self.config.get(key)
                if section is None:
                    section = {}
                if not isinstance(section, dict):
                    raise ConfigurationError(f"Section '{key}' must be a mapping", config_key=key)
                for sub_key, sub_value in value.items():
                    section.setdefault(sub_key, sub_value)
                self.config[key] = section
            elif key not in self.config:
                self.config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self.config.get(key, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get a configuration section."""
        return self.config.get(section, {})

    def get_cpu_config(self) -> CpuWorkloadConfig:
        """Get CPU benchmark configuration."""
        try:
            return CpuWorkloadConfig.from_dict(self.get_section('cpu'))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid cpu configuration: {e}", config_key="cpu")

    def get_file_config(self) -> FileWorkloadConfig:
        """Get file benchmark configuration."""
        try:
            return FileWorkloadConfig.from_dict(self.get_section('files'))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid files configuration: {e}", config_key="files")

    def get_pool_timeout(self) -> float:
        """Seconds each pool may take to drain before its phase is abandoned."""
        try:
            timeout = float(self.get_section('pool')['shutdown_timeout'])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid shutdown_timeout: {e}", config_key="pool.shutdown_timeout")
        if timeout <= 0:
            raise ConfigurationError("shutdown_timeout must be positive", config_key="pool.shutdown_timeout")
        return timeout

    def get_default_number_of_threads(self) -> int:
        try:
            value = int(self.get('default_number_of_threads'))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid default_number_of_threads: {e}", config_key="default_number_of_threads"
            )
        if value < 1:
            raise ConfigurationError(
                "default_number_of_threads must be at least 1", config_key="default_number_of_threads"
            )
        return value

    def print_config(self):
        """Print current configuration."""
        print("\n" + "="*70)
        print("BENCHMARK CONFIGURATION")
        print("="*70)

        if self.config_file:
            print(f"\nConfig file: {self.config_file}")
        else:
            print("\nUsing default configuration (no config file found)")

        print("\nGlobal Settings:")
        print(f"  default_number_of_threads: {self.config.get('default_number_of_threads')}")
        print(f"  debug_mode: {self.config.get('debug_mode')}")

        for section in ('cpu', 'files', 'pool'):
            print(f"\n{section.upper()} Configuration:")
            for key, value in self.get_section(section).items():
                print(f"  {key}: {value}")

        print("="*70 + "\n")

    @staticmethod
    def save_example_config(output_path: Path):
        """Save an example configuration file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w') as f:
            yaml.dump(copy.deepcopy(DEFAULT_CONFIG), f, default_flow_style=False, sort_keys=False)
        print(f"Example config saved to: {output_path}")


def merge_config_with_args(config: BenchmarkConfig, args) -> BenchmarkConfig:
    """
    Merge command-line arguments into the configuration.
    Command-line arguments take precedence over config file values.

    Args:
        config: BenchmarkConfig instance
        args: Parsed command-line arguments

    Returns:
        The same BenchmarkConfig, updated in place
    """
    if getattr(args, 'target_dir', None) is not None:
        config.config['files']['target_dir'] = str(args.target_dir)
    if getattr(args, 'pool_timeout', None) is not None:
        config.config['pool']['shutdown_timeout'] = args.pool_timeout
    # Only override if explicitly set to True (action="store_true")
    if getattr(args, 'debug', False) is True:
        config.config['debug_mode'] = True
    return config


def main():
    """CLI for generating example config files."""
    import argparse

    parser = argparse.ArgumentParser(
        description="threadbench Configuration Manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate example config file
  python -m threadbench.benchmark.config --generate

  # Generate config at specific location
  python -m threadbench.benchmark.config --generate --output my_config.yaml

  # Show current configuration
  python -m threadbench.benchmark.config --show --config my_config.yaml
"""
    )

    parser.add_argument(
        "--generate",
        action="store_true",
        help="Generate an example configuration file"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path.cwd() / BenchmarkConfig.DEFAULT_CONFIG_FILENAME,
        help="Output path for generated config (default: ./threadbench.yaml)"
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file to show"
    )

    args = parser.parse_args()

    if args.generate:
        BenchmarkConfig.save_example_config(args.output)
        print("\nEdit this file to customize workload sizes for your system.")
        print("Then place it in one of these locations:")
        print("  1. Current directory: ./threadbench.yaml")
        print("  2. Home directory: ~/.threadbench/threadbench.yaml")
        print("\nOr specify it with --config when running benchmarks.")
    elif args.show:
        try:
            config = BenchmarkConfig(args.config)
        except ConfigurationError as e:
            print(f"Error: {e}")
            return 1
        config.print_config()
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
