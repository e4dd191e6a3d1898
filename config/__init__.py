"""
Configuration management for the chargefield visualiser.

This module provides centralized configuration handling with YAML-based
parameter files and runtime configuration management.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union
import torch


class ConfigManager:
    """
    Centralized configuration manager for viewport, physics and rendering parameters.

    Handles loading, merging, and validation of configuration files with
    support for override files and runtime parameter updates.
    """

    REQUIRED_SECTIONS = ['viewport', 'physics', 'tracer', 'rendering']

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files
        """
        if config_dir is None:
            config_dir = Path(__file__).parent
        self.config_dir = Path(config_dir)
        self._config = {}
        self._loaded_files = []

    def load_config(self, config_file: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_file: Name of configuration file (with or without .yaml extension),
                relative to the config directory, or an absolute path

        Returns:
            Dictionary containing configuration parameters

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        if not config_file.endswith('.yaml'):
            config_file += '.yaml'

        config_path = self.config_dir / config_file

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)

            self._loaded_files.append(config_file)
            return config or {}

        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing {config_file}: {e}")

    def load_base_config(self) -> Dict[str, Any]:
        """Load base configuration file."""
        return self.load_config('base_config.yaml')

    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configuration dictionaries.

        Later configurations override earlier ones for conflicting keys.

        Args:
            *configs: Configuration dictionaries to merge

        Returns:
            Merged configuration dictionary
        """
        merged = {}

        for config in configs:
            merged = self._deep_merge(merged, config)

        return merged

    def _deep_merge(self, dict1: Dict[str, Any], dict2: Dict[str, Any]) -> Dict[str, Any]:
        """
        Deep merge two dictionaries.

        Args:
            dict1: Base dictionary
            dict2: Override dictionary

        Returns:
            Merged dictionary
        """
        result = dict1.copy()

        for key, value in dict2.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def load_full_config(self, *override_files: str) -> Dict[str, Any]:
        """
        Load the base configuration and merge any override files on top.

        Args:
            *override_files: Additional configuration files, later ones winning

        Returns:
            Complete merged configuration
        """
        self._loaded_files = []
        configs = [self.load_base_config()]
        configs.extend(self.load_config(name) for name in override_files)

        full_config = self.merge_configs(*configs)

        # Validate and process configuration
        full_config = self._validate_config(full_config)

        self._config = full_config
        return full_config

    def _validate_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and process configuration parameters.

        Args:
            config: Configuration dictionary to validate

        Returns:
            Validated and processed configuration

        Raises:
            ValueError: If configuration validation fails
        """
        # Convert scientific notation strings to numbers
        config = self._process_numeric_values(config)

        # Validate required sections
        for section in self.REQUIRED_SECTIONS:
            if section not in config:
                raise ValueError(f"Required configuration section missing: {section}")

        viewport = config['viewport']
        if float(viewport['width']) <= 0 or float(viewport['height']) <= 0:
            raise ValueError("Viewport dimensions must be positive")

        physics = config['physics']
        if float(physics['coulomb_constant']) <= 0:
            raise ValueError("Coulomb constant must be positive")
        if float(physics['charge_radius']) < 0:
            raise ValueError("Charge radius must be non-negative")

        tracer = config['tracer']
        if float(tracer['step_size']) <= 0:
            raise ValueError("Tracer step size must be positive")
        if float(tracer['max_steps']) < 1:
            raise ValueError("Tracer max_steps must be at least 1")

        config['device'] = self._resolve_device(config.get('hardware', {}).get('device', 'auto'))

        return config

    def _resolve_device(self, device: str) -> str:
        """Map 'auto' to CUDA when available, otherwise CPU."""
        if device == 'auto':
            return 'cuda' if torch.cuda.is_available() else 'cpu'
        return device

    def _process_numeric_values(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process numeric strings in configuration (including scientific notation).

        PyYAML reads values such as ``8.99e9`` (no decimal point) as strings.

        Args:
            config: Configuration dictionary

        Returns:
            Configuration with processed numeric values
        """
        def convert_numeric(obj):
            if isinstance(obj, dict):
                return {k: convert_numeric(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert_numeric(item) for item in obj]
            elif isinstance(obj, str):
                try:
                    return int(obj)
                except ValueError:
                    pass
                try:
                    return float(obj)
                except ValueError:
                    return obj
            else:
                return obj

        return convert_numeric(config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Supports dot notation for nested keys (e.g., 'tracer.step_size').

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        if not self._config:
            self.load_full_config()

        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value by key.

        Supports dot notation for nested keys.

        Args:
            key: Configuration key
            value: Value to set
        """
        if not self._config:
            self.load_full_config()

        keys = key.split('.')
        config = self._config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        # Set final key
        config[keys[-1]] = value

    def save_config(self, filename: str, config: Optional[Dict[str, Any]] = None) -> Path:
        """
        Save configuration to YAML file.

        Args:
            filename: Output filename
            config: Configuration to save (uses current config if None)

        Returns:
            Path of the written file
        """
        if config is None:
            config = self._config

        if not filename.endswith('.yaml'):
            filename += '.yaml'

        output_path = self.config_dir / filename

        with open(output_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self._make_yaml_serializable(config), f, default_flow_style=False, indent=2)

        return output_path

    def _make_yaml_serializable(self, obj: Any) -> Any:
        """
        Convert object to YAML-serializable format.

        Args:
            obj: Object to convert

        Returns:
            YAML-serializable object
        """
        if isinstance(obj, dict):
            return {k: self._make_yaml_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_yaml_serializable(item) for item in obj]
        else:
            return obj

    def print_config(self, section: Optional[str] = None) -> None:
        """
        Print configuration in formatted manner.

        Args:
            section: Specific section to print (prints all if None)
        """
        if not self._config:
            self.load_full_config()

        config_to_print = self._config if section is None else self._config.get(section, {})

        print("=" * 60)
        print(f"Configuration{f' - {section}' if section else ''}")
        print("=" * 60)
        print(yaml.safe_dump(config_to_print, default_flow_style=False, indent=2))
        print("=" * 60)

    @property
    def config(self) -> Dict[str, Any]:
        """Get current configuration."""
        if not self._config:
            self.load_full_config()
        return self._config

    @property
    def loaded_files(self) -> list:
        """Get list of loaded configuration files."""
        return self._loaded_files.copy()


# Global configuration manager instance
config_manager = ConfigManager()

# Convenience functions for common operations
def load_config(*override_files: str) -> Dict[str, Any]:
    """Load full configuration."""
    return config_manager.load_full_config(*override_files)

def get_config(key: str, default: Any = None) -> Any:
    """Get configuration value by key."""
    return config_manager.get(key, default)

def print_config(section: Optional[str] = None) -> None:
    """Print configuration."""
    config_manager.print_config(section)


__all__ = [
    'ConfigManager',
    'config_manager',
    'load_config',
    'get_config',
    'print_config'
]
