"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files (``tgconfig.json``),
providing defaults and validation for generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger
from .naming import UnknownConverterError, get_converter, to_snake_case
from .nullability import is_valid_directive

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "tgconfig.json"

DEFAULT_FILE_HEADING = (
    "This is an auto-generated file. Any changes made to this file can be lost "
    "when this file is regenerated. Hand-written code placed in a keep-ts block "
    "is preserved."
)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_path: Optional[str] = None
    clear_output_directory: bool = False
    metadata_files: List[str] = field(default_factory=list)

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = False
    line_ending: str = "\n"
    single_quotes: bool = False
    add_file_heading: bool = True
    file_heading: Optional[str] = None

    # Naming settings (ordered converter names)
    file_name_converters: List[str] = field(default_factory=lambda: ["pascal_to_kebab"])
    type_name_converters: List[str] = field(default_factory=list)
    member_name_converters: List[str] = field(default_factory=lambda: ["pascal_to_camel"])
    enum_value_name_converters: List[str] = field(default_factory=list)

    # Type handling
    default_nullability: str = ""
    type_mappings: Dict[str, str] = field(default_factory=dict)

    # Execution
    parallel: bool = False
    max_workers: Optional[int] = None

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        """One indentation unit."""
        return "\t" if self.use_tabs else " " * self.indent_size

    @property
    def heading_text(self) -> Optional[str]:
        if not self.add_file_heading:
            return None
        return self.file_heading or DEFAULT_FILE_HEADING


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["typescript"] = {
            "indent_size": 4,
            "file_name_converters": ["pascal_to_kebab"],
            "member_name_converters": ["pascal_to_camel"],
            "single_quotes": False,
            "custom": {
                "file_extension": ".ts",
            },
        }

    def get_config(
        self,
        language: str = "typescript",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = dict(self._configs.get(language, {}))
        base_config["custom"] = dict(base_config.get("custom", {}))

        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        if custom_config:
            self._merge(base_config, normalize_keys(custom_config))

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
        custom = source.get("custom")
        target.update({k: v for k, v in source.items() if k != "custom"})
        if custom:
            target.setdefault("custom", {}).update(custom)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return normalize_keys(config)

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys end up in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        converter_settings = {
            "file_name_converters": config.file_name_converters,
            "type_name_converters": config.type_name_converters,
            "member_name_converters": config.member_name_converters,
            "enum_value_name_converters": config.enum_value_name_converters,
        }
        for setting, names in converter_settings.items():
            for name in names:
                try:
                    get_converter(name)
                except UnknownConverterError:
                    warnings.append(f"Invalid {setting} entry: {name}")

        if config.default_nullability and not is_valid_directive(
            config.default_nullability
        ):
            warnings.append(f"Invalid default_nullability: {config.default_nullability}")

        if config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.line_ending not in ("\n", "\r\n"):
            warnings.append(f"Unusual line_ending: {config.line_ending!r}")

        if config.max_workers is not None and config.max_workers < 1:
            warnings.append(f"Invalid max_workers: {config.max_workers}")

        return warnings


def normalize_keys(config: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize camelCase keys (as written in tgconfig.json) to snake_case."""
    normalized = {}
    for key, value in config.items():
        normalized_key = to_snake_case(key)
        # Only the custom section is normalized; type mapping keys are type names
        if normalized_key == "custom" and isinstance(value, dict):
            value = normalize_keys(value)
        normalized[normalized_key] = value
    return normalized


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "typescript",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
