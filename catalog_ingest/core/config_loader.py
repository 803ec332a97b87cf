"""Configuration loader for ingest job settings.

Ingest settings live in an optional YAML file (``config/ingest.yaml`` by
default) and are validated into an ``IngestConfig``. Command line overrides
are merged on top of the file values before validation.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from catalog_ingest.config.ingest import IngestConfig
from catalog_ingest.core.exceptions import ConfigError, ConfigValidationError
from catalog_ingest.core.logging import get_logger

logger = get_logger(__name__)

# Base config directory (project root/config)
_CONFIG_BASE_DIR = Path(__file__).parent.parent.parent / "config"

DEFAULT_INGEST_CONFIG_PATH = _CONFIG_BASE_DIR / "ingest.yaml"


def load_ingest_config(
    path: Path | str | None = None,
    overrides: dict[str, Any] | None = None,
) -> IngestConfig:
    """Load and validate the ingest configuration.

    Args:
        path: YAML file to load. When None, the bundled default file is used
            if it exists, otherwise built-in defaults apply.
        overrides: Top-level keys that replace values from the file.
            Keys with a None value are ignored.

    Returns:
        Validated IngestConfig

    Raises:
        ConfigError: If an explicit file doesn't exist or is invalid YAML.
        ConfigValidationError: If the merged values fail validation.
    """
    data: dict[str, Any] = {}
    if path is not None:
        data = _load_yaml_file(Path(path), "ingest")
    elif DEFAULT_INGEST_CONFIG_PATH.exists():
        data = _load_yaml_file(DEFAULT_INGEST_CONFIG_PATH, "ingest")

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return IngestConfig.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first.get("loc", ())) or None
        raise ConfigValidationError(
            f"Invalid ingest config: {e}",
            config_path=str(path) if path else None,
            context={"field": field, "error_count": len(errors)},
        ) from e


def _load_yaml_file(path: Path, name: str) -> dict[str, Any]:
    """Load a YAML file from disk.

    Args:
        path: Path to the YAML file.
        name: Human-readable name for error messages.

    Returns:
        Parsed YAML content as dictionary.

    Raises:
        ConfigError: If file doesn't exist or parsing fails.
    """
    if not path.exists():
        logger.error("Config file not found", name=name, path=str(path))
        raise ConfigError(f"Config file not found: {path}", config_path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("YAML parsing failed", name=name, path=str(path), error=str(e))
        raise ConfigError(f"Invalid YAML in {path}: {e}", config_path=str(path)) from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"Config file must contain a YAML object: {path}", config_path=str(path))

    logger.debug("Loaded config file", name=name, path=str(path))
    return content


__all__ = [
    "DEFAULT_INGEST_CONFIG_PATH",
    "load_ingest_config",
]
