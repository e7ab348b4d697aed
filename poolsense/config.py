"""Configuration management with Pydantic validation.

Supports three configuration sources (in priority order):
1. YAML config file
2. Environment variables
3. Default values
"""

import os
from pathlib import Path
from typing import List, Optional, Literal
import yaml
from pydantic import BaseModel, Field, field_validator

from .engine.catalog import ProductCatalog
from .models import (
    ChemicalProduct,
    ChlorineType,
    CoatingType,
    Pool,
    PoolShape,
    PoolType,
)
from .models.pool import parse_chlorine_type


class PoolConfig(BaseModel):
    """Default pool profile used by the command line."""

    name: str = Field(
        default="My Pool",
        description="Pool display name"
    )
    volume: float = Field(
        default=10000,
        gt=0,
        allow_inf_nan=False,
        description="Water volume in liters"
    )
    shape: PoolShape = Field(
        default=PoolShape.RECTANGULAR,
        description="Pool shape"
    )
    type: PoolType = Field(
        default=PoolType.POOL,
        description="Pool or spa"
    )
    coating: CoatingType = Field(
        default=CoatingType.TILE,
        description="Interior coating"
    )
    chlorine_type: ChlorineType = Field(
        default=ChlorineType.GRANULAR,
        description="Preferred chlorine delivery form (granular or tablet)"
    )

    @field_validator("chlorine_type", mode="before")
    @classmethod
    def normalize_chlorine_type(cls, v):
        """Accept the legacy 'granulate' spelling."""
        return parse_chlorine_type(v)

    def to_pool(self) -> Pool:
        """Build the pool profile."""
        return Pool(**self.model_dump())


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    file: Optional[Path] = Field(
        default=None,
        description="Log file path (optional)"
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("file", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        """Convert empty strings to None."""
        if v == "":
            return None
        return v


class AppConfig(BaseModel):
    """Complete application configuration."""

    pool: PoolConfig = Field(
        default_factory=PoolConfig,
        description="Default pool profile"
    )
    products: List[ChemicalProduct] = Field(
        default_factory=list,
        description="User-defined products overriding the defaults"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )

    @field_validator("products", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """Treat an empty 'products:' section as no overrides."""
        if v is None:
            return []
        return v

    def catalog(self) -> ProductCatalog:
        """Build the product catalog from the configured overrides."""
        return ProductCatalog(self.products)


# Environment variable mapping
ENV_MAPPING = {
    # Pool
    "POOL_NAME": ("pool", "name"),
    "POOL_VOLUME": ("pool", "volume", float),
    "POOL_TYPE": ("pool", "type"),
    "POOL_SHAPE": ("pool", "shape"),
    "POOL_COATING": ("pool", "coating"),
    "POOL_CHLORINE_TYPE": ("pool", "chlorine_type"),

    # Logging
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file"),
}


def _get_env_value(env_var: str, mapping: tuple):
    """Get environment variable value with optional type conversion."""
    value = os.environ.get(env_var)
    if value is None:
        return None

    # Apply type conversion if specified
    if len(mapping) > 2:
        converter = mapping[2]
        try:
            return converter(value)
        except (ValueError, TypeError):
            return value
    return value


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables.

    Returns:
        AppConfig with values from environment (or defaults)
    """
    config_dict = {
        "pool": {},
        "logging": {},
    }

    for env_var, mapping in ENV_MAPPING.items():
        value = _get_env_value(env_var, mapping)
        if value is not None:
            section = mapping[0]
            key = mapping[1]
            config_dict[section][key] = value

    return AppConfig(**config_dict)


def load_config(config_path: str) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is not a YAML mapping or validation fails
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, "r") as f:
        try:
            raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ValueError(
            f"Configuration file {config_path} must contain a mapping"
        )

    # Support environment variable substitution
    raw_config = _substitute_env_vars(raw_config)

    return AppConfig(**raw_config)


def _substitute_env_vars(config):
    """Recursively substitute environment variables in config values.

    Environment variables are referenced as ${VAR_NAME} or $VAR_NAME.
    """
    if isinstance(config, dict):
        return {k: _substitute_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_substitute_env_vars(item) for item in config]
    elif isinstance(config, str):
        # Handle ${VAR_NAME} format
        if config.startswith("${") and config.endswith("}"):
            var_name = config[2:-1]
            return os.environ.get(var_name, config)
        # Handle $VAR_NAME format
        elif config.startswith("$") and not config.startswith("${"):
            var_name = config[1:]
            return os.environ.get(var_name, config)
        return config
    else:
        return config


def create_default_config() -> str:
    """Generate default configuration as YAML string."""
    config = AppConfig()
    return yaml.dump(
        config.model_dump(mode="json", exclude_none=True),
        default_flow_style=False,
        sort_keys=False,
    )


def print_env_help() -> str:
    """Generate help text for environment variables."""
    lines = [
        "Environment Variables:",
        "",
        "  Pool:",
        "    POOL_NAME            Display name (default: My Pool)",
        "    POOL_VOLUME          Volume in liters (default: 10000)",
        "    POOL_TYPE            pool or spa (default: pool)",
        "    POOL_SHAPE           rectangular, round or custom (default: rectangular)",
        "    POOL_COATING         tile, fiberglass or vinyl (default: tile)",
        "    POOL_CHLORINE_TYPE   granular or tablet (default: granular)",
        "",
        "  Logging:",
        "    LOG_LEVEL            DEBUG, INFO, WARNING, ERROR (default: INFO)",
        "    LOG_FILE             Log file path (optional)",
        "",
        "Custom products can only be set in the YAML config file.",
    ]
    return "\n".join(lines)
