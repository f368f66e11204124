"""Pydantic configuration models and the YAML loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError

DEFAULT_BASE_URL = "https://api.telegra.ph/"
TOKEN_ENV_VAR = "TELEGRAPH_ACCESS_TOKEN"


class ParserConfig(BaseModel):
    """Tag and attribute rules applied by the content parser."""

    tag_rules: Dict[str, Union[str, Literal[False]]] = Field(
        default_factory=dict,
        alias="tagRules",
        description="Source tag to replacement tag, or false to drop the element.",
    )
    allowed_attributes: Optional[List[str]] = Field(
        None,
        alias="allowedAttributes",
        description="Attributes to keep; null keeps every attribute.",
    )
    disallowed_attributes: List[str] = Field(
        default_factory=list,
        alias="disallowedAttributes",
        description="Attributes always removed, even when allowed.",
    )

    model_config = ConfigDict(populate_by_name=True)


class ClientConfig(BaseModel):
    """Connection settings for the Telegraph API."""

    base_url: str = Field(DEFAULT_BASE_URL, alias="baseUrl", description="API root URL.")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds.")
    access_token: Optional[str] = Field(
        None,
        alias="accessToken",
        description=f"Account access token; {TOKEN_ENV_VAR} is used when unset.",
    )

    model_config = ConfigDict(populate_by_name=True)


class TelegraphConfig(BaseModel):
    """Top-level configuration file."""

    client: ClientConfig = Field(default_factory=ClientConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)


def load_config(path: Optional[Path] = None) -> TelegraphConfig:
    """Load configuration from a YAML file, or defaults when ``path`` is None.

    Raises:
        ConfigError: If the file cannot be read or does not validate.
    """
    data: object = {}
    if path is not None:
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read config {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping.")

    try:
        config = TelegraphConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc

    if config.client.access_token is None:
        config.client.access_token = os.environ.get(TOKEN_ENV_VAR) or None
    return config


__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "ParserConfig",
    "TOKEN_ENV_VAR",
    "TelegraphConfig",
    "load_config",
]
