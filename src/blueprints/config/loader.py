# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/config/loader.py

import logging
import os
import yaml
from pathlib import Path

from pydantic import ValidationError

from blueprints.errors import ConfigError
from blueprints.utils.values import deep_merge
from .models import BlueprintConfig

log = logging.getLogger("blueprints")


def _find_secrets_file(config_path: Path) -> Path | None:
    """
    Locate secrets.yaml using this priority:

    1. BLUEPRINTS_SECRETS_FILE environment variable (explicit override)
    2. secrets.yaml in the same directory as the blueprint config
    """
    env = os.environ.get("BLUEPRINTS_SECRETS_FILE")
    if env:
        p = Path(env)
        if p.is_file():
            return p
        log.warning("BLUEPRINTS_SECRETS_FILE=%s does not exist, skipping", env)
        return None

    p = config_path.parent / "secrets.yaml"
    if p.is_file():
        return p

    return None


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    try:
        raw = path.read_text()
    except FileNotFoundError as e:
        raise ConfigError(f"Blueprint config not found: {path}") from e
    expanded = os.path.expandvars(raw)
    data = yaml.safe_load(expanded) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a YAML mapping")
    return data


def load_config(path: str | Path) -> BlueprintConfig:
    """
    Load and validate a blueprint YAML config.

    ``${ENV_VAR}`` placeholders are resolved at load time. A secrets.yaml
    whose structure mirrors the config (for example holding the AMP
    workspace endpoint) is deep-merged in before validation.
    """
    path = Path(path)
    data = _load_yaml(path)

    secrets_path = _find_secrets_file(path)
    if secrets_path:
        log.debug("Merging secrets from %s", secrets_path)
        data = deep_merge(data, _load_yaml(secrets_path))
    else:
        log.debug("No secrets.yaml found, proceeding without secrets merge")

    try:
        return BlueprintConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid blueprint config {path}:\n{e}") from e
