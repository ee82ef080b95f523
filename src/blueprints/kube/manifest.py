# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/kube/manifest.py

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml
from jinja2 import Environment, StrictUndefined
from jinja2.exceptions import TemplateError, UndefinedError

from blueprints.errors import ConfigError

_SEPARATOR = re.compile(r"^---\s*$", re.MULTILINE)
_WHOLE_PLACEHOLDER = re.compile(r"^\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}$")

_env = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=True)


def read_yaml_document(path: str | Path) -> str:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Manifest template not found: {path}")
    return path.read_text(encoding="utf-8")


def load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in manifest template: {e}") from e


def split_documents(text: str) -> list[str]:
    """
    Split a multi-document template on ``---`` separator lines.

    Documents that are empty or only hold comments are dropped.
    """
    docs = []
    for chunk in _SEPARATOR.split(text):
        if load_yaml(chunk) is not None:
            docs.append(chunk)
    return docs


def load_manifest(path: str | Path) -> list[dict]:
    return [load_yaml(d) for d in split_documents(read_yaml_document(path))]


def _render(text: str, values: Mapping[str, Any]) -> Any:
    m = _WHOLE_PLACEHOLDER.match(text.strip())
    if m:
        key = m.group(1)
        if key not in values:
            raise ConfigError(f"No value for placeholder '{key}'")
        return values[key]

    try:
        return _env.from_string(text).render(**values)
    except UndefinedError as e:
        raise ConfigError(f"Missing template value: {e.message}") from e
    except TemplateError as e:
        raise ConfigError(f"Invalid template string {text!r}: {e}") from e


def substitute(document: Any, values: Mapping[str, Any]) -> Any:
    """
    Return a copy of *document* with ``{{ key }}`` placeholders resolved.

    A string that is nothing but one placeholder takes the raw value, so
    numbers and booleans keep their type. Keys are never templated.
    """
    if isinstance(document, str):
        return _render(document, values) if "{{" in document else document
    if isinstance(document, Mapping):
        return {k: substitute(v, values) for k, v in document.items()}
    if isinstance(document, list):
        return [substitute(v, values) for v in document]
    return document


def render_manifest(documents: Iterable[Any], values: Mapping[str, Any]) -> list[Any]:
    return [substitute(d, values) for d in documents]
