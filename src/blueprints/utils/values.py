# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/utils/values.py

from __future__ import annotations

from typing import Any, Mapping


def deep_merge(a: Mapping, b: Mapping) -> dict:
    """
    Recursively merge *b* over *a* and return a new dict.

    Scalars and lists in *b* replace those in *a*; nested dicts merge.
    Neither input is mutated.
    """
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def merge_options(defaults: Mapping[str, Any], overrides: Mapping[str, Any] | None) -> dict:
    """
    Layer user options over add-on defaults.

    Top-level keys override one by one and ``None`` counts as unset.
    When both sides hold a mapping for the same key they are deep merged,
    so a partial ``values`` tree keeps the defaults it does not mention.
    """
    out = dict(defaults)
    for k, v in (overrides or {}).items():
        if v is None:
            continue
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out
