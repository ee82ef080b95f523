# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/addons/registry.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Type

from blueprints.addons.adot import AdotCollectorAddOn
from blueprints.addons.amp import AmpAddOn
from blueprints.addons.fluxcd import FluxCDAddOn
from blueprints.config.models import BlueprintConfig
from blueprints.errors import ConfigError
from blueprints.spi import ClusterAddOn

ADDONS: Dict[str, Type[ClusterAddOn]] = {
    "adot-collector": AdotCollectorAddOn,
    "amp": AmpAddOn,
    "fluxcd": FluxCDAddOn,
}


@dataclass(frozen=True)
class AddOnSelection:
    """
    Represents which add-ons from the config the user wants.
    """
    kinds: Optional[Set[str]]  # None = all


def parse_addons_flag(addons: Optional[str]) -> AddOnSelection:
    """
    Parse --addons flag.

    --addons amp
    --addons amp,fluxcd
    --addons all
    --addons None  -> all
    """
    if addons is None or addons == "all":
        return AddOnSelection(kinds=None)

    parts = {p.strip().lower() for p in addons.split(",") if p.strip()}
    if not parts:
        return AddOnSelection(kinds=None)

    unknown = parts - set(ADDONS)
    if unknown:
        raise ConfigError(
            f"Unknown add-ons: {', '.join(sorted(unknown))}. "
            f"Valid add-ons: {', '.join(sorted(ADDONS))}"
        )

    return AddOnSelection(kinds=parts)


def build_addons(
    config: BlueprintConfig,
    selection: AddOnSelection = AddOnSelection(kinds=None),
) -> List[ClusterAddOn]:
    addons: List[ClusterAddOn] = []

    for spec in config.addons:
        cls = ADDONS.get(spec.kind)
        if cls is None:
            raise ConfigError(f"Unknown add-on kind '{spec.kind}'")

        if selection.kinds is None or spec.kind in selection.kinds:
            addons.append(cls(**spec.options))

    return addons
