# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/spi.py

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from blueprints.config.models import ClusterSpec
from blueprints.deploy.graph import ResourceGraph
from blueprints.deploy.resources import Resource
from blueprints.errors import ConfigError
from blueprints.utils.values import merge_options

Values = Dict[str, Any]

P = TypeVar("P", bound=BaseModel)


@dataclass
class ClusterInfo:
    """
    What an add-on sees while it is deployed: cluster facts, the resource
    graph it registers into, and the handles of add-ons deployed before it.
    """

    cluster: ClusterSpec
    graph: ResourceGraph = field(default_factory=ResourceGraph)
    provisioned: Dict[str, Resource] = field(default_factory=dict)

    @property
    def cluster_name(self) -> str:
        return self.cluster.name

    @property
    def region(self) -> str:
        return self.cluster.region

    def add_provisioned_addon(self, name: str, resource: Resource) -> None:
        self.provisioned[name] = resource

    def get_provisioned_addon(self, name: str) -> Optional[Resource]:
        return self.provisioned.get(name)

    def add_dependency(self, dependent: Resource, dependency: Resource) -> None:
        self.graph.add_dependency(dependent, dependency)


def build_props(model: Type[P], defaults: Mapping[str, Any], options: Mapping[str, Any] | None) -> P:
    """Merge user options over defaults and validate them into *model*."""
    merged = merge_options(defaults, options)
    try:
        return model.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid {model.__name__}:\n{e}") from e


class ClusterAddOn(ABC):
    """
    A self-contained unit that provisions one capability onto a cluster.

    ``requires`` names add-ons (by class name) that must be deployed first.
    The blueprint checks they are present and orders this add-on's handle
    after theirs.
    """

    requires: ClassVar[Tuple[str, ...]] = ()

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def deploy(self, cluster_info: ClusterInfo) -> Resource:
        ...
