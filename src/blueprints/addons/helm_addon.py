# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/addons/helm_addon.py

from __future__ import annotations

from typing import Any, ClassVar, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from blueprints.config.models import ReleaseSpec, RepoSpec
from blueprints.deploy.resources import HelmChartResource
from blueprints.spi import ClusterAddOn, ClusterInfo, Values, build_props


class HelmAddOnProps(BaseModel):
    """
    Helm chart coordinates shared by every chart-backed add-on.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    namespace: str = "default"
    chart: str
    version: Optional[str] = None
    release: str
    repository: str
    values: Dict[str, Any] = Field(default_factory=dict)
    timeout_seconds: int = 600
    wait: bool = True


class HelmAddOn(ClusterAddOn):
    """
    Base class for add-ons installed from a Helm chart.

    Subclasses set ``props_model`` and ``default_props``; user options are
    layered over those defaults once, at construction.
    """

    props_model: ClassVar[Type[HelmAddOnProps]] = HelmAddOnProps
    default_props: ClassVar[Mapping[str, Any]] = {}

    def __init__(self, **options: Any):
        self.props = build_props(self.props_model, self.default_props, options)

    def add_helm_chart(
        self,
        cluster_info: ClusterInfo,
        values: Values | None = None,
        *,
        create_namespace: bool = True,
    ) -> HelmChartResource:
        """
        Register this add-on's chart as a release in the cluster graph.

        ``create_namespace`` is passed through to helm. Add-ons that create
        the namespace as its own resource turn it off.
        """
        p = self.props
        repo = RepoSpec(name=p.name, url=p.repository)
        release = ReleaseSpec(
            name=p.release,
            namespace=p.namespace,
            chart=f"{p.name}/{p.chart}",
            version=p.version,
            values=values if values is not None else dict(p.values),
            create_namespace=create_namespace,
            timeout_seconds=p.timeout_seconds,
            wait=p.wait,
        )
        resource = HelmChartResource(
            id=f"helm/{p.namespace}/{p.release}",
            repo=repo,
            release=release,
        )
        return cluster_info.graph.add(resource)
