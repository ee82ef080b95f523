# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/deploy/blueprint.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from blueprints.config.models import ClusterSpec
from blueprints.deploy.graph import topological_order
from blueprints.deploy.resources import ApplyContext
from blueprints.errors import ConfigError, UnknownDependencyError
from blueprints.observers.dispatcher import EventBus
from blueprints.observers.events import AddOnDeployed, AddOnFailed, new_ctx
from blueprints.spi import ClusterAddOn, ClusterInfo

log = logging.getLogger("blueprints")


@dataclass
class DeployReport:
    addons: List[str] = field(default_factory=list)
    applied: List[str] = field(default_factory=list)

    def summary(self) -> str:
        return f"ADDONS={len(self.addons)} APPLIED={len(self.applied)}"


class Blueprint:
    """
    Deploys a set of add-ons onto one cluster.

    IMPORTANT:
    - ``synthesize`` only builds the resource graph; nothing is applied.
    - Each add-on's ``deploy`` runs exactly once per synthesis.
    """

    def __init__(
        self,
        *,
        cluster: ClusterSpec,
        addons: List[ClusterAddOn],
        bus: Optional[EventBus] = None,
        run_id: Optional[str] = None,
    ):
        self.cluster = cluster
        self.addons = list(addons)
        self.bus = bus
        self.run_ctx = new_ctx(cluster=cluster.name, context=cluster.context, run_id=run_id)

    def _ordered_addons(self) -> List[ClusterAddOn]:
        by_name = {}
        for addon in self.addons:
            if addon.name in by_name:
                raise ConfigError(f"Add-on {addon.name} is listed more than once")
            by_name[addon.name] = addon

        for addon in self.addons:
            missing = [r for r in addon.requires if r not in by_name]
            if missing:
                raise UnknownDependencyError(
                    f"Missing a dependency for {addon.name}: {', '.join(missing)}"
                )

        order = topological_order(
            [a.name for a in self.addons],
            {a.name: a.requires for a in self.addons},
        )
        return [by_name[n] for n in order]

    def synthesize(self) -> ClusterInfo:
        cluster_info = ClusterInfo(cluster=self.cluster)

        for addon in self._ordered_addons():
            log.info("[blueprint] deploying add-on %s", addon.name)
            try:
                resource = addon.deploy(cluster_info)
                cluster_info.add_provisioned_addon(addon.name, resource)

                for required in addon.requires:
                    cluster_info.add_dependency(resource, cluster_info.get_provisioned_addon(required))
            except Exception as e:
                if self.bus:
                    self.bus.emit(AddOnFailed(name=addon.name, error=str(e), **self.run_ctx))
                raise

            if self.bus:
                self.bus.emit(AddOnDeployed(name=addon.name, resource=resource.id, **self.run_ctx))

        return cluster_info

    def plan(self) -> List[str]:
        return [r.id for r in self.synthesize().graph.plan()]

    def deploy(self, ctx: ApplyContext) -> DeployReport:
        cluster_info = self.synthesize()
        applied = cluster_info.graph.apply(ctx, bus=self.bus, run_ctx=self.run_ctx)
        return DeployReport(addons=list(cluster_info.provisioned), applied=applied)
