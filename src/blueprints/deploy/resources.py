# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/deploy/resources.py

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List

from blueprints.config.models import RepoSpec, ReleaseSpec

log = logging.getLogger("blueprints")


@dataclass
class ApplyContext:
    """Cluster clients handed to every resource at apply time."""

    kubectl: Any   # KubectlRunner
    helm: Any      # HelmCliRunner


@dataclass(eq=False)
class Resource(ABC):
    """
    Handle for one unit of cluster state.

    Add-ons return these from ``deploy`` and use them to declare ordering.
    Identity is by object, ``id`` is what appears in plans and events.
    """

    id: str
    kind: ClassVar[str] = "Resource"

    @abstractmethod
    def apply(self, ctx: ApplyContext) -> None:
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id}>"


@dataclass(eq=False)
class ManifestResource(Resource):
    kind: ClassVar[str] = "Manifest"

    name: str = ""
    namespace: str = "default"
    documents: List[Dict[str, Any]] = field(default_factory=list)

    def apply(self, ctx: ApplyContext) -> None:
        log.info("[manifest] applying %s (%d objects) in %s", self.name, len(self.documents), self.namespace)
        ctx.kubectl.apply_objects(self.documents, namespace=self.namespace)


@dataclass(eq=False)
class NamespaceResource(Resource):
    kind: ClassVar[str] = "Namespace"

    name: str = ""

    def manifest(self) -> Dict[str, Any]:
        return {"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": self.name}}

    def apply(self, ctx: ApplyContext) -> None:
        log.info("[namespace] ensuring %s", self.name)
        ctx.kubectl.apply_objects([self.manifest()])


@dataclass(eq=False)
class HelmChartResource(Resource):
    kind: ClassVar[str] = "HelmChart"

    repo: RepoSpec | None = None
    release: ReleaseSpec | None = None

    def apply(self, ctx: ApplyContext) -> None:
        log.info(
            "[helm] installing %s (%s %s) in %s",
            self.release.name, self.release.chart, self.release.version or "latest", self.release.namespace,
        )
        if self.repo is not None:
            ctx.helm.add_repo(self.repo)
            ctx.helm.update_repos()
        ctx.helm.upgrade_install(self.release)
