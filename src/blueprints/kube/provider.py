# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/kube/provider.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from blueprints.deploy.resources import ManifestResource, NamespaceResource
from blueprints.errors import ConfigError
from blueprints.kube.manifest import render_manifest
from blueprints.spi import ClusterInfo, Values

log = logging.getLogger("blueprints")


@dataclass(frozen=True)
class ManifestDeployment:
    name: str
    namespace: str
    manifest: List[Dict[str, Any]]
    values: Values = field(default_factory=dict)


class KubectlProvider:
    """
    Registers templated manifests against a cluster.

    Values are rendered immediately so a missing placeholder fails while
    the blueprint is being assembled. The objects reach the cluster when
    the graph is applied.
    """

    def __init__(self, cluster_info: ClusterInfo):
        self.cluster_info = cluster_info

    def add_manifest(self, deployment: ManifestDeployment) -> ManifestResource:
        if not deployment.manifest:
            raise ConfigError(f"Manifest '{deployment.name}' has no documents")

        documents = render_manifest(deployment.manifest, deployment.values)
        resource = ManifestResource(
            id=f"manifest/{deployment.namespace}/{deployment.name}",
            name=deployment.name,
            namespace=deployment.namespace,
            documents=documents,
        )
        log.debug("[provider] registered %s (%d documents)", resource.id, len(documents))
        return self.cluster_info.graph.add(resource)


def create_namespace(name: str, cluster_info: ClusterInfo) -> NamespaceResource:
    resource = NamespaceResource(id=f"namespace/{name}", name=name)
    return cluster_info.graph.add(resource)
