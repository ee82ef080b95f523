# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/addons/gitrepository.py

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class GitRepositoryProps(BaseModel):
    """Flux `GitRepository` source to produce an artifact for a Git revision."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "samplerepo"
    namespace: str = "flux-system"
    interval: str = "5m0s"
    url: str = "https://github.com/aws-samples/eks-blueprints-workloads.git"
    branch: str = "master"


class FluxGitRepository:
    api_version = "source.toolkit.fluxcd.io/v1"

    def generate(self, props: GitRepositoryProps) -> Dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": "GitRepository",
            "metadata": {
                "name": props.name,
                "namespace": props.namespace,
            },
            "spec": {
                "interval": props.interval,
                "url": props.url,
                "ref": {"branch": props.branch},
            },
        }
