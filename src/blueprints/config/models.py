# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/config/models.py

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, HttpUrl, Field


class RepoSpec(BaseModel):
    name: str
    url: HttpUrl
    username: Optional[str] = None
    password: Optional[str] = None


class ReleaseSpec(BaseModel):
    name: str                        # helm release name
    namespace: str                   # target ns
    chart: str                       # repo/chart
    version: Optional[str] = None
    values: Dict[str, Any] = Field(default_factory=dict)
    create_namespace: bool = False
    atomic: bool = False
    timeout_seconds: int = 600
    wait: bool = True


class ClusterSpec(BaseModel):
    """Facts about the target cluster that add-ons template into manifests."""

    name: str
    region: str
    kubeconfig: Optional[str] = None   # None = kubectl/helm default
    context: Optional[str] = None      # Kubernetes context to use


class AddOnSpec(BaseModel):
    kind: str                                             # registry key, e.g. "amp"
    options: Dict[str, Any] = Field(default_factory=dict)


class BlueprintConfig(BaseModel):
    cluster: ClusterSpec
    addons: List[AddOnSpec] = Field(default_factory=list)

    def kinds(self) -> List[str]:
        return [a.kind for a in self.addons]
