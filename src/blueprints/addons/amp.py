# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/addons/amp.py

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, HttpUrl

from blueprints.deploy.resources import Resource
from blueprints.kube.manifest import load_manifest
from blueprints.kube.provider import KubectlProvider, ManifestDeployment
from blueprints.spi import ClusterAddOn, ClusterInfo, Values, build_props
from blueprints.utils.assets import addon_template_path

log = logging.getLogger("blueprints")

REMOTE_WRITE_SUFFIX = "api/v1/remote_write"


class DeploymentMode(str, Enum):
    DEPLOYMENT = "deployment"
    DAEMONSET = "daemonset"
    STATEFULSET = "statefulset"
    SIDECAR = "sidecar"


DEFAULT_TEMPLATE = "collector-config-amp.ytpl"

# Modes missing here render the default template.
MODE_TEMPLATES: Dict[DeploymentMode, str] = {
    DeploymentMode.DAEMONSET: "collector-config-amp-daemonset.ytpl",
}


class AmpAddOnProps(BaseModel):
    """
    Options for the AMP add-on.

    ``amp_prometheus_endpoint`` is the workspace URL, e.g.
    ``https://aps-workspaces.<region>.amazonaws.com/workspaces/<ws-id>/``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    amp_prometheus_endpoint: HttpUrl
    deployment_mode: DeploymentMode = DeploymentMode.DEPLOYMENT
    namespace: str = "default"
    name: str = "adot-collector-amp"


DEFAULT_PROPS: Dict[str, Any] = {
    "deployment_mode": DeploymentMode.DEPLOYMENT,
    "name": "adot-collector-amp",
    "namespace": "default",
}


def remote_write_endpoint(base: str) -> str:
    """
    Remote write URL for an AMP workspace endpoint.

    Adds the missing ``/`` between workspace and suffix and leaves an
    endpoint that already ends in the suffix alone.
    """
    trimmed = base.rstrip("/")
    if trimmed.endswith("/" + REMOTE_WRITE_SUFFIX):
        return trimmed
    return f"{trimmed}/{REMOTE_WRITE_SUFFIX}"


def template_for(mode: DeploymentMode) -> str:
    return MODE_TEMPLATES.get(DeploymentMode(mode), DEFAULT_TEMPLATE)


class AmpAddOn(ClusterAddOn):
    """
    Installs an ADOT collector that scrapes Prometheus metrics in the
    cluster and remote-writes them to an Amazon Managed Prometheus
    workspace.
    """

    requires = ("AdotCollectorAddOn",)

    def __init__(self, templates_dir: Path | None = None, **options: Any):
        self.props = build_props(AmpAddOnProps, DEFAULT_PROPS, options)
        self.templates_dir = Path(templates_dir) if templates_dir else addon_template_path("amp")

    def values(self, cluster_info: ClusterInfo) -> Values:
        return {
            "remoteWriteEndpoint": remote_write_endpoint(str(self.props.amp_prometheus_endpoint)),
            "awsRegion": cluster_info.region,
            "deploymentMode": self.props.deployment_mode.value,
            "namespace": self.props.namespace,
            "clusterName": cluster_info.cluster_name,
        }

    def deploy(self, cluster_info: ClusterInfo) -> Resource:
        template = self.templates_dir / template_for(self.props.deployment_mode)
        log.debug("[amp] mode=%s template=%s", self.props.deployment_mode.value, template)

        manifest = load_manifest(template)
        deployment = ManifestDeployment(
            name=self.props.name,
            namespace=self.props.namespace,
            manifest=manifest,
            values=self.values(cluster_info),
        )

        return KubectlProvider(cluster_info).add_manifest(deployment)
