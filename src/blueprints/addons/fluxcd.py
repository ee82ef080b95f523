# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/addons/fluxcd.py

from __future__ import annotations

import logging

from pydantic import Field

from blueprints.addons.gitrepository import FluxGitRepository, GitRepositoryProps
from blueprints.addons.helm_addon import HelmAddOn, HelmAddOnProps
from blueprints.deploy.resources import ManifestResource, Resource
from blueprints.kube.provider import KubectlProvider, ManifestDeployment, create_namespace
from blueprints.spi import ClusterInfo

log = logging.getLogger("blueprints")


class FluxCDAddOnProps(HelmAddOnProps):
    # Create the namespace as its own resource instead of through helm.
    create_namespace: bool = True
    git_repository: GitRepositoryProps = Field(default_factory=GitRepositoryProps)


class FluxCDAddOn(HelmAddOn):
    """
    Installs the Flux2 chart and registers a GitRepository as its source.
    """

    props_model = FluxCDAddOnProps
    default_props = {
        "name": "fluxcd-addon",
        "namespace": "flux-system",
        "chart": "flux2",
        "version": "2.7.0",
        "release": "blueprints-fluxcd-addon",
        "repository": "https://fluxcd-community.github.io/helm-charts",
        "values": {},
        "create_namespace": True,
        "git_repository": GitRepositoryProps().model_dump(),
    }

    def deploy(self, cluster_info: ClusterInfo) -> Resource:
        chart = self.add_helm_chart(cluster_info, dict(self.props.values), create_namespace=False)

        if self.props.create_namespace:
            namespace = create_namespace(self.props.namespace, cluster_info)
            cluster_info.add_dependency(chart, namespace)
        else:
            log.debug("[fluxcd] namespace %s assumed to exist", self.props.namespace)

        # GitRepository is a Flux CRD, so it goes in after the chart. This
        # reverses the upstream blueprint, where the chart waits on the source
        # and kubectl would reject the GitRepository before the CRD exists.
        source = create_git_repository(cluster_info, self.props.git_repository)
        cluster_info.add_dependency(source, chart)

        return chart


def create_git_repository(cluster_info: ClusterInfo, props: GitRepositoryProps) -> ManifestResource:
    manifest = FluxGitRepository().generate(props)
    return KubectlProvider(cluster_info).add_manifest(
        ManifestDeployment(
            name=props.name,
            namespace=props.namespace,
            manifest=[manifest],
        )
    )
