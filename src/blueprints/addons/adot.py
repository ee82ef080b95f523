# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/addons/adot.py

from blueprints.addons.helm_addon import HelmAddOn
from blueprints.deploy.resources import Resource
from blueprints.spi import ClusterInfo


class AdotCollectorAddOn(HelmAddOn):
    """
    Installs the OpenTelemetry operator, which reconciles the
    OpenTelemetryCollector resources other add-ons (AMP) create.
    """

    default_props = {
        "name": "adot-collector",
        "namespace": "opentelemetry-operator-system",
        "chart": "opentelemetry-operator",
        "version": "0.74.2",
        "release": "blueprints-adot-collector",
        "repository": "https://open-telemetry.github.io/opentelemetry-helm-charts",
        "values": {
            "manager": {
                "collectorImage": {
                    "repository": "public.ecr.aws/aws-observability/aws-otel-collector",
                },
            },
            "admissionWebhooks": {"certManager": {"enabled": False}, "autoGenerateCert": {"enabled": True}},
        },
    }

    def deploy(self, cluster_info: ClusterInfo) -> Resource:
        return self.add_helm_chart(cluster_info)
