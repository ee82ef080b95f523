import pytest

from blueprints.addons.amp import (
    DEFAULT_TEMPLATE,
    AmpAddOn,
    DeploymentMode,
    remote_write_endpoint,
    template_for,
)
from blueprints.config.models import ClusterSpec
from blueprints.deploy.resources import ManifestResource
from blueprints.errors import ConfigError
from blueprints.spi import ClusterInfo

ENDPOINT = "https://aps-workspaces.us-west-2.amazonaws.com/workspaces/ws-1/"


def _cluster_info():
    return ClusterInfo(cluster=ClusterSpec(name="blueprint-dev", region="us-west-2"))


def test_remote_write_endpoint_appends_suffix():
    assert (
        remote_write_endpoint("https://example/workspaces/ws-1/")
        == "https://example/workspaces/ws-1/api/v1/remote_write"
    )


def test_remote_write_endpoint_adds_missing_slash():
    assert (
        remote_write_endpoint("https://example/workspaces/ws-1")
        == "https://example/workspaces/ws-1/api/v1/remote_write"
    )


def test_remote_write_endpoint_never_double_appends():
    full = "https://example/workspaces/ws-1/api/v1/remote_write"
    assert remote_write_endpoint(full) == full
    assert remote_write_endpoint(full + "/") == full


def test_daemonset_selects_daemonset_template():
    assert template_for(DeploymentMode.DAEMONSET) == "collector-config-amp-daemonset.ytpl"


@pytest.mark.parametrize("mode", ["deployment", "statefulset", "sidecar"])
def test_other_modes_select_default_template(mode):
    assert template_for(DeploymentMode(mode)) == DEFAULT_TEMPLATE


def test_defaults_are_applied():
    addon = AmpAddOn(amp_prometheus_endpoint=ENDPOINT)
    assert addon.props.deployment_mode is DeploymentMode.DEPLOYMENT
    assert addon.props.namespace == "default"
    assert addon.props.name == "adot-collector-amp"


def test_missing_endpoint_is_config_error():
    with pytest.raises(ConfigError):
        AmpAddOn(namespace="monitoring")


def test_unknown_deployment_mode_fails_fast():
    with pytest.raises(ConfigError):
        AmpAddOn(amp_prometheus_endpoint=ENDPOINT, deployment_mode="replicaset")


def test_requires_adot_collector():
    assert AmpAddOn.requires == ("AdotCollectorAddOn",)


def test_deploy_registers_rendered_manifest():
    info = _cluster_info()
    addon = AmpAddOn(amp_prometheus_endpoint=ENDPOINT, namespace="monitoring")

    resource = addon.deploy(info)

    assert isinstance(resource, ManifestResource)
    assert resource in info.graph
    assert resource.id == "manifest/monitoring/adot-collector-amp"

    collector = next(d for d in resource.documents if d["kind"] == "OpenTelemetryCollector")
    assert collector["metadata"]["namespace"] == "monitoring"
    assert collector["spec"]["mode"] == "deployment"
    config = collector["spec"]["config"]
    assert "endpoint: " + ENDPOINT + "api/v1/remote_write" in config
    assert "region: us-west-2" in config
    assert "cluster: blueprint-dev" in config
    assert "K8S_NODE_NAME" not in config


def test_deploy_daemonset_mode_uses_node_local_scraping():
    info = _cluster_info()
    addon = AmpAddOn(amp_prometheus_endpoint=ENDPOINT, deployment_mode="daemonset")

    resource = addon.deploy(info)

    collector = next(d for d in resource.documents if d["kind"] == "OpenTelemetryCollector")
    assert collector["spec"]["mode"] == "daemonset"
    assert "spec.nodeName=${K8S_NODE_NAME}" in collector["spec"]["config"]


def test_deploy_with_custom_templates_dir(tmp_path):
    (tmp_path / DEFAULT_TEMPLATE).write_text(
        "apiVersion: v1\nkind: ConfigMap\nmetadata:\n  name: amp\ndata:\n  url: \"{{ remoteWriteEndpoint }}\"\n"
    )
    addon = AmpAddOn(templates_dir=tmp_path, amp_prometheus_endpoint="https://example/workspaces/ws-1/")

    resource = addon.deploy(_cluster_info())

    assert resource.documents == [
        {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "metadata": {"name": "amp"},
            "data": {"url": "https://example/workspaces/ws-1/api/v1/remote_write"},
        }
    ]


@pytest.mark.parametrize("endpoint", ["", "aps-workspaces/ws-1", "ftp://example/workspaces/ws-1/"])
def test_endpoint_must_be_http_url(endpoint):
    with pytest.raises(ConfigError):
        AmpAddOn(amp_prometheus_endpoint=endpoint)


def test_unquoted_placeholder_in_template_is_config_error(tmp_path):
    (tmp_path / DEFAULT_TEMPLATE).write_text(
        "apiVersion: v1\nkind: ConfigMap\nmetadata:\n  name: amp\ndata:\n  url: {{ remoteWriteEndpoint }}\n"
    )
    addon = AmpAddOn(templates_dir=tmp_path, amp_prometheus_endpoint=ENDPOINT)

    with pytest.raises(ConfigError):
        addon.deploy(_cluster_info())
