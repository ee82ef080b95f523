import textwrap
from pathlib import Path

import pytest

from blueprints.errors import ConfigError
from blueprints.kube.manifest import (
    load_manifest,
    read_yaml_document,
    render_manifest,
    split_documents,
    substitute,
)


TEMPLATE = textwrap.dedent("""
    ---
    apiVersion: v1
    kind: ServiceAccount
    metadata:
      name: collector
      namespace: "{{ namespace }}"
    ---
    # only a comment
    ---
    apiVersion: v1
    kind: ConfigMap
    metadata:
      name: cfg
    data:
      endpoint: "{{ remoteWriteEndpoint }}"
      config: |
        exporters:
          prw:
            endpoint: {{ remoteWriteEndpoint }}
""")


def test_split_documents_drops_empty_and_comment_only(tmp_path: Path):
    docs = split_documents(TEMPLATE)
    assert len(docs) == 2


def test_load_manifest_parses_each_document(tmp_path: Path):
    f = tmp_path / "t.ytpl"
    f.write_text(TEMPLATE)
    manifest = load_manifest(f)
    assert [d["kind"] for d in manifest] == ["ServiceAccount", "ConfigMap"]


def test_read_missing_template_is_config_error(tmp_path: Path):
    with pytest.raises(ConfigError):
        read_yaml_document(tmp_path / "nope.ytpl")


def test_substitute_renders_placeholders_without_mutating(tmp_path: Path):
    f = tmp_path / "t.ytpl"
    f.write_text(TEMPLATE)
    manifest = load_manifest(f)
    values = {"namespace": "monitoring", "remoteWriteEndpoint": "https://x/api/v1/remote_write"}

    rendered = render_manifest(manifest, values)

    assert rendered[0]["metadata"]["namespace"] == "monitoring"
    assert rendered[1]["data"]["endpoint"] == "https://x/api/v1/remote_write"
    assert "endpoint: https://x/api/v1/remote_write" in rendered[1]["data"]["config"]
    assert manifest[0]["metadata"]["namespace"] == "{{ namespace }}"


def test_whole_placeholder_keeps_value_type():
    doc = {"spec": {"replicas": "{{ replicas }}", "enabled": "{{enabled}}"}}
    out = substitute(doc, {"replicas": 3, "enabled": False})
    assert out == {"spec": {"replicas": 3, "enabled": False}}


def test_missing_value_is_config_error():
    with pytest.raises(ConfigError):
        substitute({"a": "{{ missing }}"}, {})
    with pytest.raises(ConfigError):
        substitute({"a": "prefix-{{ missing }}"}, {})


def test_non_string_leaves_pass_through():
    doc = {"ports": [80, 443], "flag": True, "nothing": None}
    assert substitute(doc, {}) == doc


def test_malformed_template_is_config_error(tmp_path: Path):
    f = tmp_path / "t.ytpl"
    f.write_text("kind: ConfigMap\ndata:\n  url: {{ remoteWriteEndpoint }}\n")
    with pytest.raises(ConfigError):
        load_manifest(f)
    with pytest.raises(ConfigError):
        split_documents("a: [1, 2\n")
