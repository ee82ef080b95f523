from pathlib import Path
import textwrap

import pytest

from blueprints.addons.registry import build_addons, parse_addons_flag
from blueprints.config.loader import load_config
from blueprints.errors import ConfigError

CONFIG = textwrap.dedent("""
    cluster:
      name: blueprint-dev
      region: us-west-2
      context: dev
    addons:
      - kind: adot-collector
      - kind: amp
        options:
          amp_prometheus_endpoint: ${AMP_ENDPOINT}
          deployment_mode: daemonset
      - kind: fluxcd
        options:
          create_namespace: false
          git_repository:
            url: https://github.com/acme/fleet.git
""")


@pytest.fixture(autouse=True)
def _no_secrets_env(monkeypatch):
    monkeypatch.delenv("BLUEPRINTS_SECRETS_FILE", raising=False)


def test_load_config_expands_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("AMP_ENDPOINT", "https://example/workspaces/ws-1/")
    f = tmp_path / "blueprint.yaml"
    f.write_text(CONFIG)

    cfg = load_config(f)

    assert cfg.cluster.name == "blueprint-dev"
    assert cfg.kinds() == ["adot-collector", "amp", "fluxcd"]
    assert cfg.addons[1].options["amp_prometheus_endpoint"] == "https://example/workspaces/ws-1/"


def test_secrets_file_is_merged(tmp_path: Path):
    (tmp_path / "blueprint.yaml").write_text("cluster:\n  name: c1\n  region: eu-west-1\n")
    (tmp_path / "secrets.yaml").write_text("cluster:\n  kubeconfig: /secure/kubeconfig\n")

    cfg = load_config(tmp_path / "blueprint.yaml")

    assert cfg.cluster.region == "eu-west-1"
    assert cfg.cluster.kubeconfig == "/secure/kubeconfig"


def test_invalid_config_is_config_error(tmp_path: Path):
    f = tmp_path / "blueprint.yaml"
    f.write_text("cluster:\n  name: c1\n")
    with pytest.raises(ConfigError):
        load_config(f)


def test_missing_config_is_config_error(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_build_addons_honours_selection(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("AMP_ENDPOINT", "https://example/workspaces/ws-1/")
    f = tmp_path / "blueprint.yaml"
    f.write_text(CONFIG)
    cfg = load_config(f)

    addons = build_addons(cfg, parse_addons_flag("fluxcd"))
    assert [a.name for a in addons] == ["FluxCDAddOn"]
    assert addons[0].props.create_namespace is False
    assert addons[0].props.git_repository.url == "https://github.com/acme/fleet.git"

    assert len(build_addons(cfg)) == 3


def test_parse_addons_flag():
    assert parse_addons_flag(None).kinds is None
    assert parse_addons_flag("all").kinds is None
    assert parse_addons_flag(" amp, FluxCD ").kinds == {"amp", "fluxcd"}
    with pytest.raises(ConfigError):
        parse_addons_flag("argocd")
