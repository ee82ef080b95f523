# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/helm/cli_runner.py

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from typing import List

import yaml

from .errors import HelmError
from ..config.models import RepoSpec, ReleaseSpec

log = logging.getLogger("blueprints")


class HelmCliRunner:
    """
    A pragmatic wrapper around the `helm` CLI.
    - Mirrors human CLI usage: 'repo add/update', 'upgrade --install'.
    - Testable by mocking subprocess.run.
    """

    def __init__(
        self,
        kube_context: str | None = None,
        kubeconfig: str | None = None,
        dry_run: bool = False,
        env: dict[str, str] | None = None,
    ):
        self.kube_context = kube_context
        self.kubeconfig = kubeconfig
        self.dry_run = dry_run
        self.env = env or {}

    # ------------------------- internal helpers -------------------------

    def _base(self) -> list[str]:
        cmd = ["helm"]
        if self.kube_context:
            cmd += ["--kube-context", self.kube_context]
        if self.kubeconfig:
            cmd += ["--kubeconfig", self.kubeconfig]
        return cmd

    def _run(self, argv: List[str]) -> subprocess.CompletedProcess:
        log.debug("[helm] %s", " ".join(argv))

        cp = subprocess.run(
            argv,
            check=False,
            text=True,
            capture_output=True,
            env=self.env or None,
        )

        if cp.returncode != 0:
            stderr = getattr(cp, "stderr", "") or ""
            raise HelmError(f"helm failed (rc={cp.returncode}) for {argv!r}\n{stderr}")
        return cp

    def _values_args(self, rel: ReleaseSpec) -> tuple[list[str], list[str]]:
        """Return ``-f`` args for inline values and the temp files backing them."""
        args: list[str] = []
        paths: list[str] = []
        # inline values → write to temp file to pass to helm
        if rel.values:
            with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as tf:
                yaml.safe_dump(rel.values, tf)
                args += ["-f", tf.name]
                paths.append(tf.name)
        return args, paths

    # ------------------------- public methods -------------------------

    def add_repo(self, repo: RepoSpec) -> None:
        argv = self._base() + ["repo", "add", repo.name, str(repo.url), "--force-update"]
        if repo.username and repo.password:
            argv += ["--username", repo.username, "--password", repo.password]
        self._run(argv)

    def update_repos(self) -> None:
        self._run(self._base() + ["repo", "update"])

    def upgrade_install(self, rel: ReleaseSpec) -> None:
        values_args, values_files = self._values_args(rel)
        argv = (
            self._base()
            + ["upgrade", "--install", rel.name, rel.chart, "-n", rel.namespace]
            + values_args
        )
        if rel.version:
            argv += ["--version", rel.version]
        if rel.create_namespace:
            argv += ["--create-namespace"]
        if rel.atomic:
            argv += ["--atomic"]
        if rel.wait:
            argv += ["--wait", "--timeout", f"{rel.timeout_seconds}s"]
        if self.dry_run:
            argv.append("--dry-run")

        try:
            cp = self._run(argv)
        finally:
            # values may carry credentials
            for path in values_files:
                try:
                    os.unlink(path)
                except FileNotFoundError:
                    pass

        for line in (cp.stdout or "").splitlines():
            log.debug("[helm] %s", line)
