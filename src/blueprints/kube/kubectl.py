# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/kube/kubectl.py

from __future__ import annotations

import logging
import subprocess
from typing import Iterable

import yaml

from blueprints.errors import ApplyError

log = logging.getLogger("blueprints")


class KubectlError(ApplyError):
    pass


class KubectlRunner:
    """
    kubectl runner executed on the local host.

    Testable by mocking subprocess.run.
    """

    def __init__(
        self,
        *,
        kubeconfig: str | None = None,
        context: str | None = None,
        dry_run: bool = False,
    ):
        self.kubeconfig = kubeconfig
        self.context = context
        self.dry_run = dry_run

    def _base(self) -> list[str]:
        cmd = ["kubectl"]
        if self.kubeconfig:
            cmd += ["--kubeconfig", self.kubeconfig]
        if self.context:
            cmd += ["--context", self.context]
        return cmd

    def run(self, args: list[str], *, stdin: str | None = None) -> tuple[int, str, str]:
        """
        Run a kubectl command.

        Returns:
            (rc, stdout, stderr)
        """
        argv = self._base() + args
        log.debug("[kubectl] %s", " ".join(argv))

        proc = subprocess.run(
            argv,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
        )

        return proc.returncode, proc.stdout, proc.stderr

    def apply_content(self, *, content: str, namespace: str | None = None) -> str:
        args = ["apply", "-f", "-"]
        if namespace:
            args += ["-n", namespace]
        if self.dry_run:
            args.append("--dry-run=client")

        rc, out, err = self.run(args, stdin=content)
        if rc != 0:
            raise KubectlError(f"kubectl apply failed: {(err or out).strip()}")
        return out

    def apply_objects(
        self,
        objects: Iterable[dict],
        *,
        namespace: str | None = None,
    ) -> None:
        objects = list(objects)

        if not objects:
            log.debug("[kubectl] apply skipped: no objects")
            return

        manifest = yaml.safe_dump_all(objects, sort_keys=False)

        try:
            out = self.apply_content(content=manifest, namespace=namespace)
        except KubectlError as e:
            for obj in objects:
                log.error(
                    "[kubectl] apply failed for %s/%s: %s",
                    obj.get("kind", "<unknown>"),
                    obj.get("metadata", {}).get("name", "<unknown>"),
                    e,
                )
            raise

        for line in out.splitlines():
            log.info("[kubectl] %s", line)
