# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events in a single deploy invocation
    cluster: str      # cluster name
    context: Optional[str]  # kube-context

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(cluster: str, context: Optional[str], run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": run_id or str(uuid.uuid4()),
        "cluster": cluster,
        "context": context,
    }


# ---------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class PlanComputed(BaseEvent):
    order: List[str]

@dataclass(frozen=True)
class PlanFailed(BaseEvent):
    error: str


# ---------------------------------------------------------------------
# Add-on synthesis
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class AddOnDeployed(BaseEvent):
    name: str
    resource: str

@dataclass(frozen=True)
class AddOnFailed(BaseEvent):
    name: str
    error: str


# ---------------------------------------------------------------------
# Resource apply
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ResourceApplied(BaseEvent):
    resource: str
    kind: str
    duration_ms: int

@dataclass(frozen=True)
class ResourceFailed(BaseEvent):
    resource: str
    kind: str
    error: str

@dataclass(frozen=True)
class DeploySummary(BaseEvent):
    applied: int
    failed: int
