# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/deploy/graph.py

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Dict, Iterable, List, Mapping, Optional, Set

from blueprints.errors import ConfigError, CycleError, UnknownDependencyError
from blueprints.observers.dispatcher import EventBus
from blueprints.observers.events import (
    DeploySummary,
    PlanComputed,
    PlanFailed,
    ResourceApplied,
    ResourceFailed,
    new_ctx,
)

from .resources import ApplyContext, Resource

log = logging.getLogger("blueprints")


def topological_order(names: List[str], deps: Mapping[str, Iterable[str]]) -> List[str]:
    """
    Stable topological sort: every name comes after the names it depends on.

    Ties are broken by position in *names*, so independent nodes keep the
    order they were registered in.
    """
    position = {n: i for i, n in enumerate(names)}
    for n in names:
        for d in deps.get(n, ()):
            if d not in position:
                raise UnknownDependencyError(f"'{n}' depends on unknown '{d}'")

    indeg: Dict[str, int] = {n: len(set(deps.get(n, ()))) for n in names}
    dependents: Dict[str, List[str]] = {n: [] for n in names}
    for n in names:
        for d in set(deps.get(n, ())):
            dependents[d].append(n)

    queue = deque(sorted((n for n in names if indeg[n] == 0), key=position.__getitem__))
    order: List[str] = []

    while queue:
        n = queue.popleft()
        order.append(n)
        for m in dependents[n]:
            indeg[m] -= 1
            if indeg[m] == 0:
                queue.append(m)
                queue = deque(sorted(queue, key=position.__getitem__))  # deterministic

    if len(order) != len(names):
        stuck = sorted((n for n in names if indeg[n] > 0), key=position.__getitem__)
        raise CycleError(f"Cyclic dependency detected among: {', '.join(stuck)}")

    return order


class ResourceGraph:
    """
    Process-local record of resources and "apply X after Y" edges.

    Nothing touches the cluster until ``apply``, which plans the whole graph
    first so an illegal ordering fails before any resource is applied.
    """

    def __init__(self) -> None:
        self._resources: Dict[str, Resource] = {}
        self._deps: Dict[str, Set[str]] = {}

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, resource: Resource) -> bool:
        return self._resources.get(resource.id) is resource

    def add(self, resource: Resource) -> Resource:
        if resource.id in self._resources:
            raise ConfigError(f"Resource '{resource.id}' is already registered")
        self._resources[resource.id] = resource
        self._deps[resource.id] = set()
        return resource

    def _require(self, resource: Resource) -> None:
        if resource not in self:
            raise UnknownDependencyError(f"Resource '{resource.id}' is not registered in this graph")

    def dependencies_of(self, resource: Resource) -> Set[str]:
        self._require(resource)
        return set(self._deps[resource.id])

    def edges(self) -> List[tuple[str, str]]:
        return [(n, d) for n, deps in self._deps.items() for d in sorted(deps)]

    def _reaches(self, start: str, target: str) -> bool:
        seen: Set[str] = set()
        stack = [start]
        while stack:
            n = stack.pop()
            if n == target:
                return True
            if n in seen:
                continue
            seen.add(n)
            stack.extend(self._deps[n])
        return False

    def add_dependency(self, dependent: Resource, dependency: Resource) -> None:
        """
        Declare that *dependent* is applied only after *dependency*.

        Declaring the same edge again is a no-op. An edge that would close a
        cycle raises CycleError and leaves the graph unchanged.
        """
        self._require(dependent)
        self._require(dependency)

        if dependency.id in self._deps[dependent.id]:
            return

        if self._reaches(dependency.id, dependent.id):
            raise CycleError(
                f"'{dependent.id}' cannot depend on '{dependency.id}': "
                f"'{dependency.id}' already depends on it"
            )

        log.debug("[graph] %s -> %s", dependent.id, dependency.id)
        self._deps[dependent.id].add(dependency.id)

    def plan(self) -> List[Resource]:
        order = topological_order(list(self._resources), self._deps)
        return [self._resources[n] for n in order]

    def apply(
        self,
        ctx: ApplyContext,
        bus: Optional[EventBus] = None,
        run_ctx: Optional[dict] = None,
    ) -> List[str]:
        """
        Apply every resource in dependency order and return the applied ids.

        A failure propagates to the caller. Resources applied before it stay
        applied.
        """
        run_ctx = run_ctx or new_ctx(cluster="unknown", context=None)

        try:
            ordered = self.plan()
        except Exception as e:
            if bus:
                bus.emit(PlanFailed(error=str(e), **run_ctx))
            raise

        if bus:
            bus.emit(PlanComputed(order=[r.id for r in ordered], **run_ctx))

        applied: List[str] = []
        for resource in ordered:
            start = time.time()
            try:
                resource.apply(ctx)
            except Exception as e:
                log.error("[graph] %s failed: %s", resource.id, e)
                if bus:
                    bus.emit(ResourceFailed(resource=resource.id, kind=resource.kind, error=str(e), **run_ctx))
                    bus.emit(DeploySummary(applied=len(applied), failed=1, **run_ctx))
                raise

            applied.append(resource.id)
            if bus:
                bus.emit(
                    ResourceApplied(
                        resource=resource.id,
                        kind=resource.kind,
                        duration_ms=int((time.time() - start) * 1000),
                        **run_ctx,
                    )
                )

        if bus:
            bus.emit(DeploySummary(applied=len(applied), failed=0, **run_ctx))
        return applied
