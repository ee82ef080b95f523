# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/errors.py


class BlueprintError(RuntimeError):
    """Base class for add-on and deployment failures."""


class ConfigError(BlueprintError, ValueError):
    """Raised when add-on options or a blueprint config are invalid."""


class UnknownDependencyError(ConfigError):
    pass


class ApplyError(BlueprintError):
    """Raised when the cluster rejects a resource."""


class CycleError(BlueprintError, ValueError):
    pass
