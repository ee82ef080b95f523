# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/helm/errors.py
from blueprints.errors import ApplyError


class HelmError(ApplyError):
    """Base class for Helm-related failures."""
