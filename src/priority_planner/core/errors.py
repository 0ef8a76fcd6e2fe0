# src/priority_planner/core/errors.py

from __future__ import annotations


class PlannerError(Exception):
    """Base class for failures that are reported to the user but never fatal."""


class GatewayUnavailable(PlannerError):
    """Snapshot persistence failed (load or save). In-memory state stays authoritative."""


class TransformFailure(PlannerError):
    """Task-transform call failed or returned unusable data. Nothing was changed."""
