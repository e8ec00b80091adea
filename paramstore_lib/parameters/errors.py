"""Error taxonomy shared by the parameter store and its backends.

Backends translate their native failures into these types so that callers
(the façade, the HTTP layer, the `.env` importer) can react without knowing
which backend is active.
"""
from __future__ import annotations
from typing import Optional


class ParameterStoreError(Exception):
    """Base class for all parameter store failures."""


class ValidationError(ParameterStoreError, ValueError):
    """A required field is missing or malformed (empty name/value, bad path)."""


class NotFound(ParameterStoreError, KeyError):
    """The referenced (namespace, name) does not exist."""

    def __init__(self, namespace: str, name: Optional[str] = None, message: Optional[str] = None):
        self.namespace = namespace
        self.name = name
        if message is None:
            if name is None:
                message = f"Namespace '{namespace}' not found"
            else:
                message = f"Parameter '{name}' not found in namespace '{namespace}'"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""


class AlreadyExists(ParameterStoreError):
    """A create collided with existing data."""

    def __init__(self, namespace: str, name: Optional[str] = None, message: Optional[str] = None):
        self.namespace = namespace
        self.name = name
        if message is None:
            if name is None:
                message = f"Namespace '{namespace}' already exists"
            else:
                message = f"Parameter '{name}' already exists in namespace '{namespace}'"
        super().__init__(message)


class VersionConflict(ParameterStoreError):
    """An update's expected version does not match the stored version."""

    def __init__(self, namespace: str, name: str, expected: int, actual: int):
        self.namespace = namespace
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Parameter '{name}' in namespace '{namespace}' is at version {actual}, expected {expected}"
        )


class BackendUnavailable(ParameterStoreError):
    """The remote backend could not be reached or failed to answer."""
