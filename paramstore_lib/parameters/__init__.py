"""Parameter model, path codec and error types.

The service and HTTP modules are not imported here to keep this package
importable from the storage layer.
"""
from .errors import (
    AlreadyExists,
    BackendUnavailable,
    NotFound,
    ParameterStoreError,
    ValidationError,
    VersionConflict,
)
from .models import Parameter
from .paths import decode, encode

__all__ = [
    "AlreadyExists",
    "BackendUnavailable",
    "NotFound",
    "Parameter",
    "ParameterStoreError",
    "ValidationError",
    "VersionConflict",
    "decode",
    "encode",
]
