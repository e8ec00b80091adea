"""ParameterStore: the single entry point for parameter CRUD.

The store validates caller input and forwards to the backend it was
constructed with. The backend is chosen once, by `create_parameter_store`
or by the caller, and never swapped afterwards; in particular a failing
SSM backend is reported as `BackendUnavailable`, not replaced by the
in-memory one.
"""
from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, List, Optional

from paramstore_lib.config.config import StoreConfig
from paramstore_lib.storage import create_backend
from paramstore_lib.storage.base import ParameterBackend

from .errors import AlreadyExists, ValidationError
from .interfaces import ParameterStoreProtocol
from .models import Parameter, validate_value
from .paths import validate_name, validate_namespace

logger = logging.getLogger(__name__)


class ParameterStore(ParameterStoreProtocol):
    def __init__(self, backend: ParameterBackend):
        self._backend = backend
        # Serializes check-then-create for new namespaces
        self._namespace_lock = RLock()

    @property
    def backend(self) -> ParameterBackend:
        return self._backend

    @property
    def backend_kind(self) -> str:
        return self._backend.kind

    def list_all(self) -> Dict[str, List[Parameter]]:
        return self._backend.list()

    def list_namespace(self, namespace: str) -> List[Parameter]:
        validate_namespace(namespace)
        return self._backend.list(namespace).get(namespace, [])

    def create_variable(self, namespace: str, name: str, value: str, is_secure: bool = False) -> Parameter:
        validate_namespace(namespace)
        validate_name(name)
        validate_value(value)
        param = self._backend.create(namespace, name, value, bool(is_secure))
        logger.info("Created parameter %s in %s", name, namespace or "/")
        return param

    def update_variable(
        self,
        namespace: str,
        name: str,
        value: Optional[str] = None,
        is_secure: Optional[bool] = None,
        expected_version: Optional[int] = None,
    ) -> Parameter:
        validate_namespace(namespace)
        validate_name(name)
        if value is None and is_secure is None:
            raise ValidationError("Nothing to update: provide a value or isSecure")
        if value is not None:
            validate_value(value)
        if expected_version is not None and expected_version < 1:
            raise ValidationError("expectedVersion must be a positive integer")
        param = self._backend.update(
            namespace,
            name,
            value=value,
            is_secure=is_secure,
            expected_version=expected_version,
        )
        logger.info("Updated parameter %s in %s to version %d", name, namespace or "/", param.version)
        return param

    def delete_variable(self, namespace: str, name: str) -> None:
        validate_namespace(namespace)
        validate_name(name)
        self._backend.delete(namespace, name)
        logger.info("Deleted parameter %s from %s", name, namespace or "/")

    def create_namespace_with_variable(
        self, namespace: str, name: str, value: str, is_secure: bool = False
    ) -> Parameter:
        validate_namespace(namespace)
        validate_name(name)
        validate_value(value)
        with self._namespace_lock:
            if self._backend.list(namespace).get(namespace):
                raise AlreadyExists(namespace)
            param = self._backend.create(namespace, name, value, bool(is_secure))
        logger.info("Created namespace %s with parameter %s", namespace, name)
        return param


def create_parameter_store(config: StoreConfig) -> ParameterStore:
    """Bind a new store to the backend described by `config`."""
    backend = create_backend(config)
    logger.info("Parameter store bound to %s backend", backend.kind)
    return ParameterStore(backend)
