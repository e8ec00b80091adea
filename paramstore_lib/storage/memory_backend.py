"""Simple memory-backed parameter backend.

Entries are held in a map `{<id>: Parameter}` keyed by a synthetic integer
id handed out by a monotonic counter. The map belongs to the backend
instance, so every store (and every test) gets its own isolated copy.
"""
from __future__ import annotations
import logging
from threading import RLock
from typing import Dict, Iterable, List, Optional, Tuple

from paramstore_lib.parameters.errors import AlreadyExists, NotFound, VersionConflict
from paramstore_lib.parameters.models import Parameter, validate_value
from paramstore_lib.parameters.paths import validate_name, validate_namespace

from .base import ParameterBackend

logger = logging.getLogger(__name__)

# Sample data served by the development runner
DEMO_PARAMETERS: Tuple[dict, ...] = (
    {"namespace": "ortelius/dev", "name": "PORT", "value": "3001", "is_secure": False},
    {"namespace": "ortelius/dev", "name": "AWS_S3_SECRET_ACCESS_KEY", "value": "supersecret", "is_secure": True},
    {"namespace": "ortelius/prod", "name": "PORT", "value": "3001", "is_secure": False},
    {"namespace": "ortelius/prod", "name": "AWS_S3_SECRET_ACCESS_KEY", "value": "supersecret2", "is_secure": True},
)


class MemoryParameterBackend(ParameterBackend):
    kind = "memory"

    def __init__(self, seed: Optional[Iterable[dict]] = None) -> None:
        self._lock = RLock()
        self._store: Dict[int, Parameter] = {}
        self._next_id = 1
        for entry in seed or ():
            self.create(
                entry["namespace"],
                entry["name"],
                entry["value"],
                bool(entry.get("is_secure", False)),
            )

    def _find_id(self, namespace: str, name: str) -> Optional[int]:
        for pid, param in self._store.items():
            if param.namespace == namespace and param.name == name:
                return pid
        return None

    def _require_id(self, namespace: str, name: str) -> int:
        pid = self._find_id(namespace, name)
        if pid is None:
            raise NotFound(namespace, name)
        return pid

    def list(self, namespace: Optional[str] = None) -> Dict[str, List[Parameter]]:
        if namespace is not None:
            validate_namespace(namespace)
        grouped: Dict[str, List[Parameter]] = {}
        with self._lock:
            for param in self._store.values():
                if namespace is not None and param.namespace != namespace:
                    continue
                grouped.setdefault(param.namespace, []).append(param)
        return grouped

    def create(
        self,
        namespace: str,
        name: str,
        value: str,
        is_secure: bool = False,
        overwrite: bool = False,
    ) -> Parameter:
        validate_namespace(namespace)
        validate_name(name)
        validate_value(value)
        with self._lock:
            existing = self._find_id(namespace, name)
            if existing is not None:
                if not overwrite:
                    raise AlreadyExists(namespace, name)
                return self.update(namespace, name, value=value, is_secure=is_secure)
            pid = self._next_id
            self._next_id += 1
            param = Parameter(
                id=pid,
                namespace=namespace,
                name=name,
                value=value,
                is_secure=bool(is_secure),
                version=1,
            )
            self._store[pid] = param
        logger.debug("Created %s/%s (id=%d)", namespace, name, pid)
        return param

    def update(
        self,
        namespace: str,
        name: str,
        value: Optional[str] = None,
        is_secure: Optional[bool] = None,
        expected_version: Optional[int] = None,
    ) -> Parameter:
        validate_namespace(namespace)
        validate_name(name)
        if value is not None:
            validate_value(value)
        with self._lock:
            pid = self._require_id(namespace, name)
            current = self._store[pid]
            if expected_version is not None and current.version != expected_version:
                raise VersionConflict(namespace, name, expected_version, current.version)
            changes = {}
            if value is not None:
                changes["value"] = value
            if is_secure is not None:
                changes["is_secure"] = bool(is_secure)
            param = current.bumped(**changes)
            self._store[pid] = param
        logger.debug("Updated %s/%s to version %d", namespace, name, param.version)
        return param

    def delete(self, namespace: str, name: str) -> None:
        validate_namespace(namespace)
        validate_name(name)
        with self._lock:
            pid = self._require_id(namespace, name)
            del self._store[pid]
        logger.debug("Deleted %s/%s (id=%d)", namespace, name, pid)
