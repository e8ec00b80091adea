"""AWS SSM Parameter Store backend.

Every entry lives at `/<namespace>/<name>` in SSM. The backend receives a
boto3 SSM client that is already bound to a region/endpoint; building that
client is the job of `paramstore_lib.storage.create_backend`.

SSM exposes a single `PutParameter` primitive. Creates pass
`Overwrite=False` so an existing key makes the call fail, updates pass
`Overwrite=True`. Note that an update of a missing key therefore creates
it at version 1 (upsert), unlike the in-memory backend which raises
NotFound.
"""
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from paramstore_lib.parameters.errors import (
    AlreadyExists,
    BackendUnavailable,
    NotFound,
    ValidationError,
    VersionConflict,
)
from paramstore_lib.parameters.models import Parameter, validate_value
from paramstore_lib.parameters import paths

from .base import ParameterBackend

logger = logging.getLogger(__name__)

SECURE_TYPE = "SecureString"
PLAIN_TYPE = "String"


def _error_code(err: ClientError) -> str:
    return err.response.get("Error", {}).get("Code", "")


def _param_type(is_secure: bool) -> str:
    return SECURE_TYPE if is_secure else PLAIN_TYPE


class SSMParameterBackend(ParameterBackend):
    kind = "ssm"

    def __init__(self, client: Any, *, page_size: Optional[int] = None) -> None:
        logger.info("Using SSMParameterBackend")
        self._client = client
        self._page_size = page_size

    @contextmanager
    def _translate_errors(self, action: str, namespace: str, name: Optional[str] = None) -> Iterator[None]:
        """Map botocore failures onto the parameter store error taxonomy."""
        try:
            yield
        except ClientError as e:
            code = _error_code(e)
            if code == "ParameterNotFound":
                raise NotFound(namespace, name) from e
            if code == "ParameterAlreadyExists":
                raise AlreadyExists(namespace, name) from e
            if code in ("ValidationException", "ParameterPatternMismatchException"):
                raise ValidationError(str(e)) from e
            logger.warning("SSM %s failed for %s/%s: %s", action, namespace, name or "", code or e)
            raise BackendUnavailable(f"SSM {action} failed: {e}") from e
        except BotoCoreError as e:
            logger.warning("SSM %s failed for %s/%s: %s", action, namespace, name or "", e)
            raise BackendUnavailable(f"SSM {action} failed: {e}") from e

    def _to_parameter(self, raw: Dict[str, Any]) -> Parameter:
        full_path = raw.get("Name") or ""
        namespace, name = paths.decode(full_path)
        return Parameter(
            id=full_path,
            namespace=namespace,
            name=name,
            value=raw.get("Value") or "",
            is_secure=raw.get("Type") == SECURE_TYPE,
            version=int(raw.get("Version") or 1),
        )

    def _fetch_all(self, path: str, recursive: bool) -> List[Dict[str, Any]]:
        """Read every parameter under `path`, following NextToken until exhausted."""
        collected: List[Dict[str, Any]] = []
        request: Dict[str, Any] = {"Path": path, "Recursive": recursive, "WithDecryption": True}
        if self._page_size:
            request["MaxResults"] = self._page_size
        pages = 0
        while True:
            response = self._client.get_parameters_by_path(**request)
            pages += 1
            collected.extend(response.get("Parameters") or [])
            token = response.get("NextToken")
            if not token:
                break
            request["NextToken"] = token
        logger.debug("Fetched %d parameters under %s in %d page(s)", len(collected), path, pages)
        return collected

    def _get_current(self, namespace: str, name: str) -> Optional[Parameter]:
        try:
            with self._translate_errors("get", namespace, name):
                response = self._client.get_parameter(
                    Name=paths.encode(namespace, name), WithDecryption=True
                )
        except NotFound:
            return None
        return self._to_parameter(response["Parameter"])

    def list(self, namespace: Optional[str] = None) -> Dict[str, List[Parameter]]:
        path = paths.SEPARATOR if namespace is None else paths.namespace_prefix(namespace)
        with self._translate_errors("list", namespace or ""):
            raw_params = self._fetch_all(path, recursive=namespace is None)
        grouped: Dict[str, List[Parameter]] = {}
        for raw in raw_params:
            param = self._to_parameter(raw)
            grouped.setdefault(param.namespace, []).append(param)
        return grouped

    def _put(self, namespace: str, name: str, value: str, is_secure: bool, overwrite: bool) -> Parameter:
        full_path = paths.encode(namespace, name)
        action = "update" if overwrite else "create"
        with self._translate_errors(action, namespace, name):
            response = self._client.put_parameter(
                Name=full_path,
                Value=value,
                Type=_param_type(is_secure),
                Overwrite=overwrite,
            )
        version = int(response.get("Version") or 1)
        logger.debug("Put %s (overwrite=%s) -> version %d", full_path, overwrite, version)
        return Parameter(
            id=full_path,
            namespace=namespace,
            name=name,
            value=value,
            is_secure=bool(is_secure),
            version=version,
        )

    def create(
        self,
        namespace: str,
        name: str,
        value: str,
        is_secure: bool = False,
        overwrite: bool = False,
    ) -> Parameter:
        validate_value(value)
        return self._put(namespace, name, value, is_secure, overwrite)

    def update(
        self,
        namespace: str,
        name: str,
        value: Optional[str] = None,
        is_secure: Optional[bool] = None,
        expected_version: Optional[int] = None,
    ) -> Parameter:
        if value is not None:
            validate_value(value)
        current = None
        if value is None or is_secure is None or expected_version is not None:
            current = self._get_current(namespace, name)
            if current is None and (value is None or expected_version is not None):
                raise NotFound(namespace, name)
        if current is not None and expected_version is not None and current.version != expected_version:
            raise VersionConflict(namespace, name, expected_version, current.version)
        if value is None:
            value = current.value
        if is_secure is None:
            is_secure = current.is_secure if current is not None else False
        return self._put(namespace, name, value, is_secure, overwrite=True)

    def delete(self, namespace: str, name: str) -> None:
        full_path = paths.encode(namespace, name)
        with self._translate_errors("delete", namespace, name):
            self._client.delete_parameter(Name=full_path)
        logger.debug("Deleted %s", full_path)
