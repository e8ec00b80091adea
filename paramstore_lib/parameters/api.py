"""
REST API endpoints for parameter management.

Namespaces may span several path segments (`ortelius/dev`), so they are
captured with the `path` converter. Secure values are masked in every
response unless the caller passes `?reveal=true`. Handlers are plain
functions so blocking SSM calls run in the threadpool.
"""
from typing import Optional

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel
from starlette.responses import JSONResponse

from paramstore_lib.services.resolver import resolve_service
from .env_import import import_env
from .errors import (
    AlreadyExists,
    BackendUnavailable,
    NotFound,
    ParameterStoreError,
    ValidationError,
    VersionConflict,
)

import logging
router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 400,
    NotFound: 404,
    AlreadyExists: 409,
    VersionConflict: 409,
    BackendUnavailable: 503,
}


class VariablePayload(BaseModel):
    name: str
    value: str
    isSecure: bool = False


class VariableUpdatePayload(BaseModel):
    value: Optional[str] = None
    isSecure: Optional[bool] = None
    expectedVersion: Optional[int] = None


class ImportPayload(BaseModel):
    content: str
    isSecure: Optional[bool] = None


def status_for_error(exc: ParameterStoreError) -> int:
    for exc_type, status in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return status
    return 500


async def parameter_store_error_handler(request: Request, exc: ParameterStoreError) -> JSONResponse:
    status = status_for_error(exc)
    if status >= 500:
        logger.error("Parameter store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"message": str(exc), "error": type(exc).__name__})


@router.get('/parameters')
def api_parameters_list(request: Request, reveal: bool = False):
    store = resolve_service(request, 'parameter_store')
    grouped = store.list_all()
    return {ns: [p.to_dict(reveal=reveal) for p in params] for ns, params in grouped.items()}


@router.post('/parameters/{namespace:path}/variables', status_code=201)
def api_variable_create(request: Request, namespace: str, payload: VariablePayload):
    store = resolve_service(request, 'parameter_store')
    param = store.create_variable(namespace, payload.name, payload.value, payload.isSecure)
    return param.to_dict()


@router.post('/parameters/{namespace:path}/import')
def api_variables_import(request: Request, namespace: str, payload: ImportPayload):
    """Import a `.env` file body into `namespace` (update-or-create per entry)."""
    store = resolve_service(request, 'parameter_store')
    report = import_env(store, namespace, payload.content, is_secure=payload.isSecure)
    if not report.ok:
        logger.warning("Import into %s completed with %d failure(s)", namespace, len(report.failed))
    return report.to_dict()


@router.patch('/parameters/{namespace:path}/variables/{name}')
def api_variable_update(request: Request, namespace: str, name: str, payload: VariableUpdatePayload):
    store = resolve_service(request, 'parameter_store')
    param = store.update_variable(
        namespace,
        name,
        value=payload.value,
        is_secure=payload.isSecure,
        expected_version=payload.expectedVersion,
    )
    return param.to_dict()


@router.delete('/parameters/{namespace:path}/variables/{name}', status_code=204)
def api_variable_delete(request: Request, namespace: str, name: str):
    store = resolve_service(request, 'parameter_store')
    store.delete_variable(namespace, name)
    return Response(status_code=204)


@router.get('/parameters/{namespace:path}')
def api_namespace_list(request: Request, namespace: str, reveal: bool = False):
    store = resolve_service(request, 'parameter_store')
    return [p.to_dict(reveal=reveal) for p in store.list_namespace(namespace)]


@router.post('/namespaces/{namespace:path}', status_code=201)
def api_namespace_create(request: Request, namespace: str, payload: VariablePayload):
    """Create a new namespace together with its first variable.

    Fails with 409 when the namespace already holds entries.
    """
    store = resolve_service(request, 'parameter_store')
    param = store.create_namespace_with_variable(namespace, payload.name, payload.value, payload.isSecure)
    return param.to_dict()
