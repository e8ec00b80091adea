from fastapi import APIRouter, Request
from paramstore_lib.services.resolver import resolve_optional_service
from .health import get_health

router = APIRouter()


@router.get('/health')
async def api_health(request: Request):
    store = resolve_optional_service(request, 'parameter_store')
    return get_health(store.backend_kind if store is not None else None)
