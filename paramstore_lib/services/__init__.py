"""Services package: DI container and the resolver used by the routers."""
from .container import ServiceContainer
from .resolver import resolve_service, resolve_optional_service

__all__ = [
    "ServiceContainer",
    "resolve_service",
    "resolve_optional_service",
]
