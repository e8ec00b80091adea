"""Application factory for the parameter store FastAPI app.

This module exposes `create_app(config: Config) -> FastAPI` which performs
all setup (logging, backend selection, service composition, router
registration). Nothing happens at import time so tests can construct
isolated apps.

To create an app for production or local runs:

    from paramstore_lib.main import create_app, Config
    app = create_app(Config())
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paramstore_lib.config.config import LocalConfig, StoreConfig, load_store_config
from paramstore_lib.logging_config import configure_logging
from paramstore_lib.parameters.errors import ParameterStoreError
from paramstore_lib.parameters.service import ParameterStore, create_parameter_store


@dataclass
class Config:
    config_path: Optional[Path] = None
    # `memory` forces the in-memory backend regardless of credentials;
    # None resolves the backend from the server config and environment.
    storage_backend: Optional[str] = None
    seed_demo_data: bool = False
    # Pre-built store, used by tests to share state with the app
    parameter_store: Optional[ParameterStore] = None
    cors_allow_origins: tuple = ("*",)


def _resolve_store_config(config: Config) -> StoreConfig:
    if config.storage_backend == "memory":
        return LocalConfig(seed_demo_data=config.seed_demo_data)
    return load_store_config(config_path=config.config_path)


def create_app(config: Config) -> FastAPI:
    """Create and return a configured FastAPI application."""
    logger = configure_logging(config.config_path)

    store = config.parameter_store
    if store is None:
        store = create_parameter_store(_resolve_store_config(config))
    logger.info("Parameter store using %s backend", store.backend_kind)

    from paramstore_lib.services import ServiceContainer

    container = ServiceContainer()
    container.register_singleton("parameter_store", store)

    app = FastAPI(title="Parameter Store")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=86400,
    )

    from paramstore_lib.parameters.api import parameter_store_error_handler
    app.add_exception_handler(ParameterStoreError, parameter_store_error_handler)

    # Router registration: import routers here to avoid import-time side-effects
    from paramstore_lib.parameters.api import router as parameters_router
    from paramstore_lib.server.api import router as server_router

    app.include_router(parameters_router, prefix='/api')
    app.include_router(server_router, prefix='/api')

    return app
