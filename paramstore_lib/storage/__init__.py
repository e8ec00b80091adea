"""Storage abstraction package for the parameter store.

`create_backend` is the only place that turns a configuration variant into
a bound backend. boto3 is only imported when an SSM client is actually
built.
"""
from __future__ import annotations
from typing import Any, Optional

from paramstore_lib.config.config import LocalConfig, RemoteConfig, StoreConfig

from .base import ParameterBackend
from .memory_backend import DEMO_PARAMETERS, MemoryParameterBackend
from .ssm_backend import SSMParameterBackend

__all__ = [
    "ParameterBackend",
    "MemoryParameterBackend",
    "SSMParameterBackend",
    "create_backend",
    "create_ssm_client",
]


def create_ssm_client(config: RemoteConfig) -> Any:
    """Build a boto3 SSM client bound to the configured region/endpoint."""
    import boto3
    from botocore.config import Config as BotoConfig

    session = boto3.Session(
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        region_name=config.region,
    )
    return session.client(
        "ssm",
        region_name=config.region,
        endpoint_url=config.endpoint_url,
        config=BotoConfig(
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            retries={"max_attempts": config.max_attempts, "mode": "standard"},
        ),
    )


def create_backend(config: StoreConfig, client: Optional[Any] = None) -> ParameterBackend:
    """Return the backend for `config`.

    `client` lets callers (tests, scripts) inject a pre-built SSM client
    instead of having one created from `config`.
    """
    if isinstance(config, RemoteConfig):
        return SSMParameterBackend(client if client is not None else create_ssm_client(config))
    if isinstance(config, LocalConfig):
        return MemoryParameterBackend(seed=DEMO_PARAMETERS if config.seed_demo_data else None)
    raise TypeError(f"Unsupported backend configuration: {type(config).__name__}")

