"""Backend configuration for the parameter store.

Configuration comes from two places: the optional YAML server config
(`data/config/server_config.yml`) and the process environment. Environment
variables win over the YAML file. The result is one of two typed variants,
`RemoteConfig` or `LocalConfig`, which `paramstore_lib.storage.create_backend`
turns into a bound backend.

Recognised YAML keys:

    backend: auto | memory | ssm
    aws_region: eu-west-3
    ssm_endpoint_url: http://localhost:4566
    seed_demo_data: false
    log_level: INFO
"""
from __future__ import annotations
import argparse
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("data/config/server_config.yml")
DEFAULT_AWS_REGION = "eu-west-3"
BACKEND_CHOICES = ("auto", "memory", "ssm")


class ConfigurationError(ValueError):
    """Raised when the server configuration cannot be turned into a backend."""


@dataclass(frozen=True)
class RemoteConfig:
    region: str = DEFAULT_AWS_REGION
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    connect_timeout: float = 5.0
    read_timeout: float = 10.0
    max_attempts: int = 3

    def masked(self) -> Dict[str, Any]:
        """Return a printable view without the secret key."""
        data = asdict(self)
        if data.get("secret_access_key"):
            data["secret_access_key"] = "********"
        return data


@dataclass(frozen=True)
class LocalConfig:
    seed_demo_data: bool = False

    def masked(self) -> Dict[str, Any]:
        return asdict(self)


StoreConfig = Union[RemoteConfig, LocalConfig]


def load_server_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Read the YAML server config, returning an empty mapping if it is absent."""
    cfg_path = config_path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        return {}
    with cfg_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid config format in {cfg_path}: parse error") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"invalid config format in {cfg_path}: expected mapping")
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def load_store_config(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> StoreConfig:
    """Resolve the backend configuration from the YAML file and environment.

    With `backend: auto` (the default) the remote backend is chosen only
    when both AWS credentials are present. Asking for `ssm` explicitly
    without credentials is a configuration error rather than a silent
    fallback.
    """
    env = os.environ if environ is None else environ
    file_cfg = load_server_config(config_path)

    backend = str(env.get("PARAMSTORE_BACKEND") or file_cfg.get("backend") or "auto").lower()
    if backend not in BACKEND_CHOICES:
        raise ConfigurationError(f"unknown backend '{backend}', expected one of {', '.join(BACKEND_CHOICES)}")

    access_key = env.get("AWS_ACCESS_KEY_ID") or None
    secret_key = env.get("AWS_SECRET_ACCESS_KEY") or None
    has_credentials = bool(access_key and secret_key)

    if backend == "memory" or (backend == "auto" and not has_credentials):
        seed = env.get("PARAMSTORE_SEED_DEMO_DATA", file_cfg.get("seed_demo_data", False))
        logger.info("Using in-memory parameter backend")
        return LocalConfig(seed_demo_data=_as_bool(seed))

    if not has_credentials:
        raise ConfigurationError(
            "SSM backend requested but AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are not set"
        )

    region = env.get("AWS_REGION") or file_cfg.get("aws_region") or DEFAULT_AWS_REGION
    endpoint = env.get("PARAMSTORE_SSM_ENDPOINT") or file_cfg.get("ssm_endpoint_url") or None
    logger.info("Using SSM parameter backend in region %s", region)
    return RemoteConfig(
        region=region,
        endpoint_url=endpoint,
        access_key_id=access_key,
        secret_access_key=secret_key,
        connect_timeout=float(file_cfg.get("connect_timeout", RemoteConfig.connect_timeout)),
        read_timeout=float(file_cfg.get("read_timeout", RemoteConfig.read_timeout)),
        max_attempts=int(file_cfg.get("max_attempts", RemoteConfig.max_attempts)),
    )


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Parameter store server")
    p.add_argument("--print-config", action="store_true", help="Print the resolved backend configuration and exit")
    p.add_argument("--config", type=Path, default=None, help="Path to the YAML server config")
    p.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    p.add_argument("--port", type=int, default=5500, help="Port to listen on")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    args, _ = parser.parse_known_args(argv)
    return args


def describe_config(config: StoreConfig) -> str:
    """Render `config` as YAML for `--print-config`, secrets masked."""
    kind = "ssm" if isinstance(config, RemoteConfig) else "memory"
    return yaml.safe_dump({"backend": kind, **config.masked()}, sort_keys=False)
