from __future__ import annotations
import logging
from pathlib import Path
import yaml
from typing import Optional

from paramstore_lib.config.config import DEFAULT_CONFIG_PATH


def configure_logging(config_path: Optional[Path] = None) -> logging.Logger:
    """Configure root logging for the application.

    Establishes an early NOTSET basic config so the server config can be
    read, then reconfigures the root logger to the `log_level` found in the
    YAML server config (WARNING when absent). Returns a module logger.
    """
    # Minimal early config so other imports can emit without error
    logging.basicConfig(level=logging.NOTSET, format='%(asctime)s INFO %(message)s')
    DEFAULT_LOG_LEVEL = logging.WARNING

    cfg_path = config_path or DEFAULT_CONFIG_PATH
    if cfg_path.exists():
        try:
            with cfg_path.open('r', encoding='utf-8') as _f:
                _cfg = yaml.safe_load(_f) or {}
                _lvl = _cfg.get('log_level') if isinstance(_cfg, dict) else None
                if isinstance(_lvl, str):
                    _numeric = getattr(logging, _lvl.upper(), None)
                    if isinstance(_numeric, int):
                        DEFAULT_LOG_LEVEL = _numeric
        except (OSError, yaml.YAMLError):
            logging.exception('Failed to read server configuration for logging setup')

    logging.log(100, f'[paramstore]: Log level set to: {logging.getLevelName(DEFAULT_LOG_LEVEL)}')

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=DEFAULT_LOG_LEVEL, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)

    # Keep known noisy libraries quiet by default
    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logger.info("Starting parameter store server")

    return logger
