"""
Secret Store Configuration

Configuration lives in a JSON file, /data/config/secretstore.json by default
(override the location with SECRETSTORE_CONFIG):

    {
        "url": "https://vault.internal:8200/v1",
        "token_path": "/var/run/secrets/kubernetes.io/serviceaccount/token",
        "cacert": "/etc/ssl/vault-ca.pem",
        "auth_mount": "kubernetes",
        "timeout": 10,
        "path_parser": "grammar",
        "op_service_account_env": "OP_SERVICE_ACCOUNT_TOKEN"
    }

Environment variables override the file: VAULT_ADDR, VAULT_CACERT,
VAULT_TOKEN_PATH and SECRETSTORE_PATH_PARSER.
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from .errors import ConfigError
from .path import PARSERS

logger = logging.getLogger(__name__)

# Base paths
CONFIG_DIR = Path("/data/config")
CONFIG_PATH = CONFIG_DIR / "secretstore.json"

# Default configuration if no config file exists
DEFAULT_CONFIG = {
    "url": "http://localhost:8200/v1",
    "token_path": "/var/run/secrets/kubernetes.io/serviceaccount/token",
    "cacert": "",
    "auth_mount": "kubernetes",
    "timeout": 10.0,
    "path_parser": "grammar",
    "op_service_account_env": "OP_SERVICE_ACCOUNT_TOKEN",
    "op_integration_name": "secretstore",
}

ENV_OVERRIDES = {
    "VAULT_ADDR": "url",
    "VAULT_CACERT": "cacert",
    "VAULT_TOKEN_PATH": "token_path",
    "SECRETSTORE_PATH_PARSER": "path_parser",
}


@dataclass
class ClientConfig:
    """Settings for the Vault transport, the parsers and the 1Password resolver."""
    url: str = DEFAULT_CONFIG["url"]
    token_path: str = DEFAULT_CONFIG["token_path"]
    cacert: str = DEFAULT_CONFIG["cacert"]
    auth_mount: str = DEFAULT_CONFIG["auth_mount"]
    timeout: float = DEFAULT_CONFIG["timeout"]
    path_parser: str = DEFAULT_CONFIG["path_parser"]
    op_service_account_env: str = DEFAULT_CONFIG["op_service_account_env"]
    op_integration_name: str = DEFAULT_CONFIG["op_integration_name"]

    def __post_init__(self):
        if self.path_parser not in PARSERS:
            available = ", ".join(PARSERS)
            raise ConfigError(f"Unknown path parser '{self.path_parser}'. Available: {available}")

    @classmethod
    def from_dict(cls, data: dict) -> "ClientConfig":
        """Build from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        values = {k: v for k, v in data.items() if k in known}
        if "timeout" in values:
            values["timeout"] = float(values["timeout"])
        return cls(**values)


def config_path() -> Path:
    return Path(os.getenv("SECRETSTORE_CONFIG", str(CONFIG_PATH)))


def load_config(path: Optional[Path] = None) -> ClientConfig:
    """
    Load configuration from file and environment.

    A missing file means defaults; a malformed file raises.

    Raises:
        ConfigError: If the file is not a JSON object or names an unknown path parser
    """
    path = path or config_path()
    data = dict(DEFAULT_CONFIG)

    if path.exists():
        try:
            loaded = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid secretstore config {path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Invalid secretstore config {path}: expected a JSON object")
        data.update(loaded)
        logger.info(f"Loaded secretstore config from {path}")
    else:
        logger.info("Using default secretstore configuration")

    for env, key in ENV_OVERRIDES.items():
        value = os.getenv(env)
        if value:
            data[key] = value

    return ClientConfig.from_dict(data)
