"""
Configuration management for the cloud-mcp server.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

log = logging.getLogger(__name__)

MODES = ("local", "proxy")

DEFAULTS: Dict[str, Any] = {
    "mode": "local",
    "proxy_target_url": "http://localhost:3000/api/mcp",
    "request_timeout": 60.0,
    "host": "127.0.0.1",
    "port": 8080,
    "path": "/api/mcp",
    "log_level": "INFO",
}

ENV_OVERRIDES = {
    "CLOUD_MCP_MODE": "mode",
    "CLOUD_MCP_TARGET_URL": "proxy_target_url",
    "CLOUD_MCP_REQUEST_TIMEOUT": "request_timeout",
}


class Config:
    """Manages configuration for the cloud-mcp server."""

    def __init__(self, config_file: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        """
        Load configuration.

        Args:
            config_file: YAML file to read; defaults to ~/.config/cloud-mcp/config.yaml
            environ: Environment mapping to read overrides from; defaults to os.environ
        """
        self.config_file = Path(config_file) if config_file else Path.home() / ".config" / "cloud-mcp" / "config.yaml"
        self.config = dict(DEFAULTS)
        self.config.update(self._load_config())
        self._apply_env(os.environ if environ is None else environ)

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file; a missing file is not an error."""
        if not self.config_file.exists():
            return {}
        try:
            with open(self.config_file, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            log.error(f"Error parsing YAML config file {self.config_file}: {e}")
            return {}
        except OSError as e:
            log.error(f"Error loading config file {self.config_file}: {e}", exc_info=True)
            return {}

        if not isinstance(data, dict):
            log.error(f"Config file {self.config_file} must contain a mapping, ignoring it")
            return {}

        unknown = set(data) - set(DEFAULTS)
        if unknown:
            log.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        return {key: value for key, value in data.items() if key in DEFAULTS}

    def _apply_env(self, environ) -> None:
        for variable, key in ENV_OVERRIDES.items():
            value = environ.get(variable)
            if value:
                log.debug(f"Config '{key}' overridden by {variable}")
                self.config[key] = value

    def set(self, key: str, value: Any) -> None:
        """Override a setting for this process, e.g. from a command line flag."""
        if value is not None:
            self.config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def get_mode(self) -> str:
        mode = str(self.config.get("mode", DEFAULTS["mode"])).lower()
        if mode not in MODES:
            log.warning(f"Unknown mode '{mode}', falling back to '{DEFAULTS['mode']}'")
            return DEFAULTS["mode"]
        return mode

    def get_target_url(self) -> str:
        return str(self.config.get("proxy_target_url") or DEFAULTS["proxy_target_url"])

    def get_request_timeout(self) -> float:
        value = self.config.get("request_timeout")
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            log.warning(f"Invalid request_timeout {value!r}, using {DEFAULTS['request_timeout']}")
            return DEFAULTS["request_timeout"]
        if timeout <= 0:
            log.warning(f"request_timeout must be positive, using {DEFAULTS['request_timeout']}")
            return DEFAULTS["request_timeout"]
        return timeout

    def get_port(self) -> int:
        value = self.config.get("port")
        try:
            return int(value)
        except (TypeError, ValueError):
            log.warning(f"Invalid port {value!r}, using {DEFAULTS['port']}")
            return DEFAULTS["port"]
