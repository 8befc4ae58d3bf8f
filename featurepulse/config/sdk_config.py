# featurepulse/config/sdk_config.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://featurepul.se"

# Environment variable -> SDKConfig field
ENV_VARS: Dict[str, str] = {
    "FEATUREPULSE_API_KEY": "api_key",
    "FEATUREPULSE_BASE_URL": "base_url",
    "FEATUREPULSE_BUNDLE_ID": "bundle_id",
    "FEATUREPULSE_REQUEST_TIMEOUT": "request_timeout",
    "FEATUREPULSE_STORAGE_PATH": "storage_path",
    "FEATUREPULSE_LOG_LEVEL": "log_level",
}


@dataclass(frozen=True)
class SDKConfig:
    """Runtime settings for one SDK instance.

    Built once at startup and handed to every component that needs it.
    An empty ``api_key`` is accepted here; requests made without one fail
    with ``MissingAPIKeyError`` before touching the network.
    """

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    bundle_id: str = "unknown"
    request_timeout: float = 30.0
    session_timeout_seconds: int = 1800
    default_lifetime_months: int = 24
    storage_path: Optional[str] = None
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str):
            raise ValueError("api_key must be a string")
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise ValueError("base_url must be a non-empty string")
        if not isinstance(self.bundle_id, str) or not self.bundle_id:
            raise ValueError("bundle_id must be a non-empty string")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if not isinstance(self.session_timeout_seconds, int) or self.session_timeout_seconds <= 0:
            raise ValueError("session_timeout_seconds must be a positive integer")
        if not isinstance(self.default_lifetime_months, int) or self.default_lifetime_months <= 0:
            raise ValueError("default_lifetime_months must be a positive integer")

    @property
    def normalized_base_url(self) -> str:
        return self.base_url.strip().rstrip("/")

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> "SDKConfig":
        if not data:
            return SDKConfig()
        if not isinstance(data, dict):
            raise ValueError("SDK config must be a JSON object.")

        storage_path = data.get("storage_path")

        return SDKConfig(
            api_key=str(data.get("api_key", "") or ""),
            base_url=str(data.get("base_url", DEFAULT_BASE_URL) or DEFAULT_BASE_URL),
            bundle_id=str(data.get("bundle_id", "unknown") or "unknown"),
            request_timeout=float(data.get("request_timeout", 30.0)),
            session_timeout_seconds=int(data.get("session_timeout_seconds", 1800)),
            default_lifetime_months=int(data.get("default_lifetime_months", 24)),
            storage_path=str(storage_path) if storage_path else None,
            log_level=str(data.get("log_level", "INFO")),
            log_to_file=bool(data.get("log_to_file", False)),
            log_dir=str(data.get("log_dir", "logs")),
        )

    @staticmethod
    def from_file(path: Union[str, Path]) -> "SDKConfig":
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError("SDK config root must be a JSON object.")

        return SDKConfig.from_dict(data)

    @staticmethod
    def from_env(env_file: Optional[Union[str, Path]] = None) -> "SDKConfig":
        """Build a config from ``FEATUREPULSE_*`` variables.

        Values from ``env_file`` (or a ``.env`` in the working directory)
        are loaded first; variables already set in the process win.
        """
        if env_file is not None:
            load_dotenv(env_file)
        else:
            load_dotenv()

        data: Dict[str, Any] = {}
        for var, field_name in ENV_VARS.items():
            value = os.getenv(var)
            if value:
                data[field_name] = value

        return SDKConfig.from_dict(data)
