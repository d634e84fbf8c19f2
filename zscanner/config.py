from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, ConfigDict

__all__ = [
    "DEFAULT_PORT",
    "Settings",
    "load_settings",
]

DEFAULT_PORT = 10805
_FALSE_FLAGS = {"", "0", "false", "no", "off"}


class Settings(BaseModel):
    """Immutable service configuration, built once at process start.

    Hand it explicitly to whatever needs it (see `zscanner.main.create_app`)
    instead of reading the environment from inside handlers.
    """

    model_config = ConfigDict(frozen=True)

    port: int = DEFAULT_PORT
    node_env: str = "development"
    debug_level: str = "debug"

    verify_client_tag: bool = False

    seacat_endpoint: Optional[str] = None
    seacat_username: Optional[str] = None
    seacat_password: Optional[str] = None

    authenticator: str = "none"
    document_storage: str = "demo"

    router_prefix: str = "/api-zscanner"

    @property
    def is_production(self) -> bool:
        return self.node_env == "production"


def _port(raw: str | None) -> int:
    """Parse PORT; anything unparsable or zero falls back to the default."""
    if raw is None:
        return DEFAULT_PORT
    try:
        val = int(raw.strip(), 10)
    except ValueError:
        return DEFAULT_PORT
    return val or DEFAULT_PORT


def _flag(raw: str | None) -> bool:
    if raw is None:
        return False
    return raw.strip().lower() not in _FALSE_FLAGS


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read the environment (``os.environ`` by default) into a `Settings`."""
    env = os.environ if environ is None else environ

    def _str(key: str, default: str) -> str:
        return env.get(key) or default

    return Settings(
        port=_port(env.get("PORT")),
        node_env=_str("NODE_ENV", "development"),
        debug_level=_str("DEBUG_LEVEL", "debug"),
        verify_client_tag=_flag(env.get("VERIFY_CLIENT_TAG")),
        seacat_endpoint=env.get("SEACAT_ENDPOINT"),
        seacat_username=env.get("SEACAT_USERNAME"),
        seacat_password=env.get("SEACAT_PASSWORD"),
        authenticator=_str("ZSCANNER_AUTHENTICATOR", "none"),
        document_storage=_str("ZSCANNER_STORAGE", "demo"),
        router_prefix=_str("ROUTER_PREFIX", "/api-zscanner"),
    )
