from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..protocol import PROTOCOL_VERSION

CONFIG_ENV = "TODO_MCP_CONFIG"
LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class ServerConfig:
    name: str = "mcp-todo-server"
    version: str = "1.0.0"
    protocol_version: str = PROTOCOL_VERSION
    supported_protocol_versions: tuple[str, ...] = ("2025-06-18", "2025-03-26")
    strict_protocol: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    file: str | None = None


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def load_config(config_path: str | None = None) -> AppConfig:
    config_path = config_path or os.getenv(CONFIG_ENV)
    env_level = os.getenv(LOG_LEVEL_ENV)

    raw: dict[str, Any] = {}
    if config_path:
        path = Path(config_path)
        if path.exists():
            raw = _load_json(path)

    server_raw = raw.get("server", {})
    logging_raw = raw.get("logging", {})
    defaults = ServerConfig()
    supported = server_raw.get("supported_protocol_versions", defaults.supported_protocol_versions)
    return AppConfig(
        server=ServerConfig(
            name=str(server_raw.get("name", defaults.name)),
            version=str(server_raw.get("version", defaults.version)),
            protocol_version=str(server_raw.get("protocol_version", defaults.protocol_version)),
            supported_protocol_versions=tuple(str(v) for v in supported),
            strict_protocol=bool(server_raw.get("strict_protocol", defaults.strict_protocol)),
        ),
        logging=LoggingConfig(
            level=str(env_level or logging_raw.get("level", "INFO")),
            file=logging_raw.get("file"),
        ),
    )
