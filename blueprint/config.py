"""Shared blueprint configuration utilities.

Reads ~/.blueprint/configuration.json so the CLI, the engine and embedding
applications agree on visit timings and recursion limits.

Example file:

    {
      "engine": {"node_visit_seconds": 0.15, "edge_visit_seconds": 0.3},
      "logging": {"level": "INFO", "format": "human"}
    }
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

NODE_VISIT_SECONDS = 0.15
EDGE_VISIT_SECONDS = 0.3

# Backstops against runaway nesting. Every level costs a few coroutine frames,
# so both together stay below the interpreter recursion limit.
DEFAULT_MAX_RESOLVE_DEPTH = 48
DEFAULT_MAX_EXEC_DEPTH = 160

# ---------------------------------------------------------------------------
# Low-level config file access
# ---------------------------------------------------------------------------

BLUEPRINT_CONFIG_FILE = Path.home() / ".blueprint" / "configuration.json"


def get_blueprint_config() -> dict[str, Any]:
    """Load configuration from ~/.blueprint/configuration.json ({} if absent or broken)."""
    if not BLUEPRINT_CONFIG_FILE.exists():
        return {}
    try:
        with open(BLUEPRINT_CONFIG_FILE, encoding="utf-8-sig") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError):
        return {}


# ---------------------------------------------------------------------------
# Derived helpers
# ---------------------------------------------------------------------------


def get_logging_settings() -> dict[str, str]:
    """Return the ``logging`` section with level/format defaults filled in."""
    settings = get_blueprint_config().get("logging", {})
    return {
        "level": settings.get("level", "INFO"),
        "format": settings.get("format", "auto"),
    }


# ---------------------------------------------------------------------------
# EngineConfig
# ---------------------------------------------------------------------------


ENGINE_DEFAULTS: dict[str, float | int] = {
    "node_visit_seconds": NODE_VISIT_SECONDS,
    "edge_visit_seconds": EDGE_VISIT_SECONDS,
    "max_resolve_depth": DEFAULT_MAX_RESOLVE_DEPTH,
    "max_exec_depth": DEFAULT_MAX_EXEC_DEPTH,
}


@dataclass
class EngineConfig:
    """
    Engine timing and recursion limits.

    Fields left as None are filled from the ``engine`` section of the
    configuration file, read at most once per instance, then from the
    built-in defaults.
    """

    node_visit_seconds: float | None = None
    edge_visit_seconds: float | None = None
    max_resolve_depth: int | None = None
    max_exec_depth: int | None = None

    def __post_init__(self) -> None:
        missing = [f.name for f in fields(self) if getattr(self, f.name) is None]
        if not missing:
            return

        settings = get_blueprint_config().get("engine", {})
        for name in missing:
            default = ENGINE_DEFAULTS[name]
            setattr(self, name, type(default)(settings.get(name, default)))
