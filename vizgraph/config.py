"""Render settings, read from a TOML file and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import graphviz

from .errors import ConfigError

ENGINE_ENV_VAR = "VIZGRAPH_ENGINE"


@dataclass(frozen=True)
class RenderConfig:
    engine: str = "dot"  # Graphviz layout program
    width: str = "100%"
    height: str = "100%"
    title: str | None = None
    highlight_property: str = "fill"
    highlight_value: str = "orange"


def load_config(path: Path | None = None, *, environ: Mapping[str, str] | None = None) -> RenderConfig:
    """
    Build a RenderConfig from the `[render]` table of a TOML file.

    `VIZGRAPH_ENGINE` in the environment overrides the engine setting. The
    engine must be a layout program the graphviz package knows.
    """
    import tomllib

    cfg = RenderConfig()

    if path is not None:
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"{path}: {e}") from e
        cfg = _apply(cfg, data.get("render", {}))

    env = os.environ if environ is None else environ
    engine = env.get(ENGINE_ENV_VAR, "").strip()
    if engine:
        cfg = replace(cfg, engine=engine)

    if cfg.engine not in graphviz.ENGINES:
        raise ConfigError(f"Unknown layout engine {cfg.engine!r} (one of: {', '.join(sorted(graphviz.ENGINES))})")

    return cfg


def _apply(cfg: RenderConfig, section: Any) -> RenderConfig:
    if not isinstance(section, dict):
        raise ConfigError("[render] must be a table")

    known = {f.name for f in fields(RenderConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"Unknown [render] setting(s): {', '.join(unknown)}")

    values: dict[str, str] = {}
    for name, value in section.items():
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            raise ConfigError(f"[render] {name} must be a string")
        values[name] = str(value)
    return replace(cfg, **values)
