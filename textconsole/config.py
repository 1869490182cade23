#!/usr/bin/env python3
# textconsole/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with TEXTCONSOLE_ (e.g. TEXTCONSOLE_PROMPT)

Keys may be written with or without the TEXTCONSOLE_ prefix inside files.

Validation:
  - PROMPT / UNRECOGNIZED_INPUT_TEXT: str (kept verbatim, may be empty)
  - BLANK_INPUT_COMMAND: None or a single alias (no spaces)
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH / HISTORY_FILE_PATH: None or normalized path
  - ENABLE_COMPLETION: bool
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from pathlib import Path
import configparser
import json
import os
import re
import tomllib  # stdlib in 3.11+

ENV_PREFIX = "TEXTCONSOLE_"

# ---------- defaults ----------

DEFAULT_PROMPT = ">_"
DEFAULT_UNRECOGNIZED_INPUT_TEXT = "Input unrecognized. Type help for more information about commands"

DEFAULTS: dict[str, Any] = {
    "PROMPT": DEFAULT_PROMPT,
    "UNRECOGNIZED_INPUT_TEXT": DEFAULT_UNRECOGNIZED_INPUT_TEXT,
    "BLANK_INPUT_COMMAND": None,    # alias of a zero-arity command run on blank lines
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
    "ENABLE_COMPLETION": True,
    "HISTORY_FILE_PATH": None,      # None keeps history in memory only
}


# ---------- data model ----------

@dataclass(slots=True)
class ConsoleConfig:
    """Settings owned by one console; changed through the console's setters."""
    prompt_text: str = DEFAULT_PROMPT
    unrecognized_input_text: str = DEFAULT_UNRECOGNIZED_INPUT_TEXT
    blank_input_command: str | None = None

    log_level: str | None = None
    log_file_path: Path | None = None
    enable_completion: bool = True
    history_file_path: Path | None = None

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser(interpolation=None)
    cfg.read(path, encoding="utf-8")  # missing files are skipped
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(cwd: Path) -> list[Path]:
    return [
        cwd / ".env",
        cwd / "config.ini",
        cwd / "config.json",
        cwd / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_text(val: Any, default: str) -> str:
    return default if val is None else str(val)


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_alias(val: Any) -> str | None:
    alias = _as_opt_str(val)
    if alias is not None and " " in alias:
        raise ValueError(
            f"BLANK_INPUT_COMMAND must be a single alias, got {alias!r}")
    return alias


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any, base: Path) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    p = Path(os.path.expandvars(os.path.expanduser(v)))
    return (p if p.is_absolute() else base / p).resolve()


def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in d.items():
        key = str(k).upper()
        if key.startswith(ENV_PREFIX):
            key = key[len(ENV_PREFIX):]
        out[key] = v
    return out


# ---------- merge & load ----------

def _merge_sources(cwd: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(cwd):
        if file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only prefixed keys are ours
    env_overrides = {k[len(ENV_PREFIX):]: v for k, v in environ.items()
                     if k.startswith(ENV_PREFIX)}
    merged.update(env_overrides)
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any], cwd: Path) -> ConsoleConfig:
    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ConsoleConfig(
        prompt_text=_as_text(config.get("PROMPT"), DEFAULT_PROMPT),
        unrecognized_input_text=_as_text(
            config.get("UNRECOGNIZED_INPUT_TEXT"), DEFAULT_UNRECOGNIZED_INPUT_TEXT),
        blank_input_command=_as_alias(config.get("BLANK_INPUT_COMMAND")),
        log_level=_as_log_level(config.get("LOG_LEVEL")),
        log_file_path=_as_opt_path(config.get("LOG_FILE_PATH"), cwd),
        enable_completion=_as_bool(config.get(
            "ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"])),
        history_file_path=_as_opt_path(config.get("HISTORY_FILE_PATH"), cwd),
        extra=extra,
    )


# ---------- public API ----------

def load_config(cwd: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> ConsoleConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects. Raises ValueError on invalid values.
    """
    base = Path.cwd() if cwd is None else Path(cwd)
    env = os.environ if environ is None else environ
    raw = _merge_sources(base, env)
    return _validate_and_build(raw, base)
