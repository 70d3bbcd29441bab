"""Unified configuration layer for provider adapters.

Merge order (later wins)
------------------------
1. Built-in defaults (``config.defaults``)
2. Optional external config file (JSON, or YAML) pointed to by RELAY_CONFIG_FILE
3. Environment variables (``<PROVIDER>_MODEL``, ``<PROVIDER>_API_KEY``, ...)
4. In-code overrides passed to ``get_provider_config``

Environment Variable Conventions
--------------------------------
<PROVIDER>_MODEL, <PROVIDER>_API_KEY, <PROVIDER>_BASE_URL, <PROVIDER>_TIMEOUT,
<PROVIDER>_MAX_RETRIES, e.g. ARK_MODEL, QIANFAN_BASE_URL. API keys are also
looked up under the aliases listed in ``config.env`` (GOOGLE_API_KEY for
gemini). A ``.env`` file (path from DOTENV_FILE, default ``./.env``) is loaded
once before the environment is read.

External Config File
--------------------
```
ark:
  model: ep-20240101000000-abcde
  timeout: 300
qianfan:
  model: ernie-4.0-8k
  temperature: 0.5
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

import yaml

from .env import is_placeholder, resolve_provider_key
from .defaults import (
    ARK_DEFAULT_BASE_URL,
    ARK_DEFAULT_MAX_RETRIES,
    ARK_DEFAULT_TIMEOUT,
    GEMINI_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
    QIANFAN_DEFAULT_BASE_URL,
    QIANFAN_DEFAULT_MODEL,
    QIANFAN_DEFAULT_PARALLEL_TOOL_CALLS,
    QIANFAN_DEFAULT_TEMPERATURE,
    QIANFAN_DEFAULT_TOP_P,
)


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "ark": {
        "base_url": ARK_DEFAULT_BASE_URL,
        "max_retries": ARK_DEFAULT_MAX_RETRIES,
        "timeout": ARK_DEFAULT_TIMEOUT,
    },
    "qianfan": {
        "model": QIANFAN_DEFAULT_MODEL,
        "base_url": QIANFAN_DEFAULT_BASE_URL,
        "temperature": QIANFAN_DEFAULT_TEMPERATURE,
        "top_p": QIANFAN_DEFAULT_TOP_P,
        "parallel_tool_calls": QIANFAN_DEFAULT_PARALLEL_TOOL_CALLS,
    },
    "gemini": {"model": GEMINI_DEFAULT_MODEL},
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "timeout": "TIMEOUT",
    "max_retries": "MAX_RETRIES",
}

_NUMERIC_FIELDS = {"timeout": float, "max_retries": int, "temperature": float, "top_p": float, "max_tokens": int}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def reset_config_cache() -> None:
    """Forget the cached config file and ``.env`` state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables win unless they hold a placeholder value.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _load_external_config() -> Dict[str, Any]:
    """Load RELAY_CONFIG_FILE once; JSON first, then YAML.

    Raises:
        ValueError: the file exists but is neither JSON nor YAML mapping.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("RELAY_CONFIG_FILE")
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"config file {path} is neither valid JSON nor YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must contain a mapping of provider sections")
    _FILE_CACHE = data
    return data


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and val != "":
            out[field] = val
    if "api_key" not in out or is_placeholder(out["api_key"]):
        key, _ = resolve_provider_key(provider)
        if key:
            out["api_key"] = key
        else:
            out.pop("api_key", None)
    return out


def _coerce(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for field, kind in _NUMERIC_FIELDS.items():
        if isinstance(cfg.get(field), str):
            try:
                cfg[field] = kind(cfg[field])
            except ValueError as exc:
                raise ValueError(f"invalid {field} value {cfg[field]!r}") from exc
    return cfg


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    Numeric fields given as strings (env vars) are converted.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return _coerce(cfg)


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]
