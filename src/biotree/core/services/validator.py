from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (settings file, CLI
overrides) and the immutable AppConfig. Handles type coercion, path
normalization and default value injection.
"""

import logging
from typing import Any, Dict, List, Tuple

from biotree.domain.config import AppConfig, get_default_config
from biotree.domain.constants import ROOT_CATEGORIES
from biotree.domain.errors import InvalidRootCategoryError
from biotree.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[AppConfig, List[str]]:
    """
    Validate and normalize a raw configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[AppConfig, List[str]]: The normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        config = {}

    unknown = sorted(k for k in config if k not in defaults)
    for key in unknown:
        warnings.append(f"Unknown configuration key '{key}' ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    # 2. Schema Definition
    string_fields = [
        "data_root", "registry_file", "public_dir", "history_subdir",
        "snapshot_base_name", "data_extension", "document_title", "host",
        "default_root_category", "log_level",
    ]
    path_fields = ["data_root", "registry_file", "public_dir"]

    # 3. Field Processing
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_file"] = _as_str(merged.get("log_file"), "", "log_file", warnings, strict)
    merged["port"] = _as_port(merged.get("port"), defaults["port"], warnings, strict)
    merged["open_browser"] = _as_bool(
        merged.get("open_browser"), defaults["open_browser"], "open_browser", warnings, strict
    )

    # 4. Domain-Specific Normalization
    for field in path_fields:
        merged[field] = normalize_path(merged[field], defaults[field])
    if merged["log_file"]:
        merged["log_file"] = normalize_path(merged["log_file"], merged["log_file"])

    merged["data_extension"] = _normalize_extension(merged["data_extension"], warnings, strict)

    if merged["default_root_category"] not in ROOT_CATEGORIES:
        if strict:
            raise InvalidRootCategoryError(merged["default_root_category"], ROOT_CATEGORIES)
        warnings.append(
            f"Invalid default_root_category '{merged['default_root_category']}'. "
            f"Using '{defaults['default_root_category']}'."
        )
        merged["default_root_category"] = defaults["default_root_category"]

    return AppConfig(**merged), warnings


def validate_root_category(root_category: str) -> str:
    """
    Check a requested tree ordering against the supported root categories.

    Raises:
        InvalidRootCategoryError: If the value is not supported.
    """
    if root_category not in ROOT_CATEGORIES:
        raise InvalidRootCategoryError(root_category, ROOT_CATEGORIES)
    return root_category


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_port(value: Any, fallback: int, warnings: List[str], strict: bool) -> int:
    """Accept integers (or numeric strings when lenient) within the TCP range."""
    port = None
    if isinstance(value, int) and not isinstance(value, bool):
        port = value
    elif isinstance(value, str) and not strict and value.strip().isdigit():
        port = int(value.strip())
    elif value is None:
        return fallback

    if port is not None and 0 < port < 65536:
        return port

    msg = f"Invalid field 'port': {value!r} is not a valid TCP port."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extension(ext: str, warnings: List[str], strict: bool) -> str:
    """Ensure the data extension is prefixed with a dot."""
    e = ext.strip()
    if not e.startswith("."):
        if strict:
            raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
        warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
        e = "." + e
    return e
