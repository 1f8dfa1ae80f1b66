"""Runtime configuration loader for adjacency computation runs."""

import json
import os
from typing import Any, Dict, Optional

from .constants import (
    DEFAULT_BACKEND,
    DEFAULT_DELIMITER,
    DEFAULT_N_JOBS,
    ID_KEY_PREFIX,
    KNOWN_ID_KEYS,
    SUPPORTED_BACKENDS,
)

DEFAULT_CONFIG: Dict[str, Any] = {
    "delimiter": DEFAULT_DELIMITER,
    "n_jobs": DEFAULT_N_JOBS,
    "backend": DEFAULT_BACKEND,
    "known_id_keys": list(KNOWN_ID_KEYS),
    "id_prefix": ID_KEY_PREFIX,
    "log_level": "INFO",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}

    if os.getenv("RG_N_JOBS"):
        try:
            overrides["n_jobs"] = int(os.getenv("RG_N_JOBS"))
        except ValueError as error:
            raise ValueError("Environment variable RG_N_JOBS must be an integer.") from error
    if os.getenv("RG_BACKEND"):
        overrides["backend"] = os.getenv("RG_BACKEND").strip()
    if os.getenv("RG_DELIMITER"):
        overrides["delimiter"] = os.getenv("RG_DELIMITER")
    if os.getenv("RG_LOG_LEVEL"):
        overrides["log_level"] = os.getenv("RG_LOG_LEVEL").strip().upper()

    return overrides


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    delimiter = config.get("delimiter")
    if not isinstance(delimiter, str) or not delimiter or "\n" in delimiter or "\r" in delimiter:
        raise ValueError("Config key 'delimiter' must be a non-empty single-line string.")

    n_jobs = config.get("n_jobs")
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, int) or n_jobs == 0:
        raise ValueError("Config key 'n_jobs' must be a non-zero integer.")

    if config.get("backend") not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Config key 'backend' must be one of {', '.join(SUPPORTED_BACKENDS)}; "
            f"got {config.get('backend')!r}."
        )

    keys = config.get("known_id_keys")
    if not isinstance(keys, (list, tuple)) or not all(isinstance(k, str) and k for k in keys):
        raise ValueError("Config key 'known_id_keys' must be a list of non-empty strings.")
    config["known_id_keys"] = list(keys)

    if not isinstance(config.get("id_prefix"), str) or not config["id_prefix"]:
        raise ValueError("Config key 'id_prefix' must be a non-empty string.")

    if config.get("log_level") not in _LOG_LEVELS:
        raise ValueError(f"Config key 'log_level' must be one of {', '.join(_LOG_LEVELS)}.")

    return config


def load_runtime_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the runtime configuration for one run.

    Defaults are overlaid with the optional JSON file at ``path`` and then
    with ``RG_*`` environment variables.

    Raises:
        FileNotFoundError: If ``path`` is given but does not exist.
        ValueError: If the file is not a JSON object, names unknown keys,
            or any value fails validation.
    """
    config = DEFAULT_CONFIG.copy()
    config["known_id_keys"] = list(DEFAULT_CONFIG["known_id_keys"])

    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Runtime config not found: {path}")

        with open(path, "r", encoding="utf-8") as handle:
            try:
                file_cfg = json.load(handle)
            except json.JSONDecodeError as error:
                raise ValueError(f"Runtime config is not valid JSON: {error}") from error

        if not isinstance(file_cfg, dict):
            raise ValueError("Runtime config must be a JSON object.")

        unknown = sorted(set(file_cfg) - set(DEFAULT_CONFIG))
        if unknown:
            raise ValueError(f"Runtime config has unknown keys: {', '.join(unknown)}")

        config.update(file_cfg)

    config.update(_env_overrides())

    return validate_config(config)
