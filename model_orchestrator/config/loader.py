import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from model_orchestrator.schemas import Capability

logger = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-(.*?))?\}")


def _substitute_env_vars(value: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        env_val = os.environ.get(var_name)
        if env_val is not None:
            return env_val
        return default if default is not None else ""

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _substitute_recursive(obj: Any) -> Any:
    if isinstance(obj, str):
        return _substitute_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _substitute_recursive(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_recursive(item) for item in obj]
    return obj


def load_capability_config(config_path: str | None = None) -> list[Capability] | None:
    """Load a capability catalog from YAML.

    Invalid entries and duplicate (provider, model) pairs are skipped with a
    warning. Returns None when the file is missing, malformed, or yields nothing.
    """
    if not config_path:
        return None

    path = Path(config_path)
    if not path.is_file():
        logger.warning("Capability config file not found: %s", config_path)
        return None

    try:
        raw = path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load capability config from %s: %s", config_path, e)
        return None

    if not isinstance(data, dict) or "capabilities" not in data:
        logger.warning("Capability config missing 'capabilities' key: %s", config_path)
        return None

    raw_entries = data["capabilities"]
    if not isinstance(raw_entries, list) or not raw_entries:
        logger.warning("Capability config 'capabilities' is empty or not a list: %s", config_path)
        return None

    capabilities: list[Capability] = []
    seen: set[str] = set()
    for i, entry in enumerate(raw_entries):
        entry = _substitute_recursive(entry)
        try:
            cap = Capability.model_validate(entry)
        except ValidationError as e:
            logger.warning("Skipping invalid capability entry %d in %s: %s", i, config_path, e)
            continue
        if cap.id in seen:
            logger.warning("Skipping duplicate capability %s in %s", cap.id, config_path)
            continue
        seen.add(cap.id)
        capabilities.append(cap)

    if not capabilities:
        logger.warning("No valid capabilities loaded from %s", config_path)
        return None

    logger.info("Loaded %d capability(ies) from YAML config: %s", len(capabilities), config_path)
    return capabilities
