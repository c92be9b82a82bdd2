"""
Settings loading.

Policies can be stored as a JSON settings document next to an agent. The
file is read on every request so edits apply without a restart. Values are
coerced leniently: lists may be given as newline-separated strings, and
booleans as numbers or "true"/"false" strings.
"""

from __future__ import annotations

import json
import logging
import math
import os
from typing import Any, Iterable, Mapping

from shellgate.security.policy import SecurityPolicy

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "shellgate_settings.json"

FALLBACK_SETTINGS_PATHS: tuple[str, ...] = (
    os.path.join("agents", "default", SETTINGS_FILENAME),
)

_TRUE_STRINGS = {"1", "t", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "f", "false", "no", "off"}


def parse_string_list(value: Any) -> list[str]:
    """Coerce a newline-separated string or a list into a list of trimmed, non-empty strings."""
    if isinstance(value, str):
        items: Iterable[Any] = value.split("\n")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return []
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]


def parse_bool(value: Any) -> bool | None:
    """Coerce a bool, number or boolean string. Returns None when unrecognized."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def parse_int(value: Any) -> int | None:
    """Coerce a number or numeric string. Returns None when unrecognized."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # json.load yields inf for 1e400 and Infinity, nan for NaN
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def policy_from_settings(raw: Mapping[str, Any]) -> SecurityPolicy:
    """
    Build a policy from a settings document.

    Keys that are missing, empty or of an unusable type keep the built-in
    default value.
    """
    policy = SecurityPolicy.standard()

    if "timeout_seconds" in raw:
        timeout = parse_int(raw["timeout_seconds"])
        if timeout is not None and timeout > 0:
            policy.timeout_seconds = timeout

    if "default_working_dir" in raw:
        dirs = parse_string_list(raw["default_working_dir"])
        if dirs:
            policy.default_working_dir = dirs[0]

    if "allowed_working_dirs" in raw:
        dirs = parse_string_list(raw["allowed_working_dirs"])
        if dirs:
            policy.allowed_working_dirs = dirs

    if "allowed_patterns" in raw:
        patterns = parse_string_list(raw["allowed_patterns"])
        if patterns:
            policy.allowed_patterns = patterns

    if "blocked_patterns" in raw:
        patterns = parse_string_list(raw["blocked_patterns"])
        if patterns:
            policy.blocked_patterns = patterns

    for key in ("allow_shell_metacharacters", "strict_containment"):
        if key in raw:
            flag = parse_bool(raw[key])
            if flag is not None:
                setattr(policy, key, flag)

    return policy


def read_settings_file(path: str) -> dict[str, Any] | None:
    """Read a settings file, returning None if it is missing or not a JSON object."""
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.debug("Skipping settings file %s: %s", path, e)
        return None

    if not isinstance(raw, dict):
        logger.debug("Skipping settings file %s: not a JSON object", path)
        return None
    return raw


def settings_paths(agent_dir: str | None = None) -> list[str]:
    """Return the settings files to try, in order."""
    paths = []
    if agent_dir:
        paths.append(os.path.join(agent_dir, SETTINGS_FILENAME))
    paths.extend(FALLBACK_SETTINGS_PATHS)
    return paths


def load_policy(
    agent_dir: str | None = None,
    *,
    paths: Iterable[str] | None = None,
) -> SecurityPolicy:
    """
    Load the policy from the first readable settings file.

    Args:
        agent_dir: Agent directory searched first for the settings file.
        paths: Explicit list of files to try instead of the default search.

    Returns:
        The loaded policy, or the built-in standard policy if no file is usable.
    """
    for path in paths if paths is not None else settings_paths(agent_dir):
        raw = read_settings_file(path)
        if raw is not None:
            logger.debug("Loaded settings from %s", path)
            return policy_from_settings(raw)
    return SecurityPolicy.standard()


def default_settings() -> dict[str, Any]:
    """Return the built-in policy as a settings document."""
    return SecurityPolicy.standard().to_settings()
