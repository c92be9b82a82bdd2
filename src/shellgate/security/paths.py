"""
Working directory resolution and containment.

Paths are made absolute but symlinks are not resolved, so a link inside an
allowed root that points elsewhere is not detected.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Sequence

from shellgate.errors import WorkingDirNotAllowed, WorkingDirResolutionFailed

if TYPE_CHECKING:
    from shellgate.security.policy import SecurityPolicy

logger = logging.getLogger(__name__)


def expand_tilde(path: str) -> str:
    """Expand a leading '~' or '~/' against the user's home directory."""
    if path != "~" and not path.startswith("~/"):
        return path
    home = os.path.expanduser("~")
    if home == "~":
        # No resolvable home directory
        return path
    if path == "~":
        return home
    return os.path.join(home, path[2:])


def is_within(path: str, root: str, *, strict: bool = False) -> bool:
    """
    Check whether an absolute path lies under an absolute root.

    The default check is a plain string prefix, so '/srv/app-evil' passes for
    root '/srv/app'. With strict=True the root must match whole path segments.
    """
    if not strict:
        return path.startswith(root)
    if path == root:
        return True
    return path.startswith(root.rstrip(os.sep) + os.sep)


def resolve_working_dir(
    requested: str | None,
    policy: SecurityPolicy,
    *,
    agent_dir: str | None = None,
    command: str = "",
) -> str:
    """
    Decide the working directory for a command and check it against the policy.

    Order: policy default (when the request gives none), requested directory,
    agent directory, process working directory.

    Args:
        requested: Directory supplied with the request, if any.
        policy: Policy snapshot for this request.
        agent_dir: Directory of the calling agent, if the host provides one.
        command: The command being authorized, carried on any violation.

    Returns:
        The absolute working directory.

    Raises:
        WorkingDirResolutionFailed: If the process working directory is gone.
        WorkingDirNotAllowed: If the directory is outside every allowed root.
    """
    if not requested and policy.default_working_dir:
        working_dir = expand_tilde(policy.default_working_dir)
    elif requested:
        working_dir = expand_tilde(requested)
    elif agent_dir:
        working_dir = agent_dir
    else:
        try:
            working_dir = os.getcwd()
        except OSError as e:
            raise WorkingDirResolutionFailed(str(e), command) from e

    try:
        working_dir = os.path.abspath(working_dir)
    except OSError as e:
        raise WorkingDirResolutionFailed(str(e), command) from e

    check_containment(
        working_dir,
        policy.allowed_working_dirs,
        strict=policy.strict_containment,
        command=command,
    )
    return working_dir


def check_containment(
    working_dir: str,
    allowed_dirs: Sequence[str],
    *,
    strict: bool = False,
    command: str = "",
) -> None:
    """Raise WorkingDirNotAllowed unless working_dir is under one of allowed_dirs."""
    if not allowed_dirs:
        return

    roots = [os.path.abspath(expand_tilde(d)) for d in allowed_dirs]
    for root in roots:
        if is_within(working_dir, root, strict=strict):
            return

    logger.warning("Working directory %s outside allowed roots %s", working_dir, roots)
    raise WorkingDirNotAllowed(working_dir, roots, command)
