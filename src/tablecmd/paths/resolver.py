"""LOAD DATA path resolution.

Turns the path written in ``LOAD DATA [LOCAL] INPATH '...'`` into the
canonical URI handed to the catalog, following warehouse conventions:

* LOCAL paths are made absolute on the local filesystem and must exist.
* Other paths keep an explicit scheme and authority when both are given.
  Missing parts come from the default filesystem, and relative paths are
  placed under ``/user/<user name>``.
"""

import getpass
import os
from typing import Optional
from urllib.parse import quote, unquote, urlsplit

from tablecmd.common.exceptions import CommandValidationError, FailureReason, configuration_error
from tablecmd.constants import USER_HOME_ROOT
from tablecmd.logging import get_logger
from tablecmd.types.paths import ResolvedPath

logger = get_logger(__name__)

# Characters kept as-is when a local filesystem path is turned into a URI.
_LOCAL_PATH_SAFE = "/:@!$&'()*+,;=-._~"
# Remote paths may already carry percent escapes, so "%" is kept too.
_REMOTE_PATH_SAFE = _LOCAL_PATH_SAFE + "%"


def current_user_name() -> str:
    """Return the name of the user running this process."""
    try:
        return getpass.getuser()
    except (KeyError, OSError) as e:
        raise configuration_error(
            "Cannot determine the current user name for relative LOAD DATA paths; "
            "set TABLECMD_LOAD_USER_NAME",
            config_key="load_user_name",
            cause=e,
        ) from e


def _local_file_uri(path: str, fragment: Optional[str] = None) -> ResolvedPath:
    absolute = os.path.abspath(path) if not os.path.isabs(path) else path
    if os.path.isdir(absolute) and not absolute.endswith("/"):
        absolute = f"{absolute}/"
    return ResolvedPath(
        scheme="file",
        path=quote(absolute, safe=_LOCAL_PATH_SAFE),
        fragment=fragment,
    )


def resolve_local_path(path: str) -> ResolvedPath:
    """Resolve a LOCAL load path to an absolute ``file:`` URI.

    A path that already has a scheme is taken as is. The local object named
    by the path must exist at resolution time.

    Raises:
        CommandValidationError: LOCAL_PATH_NOT_FOUND when nothing exists at the path
    """
    parts = urlsplit(path)
    if parts.scheme:
        resolved = ResolvedPath(
            scheme=parts.scheme,
            authority=parts.netloc or None,
            path=parts.path,
            query=parts.query or None,
            fragment=parts.fragment or None,
        )
    elif parts.fragment:
        resolved = _local_file_uri(unquote(parts.path), fragment=parts.fragment)
    else:
        resolved = _local_file_uri(path)

    if not os.path.exists(unquote(resolved.path)):
        raise CommandValidationError(
            f"LOAD DATA with non-existing path: {path}",
            reason=FailureReason.LOCAL_PATH_NOT_FOUND,
            details={"path": path},
        )
    return resolved


def resolve_remote_path(
    path: str,
    default_fs: Optional[str],
    user_name: Optional[str] = None,
) -> ResolvedPath:
    """Resolve a non-local load path against the default filesystem.

    Characters that are not valid in a URI path (spaces, for example) are
    percent-encoded; existing escapes are kept.

    Args:
        path: Raw path as written by the user
        default_fs: Default filesystem URI (``fs.default.name``), may be None
        user_name: Owner of the home directory used for relative paths;
            defaults to the user running this process
    Raises:
        CommandValidationError: PATH_MISSING_SCHEME when neither the path nor
            the default filesystem provides a scheme
    """
    parts = urlsplit(path)
    scheme = parts.scheme or None
    authority = parts.netloc or None

    if scheme is not None and authority is not None:
        return ResolvedPath(
            scheme=scheme,
            authority=authority,
            path=quote(parts.path, safe=_REMOTE_PATH_SAFE),
            query=parts.query or None,
            fragment=parts.fragment or None,
        )

    default_parts = urlsplit(default_fs or "")
    if scheme is None:
        scheme = default_parts.scheme or None
    if authority is None:
        authority = default_parts.netloc or None

    if scheme is None:
        raise CommandValidationError(
            "LOAD DATA with non-local path must specify URI Scheme.",
            reason=FailureReason.PATH_MISSING_SCHEME,
            details={"path": path, "default_fs": default_fs},
        )

    if parts.path.startswith("/"):
        absolute_path = parts.path
    else:
        owner = user_name or current_user_name()
        absolute_path = f"{USER_HOME_ROOT}/{owner}/{parts.path}"

    return ResolvedPath(
        scheme=scheme,
        authority=authority,
        path=quote(absolute_path, safe=_REMOTE_PATH_SAFE),
        query=parts.query or None,
        fragment=parts.fragment or None,
    )


def resolve_load_path(
    path: str,
    is_local: bool,
    default_fs: Optional[str],
    user_name: Optional[str] = None,
) -> ResolvedPath:
    """Resolve a LOAD DATA path to its canonical URI.

    Resolution never touches the catalog. Resolving an already canonical URI
    returns it unchanged.

    Args:
        path: Raw path as written by the user
        is_local: True for ``LOAD DATA LOCAL``
        default_fs: Default filesystem URI used to complete non-local paths
        user_name: Overrides the process user for relative non-local paths

    Returns:
        ResolvedPath with a non-empty scheme
    """
    if is_local:
        resolved = resolve_local_path(path)
    else:
        resolved = resolve_remote_path(path, default_fs, user_name=user_name)
    logger.debug(
        "Resolved load path",
        extra={"raw_path": path, "is_local": is_local, "resolved_path": resolved.uri},
    )
    return resolved
