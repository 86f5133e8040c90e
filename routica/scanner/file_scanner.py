import logging
import os
from typing import Callable, List, Optional, Set

from routica.config import DiscoveryPolicy

logger = logging.getLogger(__name__)

TYPESCRIPT_SUFFIXES = (".ts", ".tsx")


def is_typescript_project(directory: str) -> bool:
    """True when the top level of `directory` holds any .ts/.tsx file."""
    return any(name.endswith(TYPESCRIPT_SUFFIXES) for name in os.listdir(directory))


def _source_suffixes(is_typescript: bool):
    return (".js", ".ts") if is_typescript else (".js",)


def find_candidate_files(
    root: str,
    is_typescript: bool,
    policy: Optional[DiscoveryPolicy] = None,
    onerror: Optional[Callable[[OSError], None]] = None,
) -> List[str]:
    """
    Depth-first walk of `root`. Entries of each directory are taken in sorted
    name order and a directory is recursed into as soon as it is met.

    Only the top-level routes directory and files named like an entry point
    (index.js, app.js, plus index.ts, app.ts for TypeScript projects) are
    visited; every other directory is pruned without being entered.
    """
    policy = policy or DiscoveryPolicy()
    routes_root = os.path.join(root, policy.routes_dir_name)
    entry_names = policy.names_for(is_typescript)
    suffixes = _source_suffixes(is_typescript)
    found: List[str] = []
    seen: Set[str] = set()

    def under_routes(path: str) -> bool:
        return path == routes_root or path.startswith(routes_root + os.sep)

    def walk(directory: str):
        real = os.path.realpath(directory)
        if real in seen:
            return
        seen.add(real)

        try:
            names = sorted(os.listdir(directory))
        except OSError as e:
            if directory == root or onerror is None:
                raise
            onerror(e)
            return

        for name in names:
            path = os.path.join(directory, name)

            if any(fragment in path for fragment in policy.ignore_paths):
                continue

            if not under_routes(path) and name not in entry_names:
                continue

            if os.path.isdir(path):
                logger.debug("Traversing directory: %s", path)
                walk(path)
            elif name.endswith(suffixes):
                found.append(path)

    walk(root)
    return found
