import os
from dataclasses import dataclass
from typing import FrozenSet

# ====== Discovery defaults ======
IGNORED_PATHS = frozenset({"node_modules", ".git", "dist", "build", "coverage", ".next", ".cache"})
INCLUDE_NAMES = frozenset({"index.js", "app.js"})
TYPESCRIPT_INCLUDE_NAMES = frozenset({"index.ts", "app.ts"})
ROUTES_DIR_NAME = "routes"


def _split_env(name: str, default: FrozenSet[str]) -> FrozenSet[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class DiscoveryPolicy:
    """Which entries of a project tree are candidates for route extraction."""

    ignore_paths: FrozenSet[str] = IGNORED_PATHS
    include_names: FrozenSet[str] = INCLUDE_NAMES
    typescript_include_names: FrozenSet[str] = TYPESCRIPT_INCLUDE_NAMES
    routes_dir_name: str = ROUTES_DIR_NAME

    @classmethod
    def from_env(cls) -> "DiscoveryPolicy":
        return cls(
            ignore_paths=_split_env("ROUTICA_IGNORE_PATHS", IGNORED_PATHS),
            routes_dir_name=os.getenv("ROUTICA_ROUTES_DIR", ROUTES_DIR_NAME),
        )

    def names_for(self, is_typescript: bool) -> FrozenSet[str]:
        if is_typescript:
            return self.include_names | self.typescript_include_names
        return self.include_names


@dataclass(frozen=True)
class Neo4jSettings:
    uri: str = "bolt://localhost:7687"
    user: str = "neo4j"
    password: str = "neo4j"

    @classmethod
    def from_env(cls) -> "Neo4jSettings":
        return cls(
            uri=os.getenv("NEO4J_URI", cls.uri),
            user=os.getenv("NEO4J_USER", cls.user),
            password=os.getenv("NEO4J_PASSWORD", cls.password),
        )
