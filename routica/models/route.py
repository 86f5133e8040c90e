import re
from dataclasses import dataclass, field
from typing import List, Tuple

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")

# Express-style path parameter: ":" followed by word characters
RE_PATH_PARAM = re.compile(r":(\w+)", re.ASCII)


def extract_params(path):
    """
    "/users/:id/orders/:orderId" -> ("id", "orderId")
    """
    return tuple(m.group(1) for m in RE_PATH_PARAM.finditer(path))


@dataclass(frozen=True)
class Route:
    method: str
    path: str = ""
    middleware: Tuple[str, ...] = ()
    params: Tuple[str, ...] = field(init=False)

    def __post_init__(self):
        if self.method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        object.__setattr__(self, "middleware", tuple(self.middleware))
        object.__setattr__(self, "params", extract_params(self.path))

    def to_dict(self):
        return {
            "method": self.method,
            "path": self.path,
            "middleware": list(self.middleware),
            "params": list(self.params),
        }


@dataclass(frozen=True)
class Diagnostic:
    """A per-file failure that was skipped instead of aborting the run."""

    path: str
    kind: str  # read, parse, listing, error
    message: str

    def to_dict(self):
        return {"path": self.path, "kind": self.kind, "message": self.message}


@dataclass
class AnalysisResult:
    routes: List[Route] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def to_dict(self):
        return {
            "routes": [r.to_dict() for r in self.routes],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
