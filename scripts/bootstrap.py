"""Locate the repository and its default files for command-line entry points."""
from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PACKAGE_NAME = "interest_engine"


@dataclass(frozen=True)
class ProjectPaths:
    root: Path
    config: Path

    def resolve(self, path: str | Path) -> Path:
        """Anchor relative paths from configuration files at the repository root."""
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.root / candidate


@lru_cache(maxsize=1)
def bootstrap_project() -> ProjectPaths:
    """Make ``interest_engine`` importable from a checkout and return its paths."""
    root = Path(__file__).resolve().parents[1]
    if not (root / PACKAGE_NAME).is_dir():
        raise RuntimeError(f"Expected the '{PACKAGE_NAME}' package next to {root / 'scripts'}.")
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    return ProjectPaths(root=root, config=root / "config" / "engine.yaml")
