from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional


def project_root() -> Path:
    # .../src/task_manager/core/paths.py -> .../
    return Path(__file__).resolve().parents[3]


def env_file_candidates(cwd: Optional[Path] = None) -> List[Path]:
    """Locations checked for .env.local, most specific first."""

    cwd = cwd or Path.cwd()
    candidates = [cwd / ".env.local", project_root() / ".env.local"]
    return _dedupe(candidates)


def log_file(log_dir: Path) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "task-manager.log"


def _dedupe(paths: Iterable[Path]) -> List[Path]:
    seen = set()
    out = []
    for p in paths:
        key = p.resolve()
        if key in seen:
            continue
        seen.add(key)
        out.append(p)
    return out
