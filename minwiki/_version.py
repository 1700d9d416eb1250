"""Package version: installed metadata first, then the checkout's pyproject.toml."""
from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _from_pyproject(path: Path = _PYPROJECT) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return "0.0.0"
    m = re.search(r'^version\s*=\s*"([^"]+)"', text, re.MULTILINE)
    return m.group(1) if m else "0.0.0"


try:
    __version__: str = version("minwiki")
except PackageNotFoundError:
    __version__ = _from_pyproject()
