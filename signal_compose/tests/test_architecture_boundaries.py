"""Architecture boundary guardrails for inner layers.

Policy alignment:
- ``signal_compose/base`` is the inner layer and must not import the
  combinators built on top of it.
- Only ``base/timers.py`` and ``base/timer_parts`` may schedule wall-clock
  callbacks (``threading.Timer`` / ``call_later``); everything else goes
  through ``start_timer`` so the liveness flag is always honoured.
"""

from __future__ import annotations

import re
from pathlib import Path

PKG_DIR = Path(__file__).resolve().parents[1]
BASE_DIR = PKG_DIR / "base"

_COMBINATOR_IMPORT = re.compile(r"^\s*(from|import)\s+(signal_compose\.combinators|\.\.combinators|\.combinators)", re.M)
_RAW_TIMER = re.compile(r"threading\.Timer\(|\.call_later\(")


def _iter_py_files(root: Path) -> list[Path]:
    """Return all Python files under ``root``, skipping ``__pycache__``."""

    return [p for p in root.rglob("*.py") if "__pycache__" not in p.parts]


def test_base_does_not_import_combinators():
    violations = [
        str(py)
        for py in _iter_py_files(BASE_DIR)
        if _COMBINATOR_IMPORT.search(py.read_text(encoding="utf-8"))
    ]
    if violations:
        raise AssertionError(f"base layer imports combinators: {violations}")


def test_raw_timers_only_in_timer_modules():
    allowed = {BASE_DIR / "timers.py"} | set(_iter_py_files(BASE_DIR / "timer_parts"))
    violations = []
    for py in _iter_py_files(PKG_DIR):
        if py in allowed or "tests" in py.relative_to(PKG_DIR).parts:
            continue
        if _RAW_TIMER.search(py.read_text(encoding="utf-8")):
            violations.append(str(py))
    if violations:
        raise AssertionError(f"raw timer scheduling outside timer modules: {violations}")
