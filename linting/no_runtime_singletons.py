#!/usr/bin/env python
"""Reject process-global session state in `figbridge/`.

The session manager is an injected object; a module-level current session,
an in-flight flag, or a `global` rebinding would reintroduce the singleton.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT / "figbridge"

SINGLETON_CLASS_SUFFIX = "Singleton"
SINGLETON_FN_NAMES = {"get_instance", "reset_instance", "get_manager", "get_session"}
SESSION_STATE_SUFFIXES = ("_session", "_instance", "_manager", "_in_flight", "_connect_task")
SESSION_STATE_NAMES = {"session", "manager", "connection_in_flight"}


def _top_level_targets(node: ast.Assign | ast.AnnAssign) -> list[str]:
    if isinstance(node, ast.AnnAssign):
        return [node.target.id] if isinstance(node.target, ast.Name) else []
    return [target.id for target in node.targets if isinstance(target, ast.Name)]


def _is_session_state_name(name: str) -> bool:
    lowered = name.lower().lstrip("_")
    return lowered in SESSION_STATE_NAMES or lowered.endswith(SESSION_STATE_SUFFIXES)


def _is_placeholder(value: ast.expr | None) -> bool:
    # `None` / `False` slots are filled in lazily later: the singleton tell.
    return isinstance(value, ast.Constant) and value.value in (None, False)


def find_violations(source: str, rel: str) -> list[str]:
    try:
        tree = ast.parse(source, filename=rel)
    except SyntaxError:
        return []

    violations: list[str] = []
    for node in tree.body:
        if isinstance(node, ast.ClassDef) and node.name.endswith(SINGLETON_CLASS_SUFFIX):
            violations.append(f"  {rel}:{node.lineno} class `{node.name}` uses singleton naming")
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name in SINGLETON_FN_NAMES:
            violations.append(f"  {rel}:{node.lineno} function `{node.name}` suggests singleton lifecycle")
        elif isinstance(node, (ast.Assign, ast.AnnAssign)) and _is_placeholder(node.value):
            names = [name for name in _top_level_targets(node) if _is_session_state_name(name)]
            if names:
                violations.append(f"  {rel}:{node.lineno} module-level session state: {', '.join(names)}")

    for node in ast.walk(tree):
        if isinstance(node, ast.Global):
            violations.append(f"  {rel}:{node.lineno} `global {', '.join(node.names)}` rebinds module state")

    return violations


def _collect_violations(filepath: Path) -> list[str]:
    try:
        source = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []
    return find_violations(source, str(filepath.relative_to(ROOT)))


def main() -> int:
    if not SRC_DIR.is_dir():
        print(f"[no-runtime-singletons] Missing source directory: {SRC_DIR}", file=sys.stderr)
        return 1

    violations: list[str] = []
    for py_file in sorted(SRC_DIR.rglob("*.py")):
        if "__pycache__" in py_file.parts:
            continue
        violations.extend(_collect_violations(py_file))

    if not violations:
        return 0

    print("Runtime singleton pattern violations:", file=sys.stderr)
    for violation in violations:
        print(violation, file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
