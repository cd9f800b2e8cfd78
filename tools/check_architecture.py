"""Architecture boundary checks.

Runs a lightweight static import scan to prevent layer inversions:
the pure layers (core, storage, infra) never import the app or the Qt
layers, and app/ never imports PyQt5 or the Qt layers outside the
controller module.

Usage:
    python tools/check_architecture.py

Exit code:
    0 = OK
    1 = violations found
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

LAYER_RULES = {
    "core": {"forbidden": {"app", "screens", "ui", "storage", "infra", "PyQt5"}},
    "storage": {"forbidden": {"app", "screens", "ui", "PyQt5"}},
    "infra": {"forbidden": {"app", "screens", "ui"}},
    "app": {"forbidden": {"screens", "ui", "PyQt5"}},
}

# Files allowed to cross their layer's rule
QT_SEAMS = {Path("app") / "controller.py"}


def iter_py_files() -> list[Path]:
    skip_dirs = {".pytest_cache", "__pycache__", "build", "dist", ".git", ".venv"}
    return [p for p in ROOT.rglob("*.py") if not any(part in skip_dirs for part in p.parts)]


def top_package(modname: str) -> str | None:
    if not modname:
        return None
    return modname.split(".")[0]


def file_layer(path: Path) -> str | None:
    # layer is the first directory under root (core/storage/...)
    try:
        rel = path.relative_to(ROOT)
    except ValueError:
        return None
    if len(rel.parts) < 2:
        return None
    return rel.parts[0]


def scan_file(path: Path) -> list[tuple[str, str, int]]:
    """Return list of (imported_top_pkg, detail, lineno)"""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imports: list[tuple[str, str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                pkg = top_package(alias.name)
                if pkg:
                    imports.append((pkg, alias.name, node.lineno))
        elif isinstance(node, ast.ImportFrom):
            # relative imports stay inside their layer
            if node.module and not node.level:
                pkg = top_package(node.module)
                if pkg:
                    imports.append((pkg, node.module, node.lineno))
    return imports


def find_violations() -> list[str]:
    violations: list[str] = []
    for f in iter_py_files():
        layer = file_layer(f)
        if layer not in LAYER_RULES or f.relative_to(ROOT) in QT_SEAMS:
            continue
        forbidden = LAYER_RULES[layer]["forbidden"]
        for pkg, detail, lineno in scan_file(f):
            if pkg in forbidden:
                violations.append(f"{f.relative_to(ROOT)}:{lineno} imports forbidden '{detail}' (layer={layer})")
    return violations


def main() -> int:
    violations = find_violations()
    if violations:
        print("Architecture violations found:\n")
        for v in violations:
            print(" -", v)
        print("\nFix: move logic to lower layers or invert dependency via the controller.")
        return 1

    print("OK: no architecture boundary violations.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
