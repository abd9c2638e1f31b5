"""Architectural tests for package layering.

Static, AST-based checks over the source tree. They never import the
application; parsing errors surface as assertion failures.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterable, List, Set

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PKG_DIR = PROJECT_ROOT / "orderlist"


def _py_files(sub: str) -> List[Path]:
    root = PKG_DIR / sub if sub else PKG_DIR
    files = sorted(root.rglob("*.py"))
    assert files, f"No Python sources found under {root}"
    return files


def _parse(path: Path) -> ast.Module:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except SyntaxError as exc:
        pytest.fail(f"Failed to parse {path}: {exc}")


def _imported_modules(tree: ast.AST) -> Set[str]:
    names: Set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            names.add(node.module)
    return names


def _offenders(files: Iterable[Path], forbidden: Iterable[str]) -> List[str]:
    prefixes = tuple(forbidden)
    out: List[str] = []
    for path in files:
        for mod in _imported_modules(_parse(path)):
            if any(mod == p or mod.startswith(p + ".") for p in prefixes):
                out.append(f"{path.relative_to(PROJECT_ROOT)} imports {mod}")
    return out


def test_logic_layer_is_framework_free():
    offenders = _offenders(_py_files("logic"), ("fastapi", "starlette", "httpx", "orderlist.routes", "orderlist.client"))
    assert not offenders, "\n".join(offenders)


def test_client_does_not_depend_on_server_surface():
    offenders = _offenders(
        _py_files("client"),
        ("fastapi", "starlette", "orderlist.routes", "orderlist.http", "orderlist.main"),
    )
    assert not offenders, "\n".join(offenders)


def test_routes_do_not_touch_catalog_internals():
    offenders: List[str] = []
    for path in _py_files("routes"):
        for node in ast.walk(_parse(path)):
            if (
                isinstance(node, ast.Attribute)
                and node.attr in {"order", "selected", "lock"}
                and isinstance(node.value, ast.Name)
                and node.value.id in {"catalog", "store"}
            ):
                offenders.append(f"{path.relative_to(PROJECT_ROOT)}:{node.lineno} uses .{node.attr}")
    assert not offenders, "\n".join(offenders)


def test_catalog_mutations_happen_under_write_lock():
    for name in ("reorder.py", "selection.py"):
        tree = _parse(PKG_DIR / "logic" / name)
        writes = [
            node
            for node in ast.walk(tree)
            if isinstance(node, ast.withitem)
            and isinstance(node.context_expr, ast.Call)
            and isinstance(node.context_expr.func, ast.Attribute)
            and node.context_expr.func.attr == "write"
        ]
        assert writes, f"logic/{name} must mutate the catalog inside lock.write()"


def test_no_persistence_layer_is_imported():
    offenders = _offenders(_py_files(""), ("sqlalchemy", "psycopg2"))
    assert not offenders, "\n".join(offenders)
