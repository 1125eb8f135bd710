"""Architecture boundary checker (no external deps).

Rules:
- core/ must not import app, services, ui or PyQt5
- services/ must not import ui or PyQt5 (the loader runs headless)
- infra/ must not import services, ui or PyQt5

Usage:
  python scripts/check_architecture.py
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterator

ROOT = Path(__file__).resolve().parents[1]

RULES = {
    'core': {'app', 'services', 'ui', 'PyQt5'},
    'services': {'ui', 'PyQt5'},
    'infra': {'services', 'ui', 'PyQt5'},
}


def iter_layer_files(root: Path = ROOT) -> Iterator[tuple[str, Path]]:
    for layer in RULES:
        base = root / layer
        if not base.is_dir():
            continue
        for p in sorted(base.rglob('*.py')):
            if '__pycache__' in p.parts:
                continue
            yield layer, p


def imported_top_names(tree: ast.AST) -> Iterator[tuple[str, int]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name.split('.')[0], node.lineno
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            yield node.module.split('.')[0], node.lineno


def find_violations(root: Path = ROOT) -> list[str]:
    violations: list[str] = []
    for layer, fpath in iter_layer_files(root):
        tree = ast.parse(fpath.read_text(encoding='utf-8'), filename=str(fpath))
        forbidden = RULES[layer]
        for name, lineno in imported_top_names(tree):
            if name in forbidden:
                violations.append(f"{layer}: {fpath.relative_to(root)}:{lineno} imports '{name}'")
    return violations


def main() -> int:
    violations = find_violations()
    if violations:
        print('Architecture boundary violations found:')
        for v in violations:
            print('  -', v)
        print('\nSee the module docstring for the rules.')
        return 2

    print('OK: no architecture boundary violations found.')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
