"""Every third-party package imported by fbauth is declared in pyproject.toml."""

import ast
import re
import sys
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]

# Import name -> distribution name, where they differ
DISTRIBUTIONS = {"yaml": "pyyaml", "pydantic_settings": "pydantic-settings"}


def _imported_roots() -> set[str]:
    roots: set[str] = set()
    for path in (ROOT / "fbauth").rglob("*.py"):
        tree = ast.parse(path.read_text())
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                roots.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                roots.add(node.module.split(".")[0])
    return roots


def _declared() -> set[str]:
    project = tomllib.loads((ROOT / "pyproject.toml").read_text())["project"]
    return {re.split(r"[\[<>=!~ ]", dep, maxsplit=1)[0].lower() for dep in project["dependencies"]}


def test_third_party_imports_are_declared():
    third_party = {
        name
        for name in _imported_roots()
        if name != "fbauth" and name not in sys.stdlib_module_names
    }

    missing = {DISTRIBUTIONS.get(name, name) for name in third_party} - _declared()

    assert missing == set()
