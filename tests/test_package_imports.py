"""Every ``storefront`` module must compile and import cleanly."""

import doctest
import importlib
from pathlib import Path

import pytest

import storefront
from storefront.pipeline.site_generator import data_loader

PACKAGE_DIR = Path(storefront.__file__).resolve().parent
MODULE_PATHS = sorted(PACKAGE_DIR.rglob("*.py"))


def _module_name(path: Path) -> str:
    parts = path.relative_to(PACKAGE_DIR.parent).with_suffix("").parts
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


@pytest.mark.parametrize("path", MODULE_PATHS, ids=_module_name)
def test_module_compiles_and_imports(path: Path):
    compile(path.read_text(encoding="utf-8"), str(path), "exec")
    module = importlib.import_module(_module_name(path))
    assert module.__name__ == _module_name(path)


def test_csv_loader_examples_hold():
    results = doctest.testmod(data_loader, verbose=False)
    assert results.attempted >= 3
    assert results.failed == 0
