"""Dotted worktrack names quoted in module docstrings point at real code."""

import importlib
import pkgutil
import re

import pytest

import worktrack

_DOTTED = re.compile(r"\bworktrack(?:\.\w+)+")


def _modules() -> list[str]:
    return [
        info.name
        for info in pkgutil.walk_packages(worktrack.__path__, prefix="worktrack.")
        if ".migrations" not in info.name
    ]


def _resolves(dotted: str) -> bool:
    parts = dotted.split(".")
    for cut in range(len(parts), 0, -1):
        try:
            obj = importlib.import_module(".".join(parts[:cut]))
        except ImportError:
            continue
        for attr in parts[cut:]:
            if not hasattr(obj, attr):
                return False
            obj = getattr(obj, attr)
        return True
    return False


@pytest.mark.parametrize("module_name", _modules())
def test_docstring_references_resolve(module_name: str) -> None:
    module = importlib.import_module(module_name)
    for dotted in _DOTTED.findall(module.__doc__ or ""):
        assert _resolves(dotted), f"{module_name} docstring names missing {dotted}"
