"""Shared fixtures: in-memory symbol sources and sample dumps."""

from __future__ import annotations

import pytest

from pylinkgen.bindgen import Module, SymbolSource
from pylinkgen.core.logging import PyLinkGenLogger


@pytest.fixture(autouse=True)
def reset_logging():
    # CLI runs install a stderr handler bound to the captured stream
    yield
    PyLinkGenLogger.reset()


class FakeSource(SymbolSource):
    """Serves fixed dumps and records every request."""

    def __init__(self, dump: dict, lookup: dict | None = None):
        self.dump = dump
        self.lookup = lookup
        self.fetch_calls: list[str] = []
        self.fetch_names_calls: list[tuple[str, list[str]]] = []

    def is_available(self) -> bool:
        return True

    def fetch(self, module_name):
        self.fetch_calls.append(module_name)
        return Module.from_dict(self.dump)

    def fetch_names(self, module_name, names):
        self.fetch_names_calls.append((module_name, list(names)))
        if self.lookup is None:
            return Module.empty()
        return Module.from_dict(self.lookup)


def item(name, type="function", sig="()", doc="", url=""):
    return {"name": name, "type": type, "doc": doc, "sig": sig, "url": url}


@pytest.fixture
def mathx_dump():
    return {
        "name": "mathx",
        "items": [
            item("add", sig="(a, b, /)", doc="Add two numbers", url="http://x/add"),
        ],
    }


@pytest.fixture
def mixed_dump():
    return {
        "name": "mixed",
        "items": [
            item("add", sig="(a, b, /)", doc="Add two numbers", url="http://x/add"),
            item("pi", type="float", sig=""),
            item("_private", sig="(x)"),
            item("clip", type="ufunc", sig="<NULL>"),
            item("where", type="builtin_function_or_method", sig="<NULL>"),
            item("version_info", type="version_info", sig=""),
            item("Tensor", type="Tensor", sig=""),
        ],
    }


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def make_item():
    return item
