"""Shared test fixtures for ngarch tests."""

import pytest

from ngarch.architecture.models import Layer, ModuleRecord


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files and NGARCH_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in ("COLLISION_POLICY", "ENABLE_VALIDATION", "VERBOSITY", "FAIL_ON_VIOLATIONS"):
        monkeypatch.delenv(f"NGARCH_{key}", raising=False)


@pytest.fixture
def chain_records():
    """Linear chain: A -> B -> C -> D."""
    return [
        ModuleRecord(name="A", layer=Layer.FEATURE, declared_dependencies=("B",)),
        ModuleRecord(name="B", layer=Layer.SHARED, declared_dependencies=("C",)),
        ModuleRecord(name="C", layer=Layer.SHARED, declared_dependencies=("D",)),
        ModuleRecord(name="D", layer=Layer.CORE),
    ]


@pytest.fixture
def triangle_records():
    """Cycle A -> B -> C -> A plus an acyclic tail C -> D -> E."""
    return [
        ModuleRecord(name="A", layer=Layer.SHARED, declared_dependencies=("B",)),
        ModuleRecord(name="B", layer=Layer.SHARED, declared_dependencies=("C",)),
        ModuleRecord(name="C", layer=Layer.SHARED, declared_dependencies=("A", "D")),
        ModuleRecord(name="D", layer=Layer.CORE, declared_dependencies=("E",)),
        ModuleRecord(name="E", layer=Layer.CORE),
    ]


@pytest.fixture
def angular_records():
    """A small Angular-style application with external packages and one bad edge."""
    return [
        ModuleRecord(
            name="AppModule",
            layer=Layer.FEATURE,
            declared_dependencies=("CoreModule", "SharedModule", "@ngrx/store"),
            imports=("BrowserModule", "CoreModule", "SharedModule"),
            path="src/app/app.module.ts",
        ),
        ModuleRecord(
            name="CoreModule",
            layer=Layer.CORE,
            declared_dependencies=("SharedModule", "OrdersModule", "rxjs"),
            providers=("AuthService",),
            path="src/app/core/core.module.ts",
        ),
        ModuleRecord(
            name="SharedModule",
            layer=Layer.SHARED,
            declared_dependencies=("lodash",),
            exports=("ButtonComponent",),
            declarations=("ButtonComponent",),
            path="src/app/shared/shared.module.ts",
        ),
        ModuleRecord(
            name="OrdersModule",
            layer=Layer.FEATURE,
            declared_dependencies=("SharedModule",),
            declarations=("OrderListComponent",),
            path="src/app/features/orders/orders.module.ts",
        ),
    ]


@pytest.fixture
def chain_graph():
    """Chain graph: a -> b -> c -> d."""
    return {
        "a": ["b"],
        "b": ["c"],
        "c": ["d"],
        "d": [],
    }
