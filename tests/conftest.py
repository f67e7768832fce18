"""
Pytest configuration for the dexhierarchy test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Factories for methods and class definitions
- Sample hierarchies shared across test modules
"""

import os

import pytest

from dexhierarchy.logging_config import reset_logging, setup_logging
from dexhierarchy.resolution import build_class_hierarchy, reset_hierarchy_config
from dexhierarchy.schemas import ClassDef, Method, MethodRef, Parameter


ANIMAL = "Lcom/acme/Animal;"
DOG = "Lcom/acme/Dog;"
CAT = "Lcom/acme/Cat;"


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet operation."""
    os.environ.setdefault("DEXHIERARCHY_MACHINE_MODE", "1")


# ============================================================================
# LOGGING / CONFIG FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    reset_logging()
    setup_logging(level="DEBUG", suppress_console=True)


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the environment's configuration."""
    reset_hierarchy_config()
    yield
    reset_hierarchy_config()


# ============================================================================
# MODEL FACTORIES
# ============================================================================

@pytest.fixture
def make_method():
    """
    Factory for virtual methods; the receiver parameter is added for you.

    Usage:
        m = make_method(DOG, "speak")
        m = make_method(DOG, "eat", "Z", ("I",))
    """
    def _make(class_type, name, return_type="V", params=()):
        parameters = (Parameter(type=class_type, name="this"),)
        parameters += tuple(Parameter(type=p) for p in params)
        return Method(
            name=name,
            return_type=return_type,
            parameters=parameters,
            class_type=class_type,
        )
    return _make


@pytest.fixture
def make_class(make_method):
    """
    Factory for class definitions.

    `methods` lists (name, return_type, params) tuples, or bare names for
    `()V` methods.
    """
    def _make(type_name, parent=None, interfaces=(), methods=(), is_interface=False):
        virtuals = []
        for spec in methods:
            if isinstance(spec, str):
                virtuals.append(make_method(type_name, spec))
            else:
                virtuals.append(make_method(type_name, *spec))
        return ClassDef(
            type=type_name,
            parent=parent,
            interfaces=tuple(interfaces),
            virtual_methods=tuple(virtuals),
            is_interface=is_interface,
        )
    return _make


@pytest.fixture
def speak():
    """The `speak()V` signature."""
    return MethodRef(name="speak", return_type="V")


# ============================================================================
# SAMPLE HIERARCHIES
# ============================================================================

@pytest.fixture
def animal_classes(make_class):
    """
    Animal declares speak(); Dog overrides it; Cat inherits it.
    """
    return [
        make_class(ANIMAL, methods=["speak"]),
        make_class(DOG, parent=ANIMAL, methods=["speak"]),
        make_class(CAT, parent=ANIMAL),
    ]


@pytest.fixture
def animal_hierarchy(animal_classes):
    return build_class_hierarchy(animal_classes)
