"""Shared fixtures."""

import pytest

from gql_pyschema.core import MetadataRegistry, default_registry


@pytest.fixture(autouse=True)
def clean_default_registry():
    """Every test starts and ends with an empty process-wide registry."""
    default_registry.clear()
    yield
    default_registry.clear()


@pytest.fixture
def registry():
    """An isolated registry."""
    return MetadataRegistry()
