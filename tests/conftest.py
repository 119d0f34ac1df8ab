"""
Pytest configuration and fixtures for pathrules tests

This module provides shared fixtures for unit and E2E tests.
"""
import pytest

from pathrules.core.resolution import PathResolver
from tests.helpers.dummy_entities import Entity, SubEntity


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests of a single component"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that run whole validators"
    )


# =======================
# RESOLVER FIXTURES
# =======================

@pytest.fixture
def resolver() -> PathResolver:
    """Default resolver over plain Python objects"""
    return PathResolver()


# =======================
# ENTITY FIXTURES
# =======================

@pytest.fixture
def entity_with_test_prop() -> Entity:
    """Entity whose first sub class array element holds 'this is a TEST'"""
    return Entity(sub_class_array=[SubEntity(test_prop="this is a TEST")])


@pytest.fixture
def entity_with_bad_test_prop() -> Entity:
    """Entity whose first sub class array element does not contain TEST"""
    return Entity(sub_class_array=[SubEntity(test_prop="this is not....")])


@pytest.fixture
def invalid_fields() -> list:
    """List collecting fields passed to an on_invalid callback"""
    return []
