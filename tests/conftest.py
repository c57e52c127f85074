import logging

import pytest
from dbfactory.strategy import _get_strategy


@pytest.fixture(autouse=True)
def clear_strategy_cache():
    """Clear the strategy cache before and after each test to ensure test isolation."""
    _get_strategy.cache_clear()
    yield
    _get_strategy.cache_clear()


@pytest.fixture
def test_logger():
    """Dedicated logger to inject into connections under test."""
    logger = logging.getLogger('tests.dbfactory')
    logger.setLevel(logging.DEBUG)
    return logger


pytest_plugins = [
    'tests.fixtures.mocks',
    'tests.fixtures.sqlite',
    'tests.fixtures.mysql',
]
