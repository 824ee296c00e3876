import logging
import pytest
from core.evaluation_types import Domain
from symbolic.expressions import clear_expression_cache

# Ensure that the expression cache is cleared before each test to avoid cross-test interference.
@pytest.fixture(autouse=True)
def reset_expression_cache():
    clear_expression_cache()
    yield
    clear_expression_cache()

@pytest.fixture
def plot_domain():
    return Domain(-10.0, 10.0, 200)

@pytest.fixture
def surface_domain():
    return Domain(-5.0, 5.0, 10)

@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog

@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
