import logging
import pytest
from utils.logging_config import get_logger, setup_logging

def test_setup_logging_accepts_level_names(restore_root_logger, tmp_path):
    log_file = tmp_path / "engine.log"
    setup_logging("debug", log_file=str(log_file))
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 2
    get_logger("engine.test").debug("hello from the engine")
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert "[DEBUG] engine.test: hello from the engine" in log_file.read_text()

def test_setup_logging_does_not_stack_handlers(restore_root_logger):
    setup_logging(logging.INFO)
    setup_logging(logging.INFO)
    assert len(restore_root_logger.handlers) == 1

def test_unknown_level_name(restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging("LOUD")

def test_get_logger_inherits_level_by_default():
    assert get_logger("engine.inherit").level == logging.NOTSET
    assert get_logger("engine.explicit", "WARNING").level == logging.WARNING
