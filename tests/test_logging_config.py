import logging
import pytest
from utils.logging_config import setup_logging, get_logger, parse_level
from inout.yaml_parser import parse_config

@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)

def test_setup_logging_with_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "solve.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 2
    get_logger("cachesolve.test").debug("hello")
    for h in restore_root_logger.handlers:
        h.flush()
    assert "[DEBUG] cachesolve.test: hello" in log_file.read_text()

def test_apply_logging_from_config(restore_root_logger):
    parse_config({"logging": {"level": "WARNING"}}).apply_logging()
    assert restore_root_logger.level == logging.WARNING
    assert len(restore_root_logger.handlers) == 1

@pytest.mark.parametrize("value,expected", [
    ("debug", logging.DEBUG),
    ("INFO", logging.INFO),
    (logging.ERROR, logging.ERROR),
])
def test_parse_level(value, expected):
    assert parse_level(value) == expected

def test_parse_level_unknown():
    with pytest.raises(ValueError):
        parse_level("chatty")
