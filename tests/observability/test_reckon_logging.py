import io
import logging

from reckon.errors import InvalidKeywordError
from reckon.observability import configure_logging, get_logger, log_evaluation_failure


def test_get_logger_is_cached():
    assert get_logger("reckon.demo") is get_logger("reckon.demo")


def test_configure_logging_replaces_its_handler():
    stream = io.StringIO()
    configure_logging(False)
    configure_logging(True, stream=stream)
    root = logging.getLogger("reckon")
    handlers = [handler for handler in root.handlers if getattr(handler, "_reckon_handler", False)]
    assert len(handlers) == 1
    assert root.level == logging.DEBUG
    get_logger("reckon.demo").debug("hello %s", "there")
    assert "DEBUG reckon.demo: hello there" in stream.getvalue()


def test_quiet_logging_hides_debug():
    stream = io.StringIO()
    configure_logging(False, stream=stream)
    get_logger("reckon.demo").debug("hidden")
    get_logger("reckon.demo").warning("shown")
    assert "hidden" not in stream.getvalue()
    assert "shown" in stream.getvalue()


def test_log_evaluation_failure_payload(caplog):
    logger = get_logger("reckon.demo")
    with caplog.at_level(logging.DEBUG, logger="reckon"):
        log_evaluation_failure(
            text="2 apples",
            error=InvalidKeywordError("apples", column=3),
            logger=logger,
            extras={"source": "test"},
        )
    record = caplog.records[-1]
    assert record.reckon_data == {
        "input": "2 apples",
        "error": "InvalidKeywordError",
        "code": "LEX_INVALID_KEYWORD",
        "column": 3,
        "source": "test",
    }
