from __future__ import annotations

import io
import logging

from commitpaint.logger import SEPARATOR, configure_logging, prelog


def test_silent_mode_keeps_messages_in_memory() -> None:
    stream = io.StringIO()
    buffer = configure_logging(silent=True, stream=stream, error_stream=io.StringIO())

    logging.getLogger("commitpaint.sequencer").info("hello")

    assert stream.getvalue() == ""
    assert buffer.get_log() == [SEPARATOR, "hello"]


def test_console_receives_messages_and_errors_go_to_stderr() -> None:
    stream, errors = io.StringIO(), io.StringIO()
    configure_logging(stream=stream, error_stream=errors)

    logger = logging.getLogger("commitpaint")
    logger.info("step")
    logger.error("broken")

    assert "step" in stream.getvalue()
    assert "broken" not in stream.getvalue()
    assert errors.getvalue() == "broken\n"


def test_prelog_messages_are_flushed_first() -> None:
    prelog("early")

    buffer = configure_logging(silent=True, error_stream=io.StringIO())

    assert buffer.get_log()[:2] == ["early", SEPARATOR]


def test_print_log_replays_buffer(capsys) -> None:
    buffer = configure_logging(silent=True, error_stream=io.StringIO())
    logging.getLogger("commitpaint").info("replayed")

    buffer.print_log()

    assert "replayed" in capsys.readouterr().out
