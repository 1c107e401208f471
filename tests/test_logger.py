import logging

from umami_load.logger import VisitorLogAdapter, init_logging, logger, visitor_logger


def test_visitor_logger_prefixes_messages(capsys):
    init_logging("DEBUG", log_format="%(levelname)s %(message)s")

    visitor_logger(7).warning("front page failed")

    assert "WARNING [visitor 7] front page failed" in capsys.readouterr().out


def test_visitor_logger_is_bound_to_project_logger():
    adapter = visitor_logger(3)
    assert isinstance(adapter, VisitorLogAdapter)
    assert adapter.logger is logger
    assert adapter.extra == {"visitor_id": 3}


def test_init_logging_replaces_handlers():
    init_logging()
    init_logging("WARNING")

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert logger.propagate is False
    runners = logging.getLogger("locust.runners")
    assert runners.handlers == logger.handlers


def test_init_logging_writes_file(tmp_path, capsys):
    log_file = tmp_path / "umami.log"
    init_logging("INFO", log_file=log_file)

    logger.debug("hidden")
    logger.info("run finished")
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "| INFO     | UmamiLoad | run finished" in text
    assert "hidden" not in text
    assert "run finished" in capsys.readouterr().out
