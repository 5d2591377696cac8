"""Tests for loading the logging configuration at import time."""

import importlib
import logging

from vroommart import logging as vroommart_logging

MINIMAL_CONF = """
[loggers]
keys=root

[handlers]
keys=console

[formatters]
keys=plain

[logger_root]
level=ERROR
handlers=console

[handler_console]
class=StreamHandler
level=WARNING
formatter=plain
args=(sys.stderr,)

[formatter_plain]
format=%(levelname)s %(message)s
"""


def test_logging_conf_is_read_from_working_directory(monkeypatch, tmp_path):
    (tmp_path / "logging.conf").write_text(MINIMAL_CONF)
    monkeypatch.chdir(tmp_path)
    try:
        importlib.reload(vroommart_logging)

        assert (tmp_path / "logs").is_dir()
        assert logging.getLogger().level == logging.ERROR
    finally:
        monkeypatch.undo()
        importlib.reload(vroommart_logging)
