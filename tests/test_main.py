import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import logging

from list_sidebar.logging_setup import SESSION_ID, EnsureSessionFilter, _qt_levels, setup_logging
from list_sidebar.main import main


def test_dump_prints_canonical_text(qapp, tmp_path, capsys, isolated_logging):
    vault = tmp_path / "vault"
    vault.mkdir()
    (vault / "list-sidebar-data.md").write_text(
        "---\nGroceries:\n  - milk\n---\n", encoding="utf-8"
    )

    rc = main(["--vault", str(vault), "--settings", str(tmp_path / "s.ini"), "--dump"])

    assert rc == 0
    assert "## Groceries <!-- expanded:true -->\n\n- milk\n" in capsys.readouterr().out


def test_file_option_overrides_settings(qapp, tmp_path, capsys, isolated_logging):
    vault = tmp_path / "vault"
    (vault / "lists").mkdir(parents=True)
    (vault / "lists" / "work.md").write_text("## Work <!-- expanded:false -->\n\n- report\n", encoding="utf-8")

    rc = main([
        "--vault", str(vault),
        "--settings", str(tmp_path / "s.ini"),
        "--file", "lists\\work.md",
        "--dump",
    ])

    assert rc == 0
    assert "## Work <!-- expanded:false -->\n\n- report\n" in capsys.readouterr().out
    assert "lists/work.md" in (tmp_path / "s.ini").read_text(encoding="utf-8")


def test_setup_logging_writes_file(isolated_logging):
    log = setup_logging(console_level=logging.WARNING)
    log.info("hello from test")

    for handler in logging.getLogger("list_sidebar").handlers:
        handler.flush()
    text = isolated_logging.read_text(encoding="utf-8")
    assert "hello from test" in text
    assert f"[{SESSION_ID}]" in text


def test_session_filter_fills_missing_field():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    assert EnsureSessionFilter().filter(record)
    assert record.session == SESSION_ID


def test_setup_logging_explicit_path_and_once(isolated_logging, tmp_path):
    target = tmp_path / "elsewhere" / "run.log"
    first = setup_logging(console_level=logging.WARNING, log_path=target)
    second = setup_logging(log_path=tmp_path / "ignored.log")
    first.warning("written once")

    logger = logging.getLogger("list_sidebar")
    assert len(logger.handlers) == 2
    assert second.logger is logger
    for handler in logger.handlers:
        handler.flush()
    assert target.read_text(encoding="utf-8").count("written once") == 1
    assert not (tmp_path / "ignored.log").exists()


def test_qt_message_levels():
    from PySide6.QtCore import QtMsgType

    levels = _qt_levels()
    assert levels[QtMsgType.QtDebugMsg] == logging.DEBUG
    assert levels[QtMsgType.QtInfoMsg] == logging.INFO
    assert levels[QtMsgType.QtCriticalMsg] == logging.ERROR
    assert levels[QtMsgType.QtFatalMsg] == logging.CRITICAL
