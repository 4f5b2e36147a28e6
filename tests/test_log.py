"""Package logger: namespace, single handler, one JSON object per record."""

import json
import logging
import sys

from schnorrchain.log import ROOT_LOGGER, JsonFormatter, get_logger


def _record(msg, *args):
    return logging.LogRecord(
        "schnorrchain.demo", logging.INFO, __file__, 1, msg, args, None
    )


def test_names_are_namespaced():
    assert get_logger("delegation").name == "schnorrchain.delegation"
    assert get_logger("schnorrchain.hash").name == "schnorrchain.hash"
    assert get_logger().name == ROOT_LOGGER


def test_single_handler_on_root():
    get_logger("a")
    get_logger("b")
    assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1


def test_quotes_and_newlines_stay_valid_json():
    line = JsonFormatter().format(_record('payload "%s"\nnext line', "grant:read"))
    entry = json.loads(line)
    assert "\n" not in line
    assert entry["msg"] == 'payload "grant:read"\nnext line'
    assert entry["level"] == "INFO"
    assert entry["name"] == "schnorrchain.demo"
    assert entry["ts"].endswith("Z")


def test_exception_is_inside_the_object():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord(
            "schnorrchain", logging.ERROR, __file__, 1, "failed", (),
            sys.exc_info(),
        )
    entry = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in entry["exc"]
