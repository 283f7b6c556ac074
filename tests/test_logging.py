import numpy as np
from loguru import logger

from id3py import AttributeCatalog, RecordStore, enable_logging, train


def _conflicting():
    return RecordStore(np.zeros((3, 1), dtype=int), [0, 1, 1]), AttributeCatalog.from_sizes([1], 2)


def test_package_is_silent_by_default():
    messages = []
    handler_id = logger.add(messages.append, level="TRACE")
    try:
        train(*_conflicting())
    finally:
        logger.remove(handler_id)
    assert messages == []


def test_enable_logging_reports_unresolved_leaves():
    messages = []
    with enable_logging(level="DEBUG", sink=messages.append):
        train(*_conflicting())
    assert any("unresolved" in m for m in messages)

    count = len(messages)
    train(*_conflicting())
    assert len(messages) == count


def test_level_filters_messages():
    messages = []
    handle = enable_logging(level="WARNING", sink=messages.append)
    train(*_conflicting())
    handle.disable()
    handle.disable()
    assert messages == []


def test_full_format_includes_module():
    messages = []
    with enable_logging(level="DEBUG", log_format="full", sink=messages.append):
        train(*_conflicting())
    assert any("id3py.tree:train:" in m for m in messages)
