import logging

from infrastructure.observability import clear_user_context, make_session_tag, set_log_context
from infrastructure.observability.logging import ContextInjectFilter


def _record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)


def test_session_tag_is_stable_and_short() -> None:
    assert make_session_tag("u-admin:u-jane:1") == make_session_tag("u-admin:u-jane:1")
    assert make_session_tag("u-admin:u-jane:1") != make_session_tag("u-admin:u-jane:2")
    assert len(make_session_tag("anything")) == 8


def test_filter_injects_session_and_user() -> None:
    set_log_context(session_id_full="u-admin:u-jane:1", user_id="u-jane")
    record = _record()

    assert ContextInjectFilter().filter(record) is True
    assert record.session == make_session_tag("u-admin:u-jane:1")
    assert record.user == "u-jane"

    clear_user_context()
    record = _record()
    ContextInjectFilter().filter(record)
    assert record.user == "-"
