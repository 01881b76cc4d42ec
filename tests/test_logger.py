import io
import json
import logging

from app.logger import REDACTED, JSONFormatter, StructuredLogger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="registration_form", level=logging.INFO, pathname=__file__,
        lineno=1, msg="Registration submitted: %s", args=("reg-1",), exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_event_is_lifted_to_top_level():
    entry = json.loads(JSONFormatter().format(_record(event="REGISTRATION_SUBMITTED", department="Sales")))

    assert entry["event"] == "REGISTRATION_SUBMITTED"
    assert entry["message"] == "Registration submitted: reg-1"
    assert entry["extra"] == {"department": "Sales"}


def test_sensitive_extras_are_masked():
    entry = json.loads(JSONFormatter().format(_record(password="hunter22", access_token="jwt")))

    assert entry["extra"] == {"password": REDACTED, "access_token": REDACTED}


def test_plain_record_has_no_extra_block():
    entry = json.loads(JSONFormatter().format(_record()))

    assert "extra" not in entry
    assert "event" not in entry


def test_structured_logger_writes_json_lines(tmp_path):
    stream = io.StringIO()
    log = StructuredLogger(name="tests.logger.stream", stream=stream, log_file=str(tmp_path / "a.log"))

    log.info("Loaded %d registrations", 3, extra={"event": "REGISTRATIONS_LOADED"})

    entry = json.loads(stream.getvalue().strip())
    assert entry["event"] == "REGISTRATIONS_LOADED"
    assert (tmp_path / "a.log").read_text(encoding="utf-8").strip()
