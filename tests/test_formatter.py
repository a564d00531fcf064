from datetime import datetime, timedelta, timezone

from sharedlog.formatter import TextFormatter, needs_quoting, rfc3339
from sharedlog.models import ERROR, INFO, PANIC, TRACE, LogEntry

TZ = timezone(timedelta(hours=2))


def _entry(message="hello", level=INFO, fields=None):
    return LogEntry(
        time=datetime(2026, 10, 19, 9, 30, 5, tzinfo=TZ),
        level=level,
        message=message,
        function="handlers.serve()",
        file="handlers.py",
        line=42,
        fields=fields or {},
    )


def test_fixed_keys_come_first_in_order():
    line = TextFormatter().render(_entry())
    assert line == (
        'time="2026-10-19T09:30:05+02:00" level=info msg=hello '
        'func="handlers.serve()" file="handlers.py:42"\n'
    )


def test_fields_sorted_by_key():
    line = TextFormatter().render(_entry(fields={"zone": "eu", "attempt": 3, "id": "a1"}))
    assert line.rstrip("\n").endswith("attempt=3 id=a1 zone=eu")


def test_values_with_spaces_are_quoted_and_escaped():
    line = TextFormatter().render(_entry(message='said "hi" twice', fields={"path": "/a b"}))
    assert 'msg="said \\"hi\\" twice"' in line
    assert 'path="/a b"' in line


def test_empty_message_is_omitted():
    line = TextFormatter().render(_entry(message=""))
    assert "msg=" not in line
    assert "level=info func=" in line


def test_clashing_fields_are_prefixed():
    line = TextFormatter().render(_entry(fields={"level": "custom", "msg": "x", "user": "bo"}))
    assert "level=info" in line
    assert "fields.level=custom" in line
    assert "fields.msg=x" in line
    assert "user=bo" in line


def test_level_names():
    f = TextFormatter()
    assert "level=trace" in f.render(_entry(level=TRACE))
    assert "level=error" in f.render(_entry(level=ERROR))
    assert "level=panic" in f.render(_entry(level=PANIC))


def test_empty_field_quoting_is_configurable():
    assert " note=\n" in TextFormatter().render(_entry(fields={"note": ""}))
    assert ' note=""\n' in TextFormatter(quote_empty_fields=True).render(_entry(fields={"note": ""}))


def test_needs_quoting():
    assert not needs_quoting("abc-1.2_x/y@z^w+v")
    assert needs_quoting("a b")
    assert needs_quoting("k=v")
    assert needs_quoting("line\nbreak")
    assert not needs_quoting("")
    assert needs_quoting("", quote_empty=True)


def test_utc_time_uses_z_suffix():
    utc = datetime(2026, 10, 19, 7, 30, 5, tzinfo=timezone.utc)
    assert rfc3339(utc) == "2026-10-19T07:30:05Z"
    assert rfc3339(datetime(2026, 10, 19, 9, 30, 5, tzinfo=TZ)) == "2026-10-19T09:30:05+02:00"

    entry = LogEntry(time=utc, level=INFO, message="m", function="f()", file="f.py", line=1)
    assert TextFormatter().render(entry).startswith('time="2026-10-19T07:30:05Z" level=info ')
