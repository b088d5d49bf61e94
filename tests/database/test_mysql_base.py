from datetime import time, timedelta

import pytest

from src.shift_roster.shift_roster.database.mysql_base import clock_time, db_cursor, in_placeholders, opt_int


class _Recorder:
    def __init__(self):
        self.calls = []

    def connect(self):
        return self

    def cursor(self, dictionary=True):
        self.calls.append(("cursor", dictionary))
        return self

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")

    def close(self):
        self.calls.append("close")


def test_db_cursor_commits_on_success():
    rec = _Recorder()
    with db_cursor(rec):
        pass
    assert rec.calls == [("cursor", True), "commit", "close", "close"]


def test_db_cursor_rolls_back_and_reraises():
    rec = _Recorder()
    with pytest.raises(RuntimeError):
        with db_cursor(rec):
            raise RuntimeError("boom")
    assert "commit" not in rec.calls
    assert rec.calls[-3:] == ["rollback", "close", "close"]


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, None),
        (time(6, 30), time(6, 30)),
        (timedelta(hours=22, minutes=30), time(22, 30)),
        (timedelta(hours=24, minutes=15), time(0, 15)),
        ("08:30:00", time(8, 30)),
    ],
)
def test_clock_time_normalizes_connector_values(raw, expected):
    assert clock_time(raw) == expected


def test_clock_time_rejects_garbage():
    with pytest.raises(ValueError):
        clock_time("eight")
    with pytest.raises(TypeError):
        clock_time(830)


def test_optional_columns_and_placeholders():
    assert opt_int(None) is None
    assert opt_int("12") == 12
    assert in_placeholders([4, 5, 6]) == "%s, %s, %s"
    with pytest.raises(ValueError):
        in_placeholders([])
