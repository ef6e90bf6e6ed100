"""Tests for the neweq / eq sqlite staging tables."""

import datetime

import pytest

from torileq.intake import intake_item
from torileq.sql import get_db_connection
from torileq.sql.items import (
    approve_neweq,
    delete_neweq,
    fetch_eq_zones,
    fetch_item,
    fetch_neweq,
    fetch_neweq_summaries,
    insert_neweq,
    search_eq_stats,
    update_neweq_stats,
)

CHEETAH_PAW = (
    "Name 'a cheetah paw'\n"
    "Keyword 'paw cheetah', Item type: WEAPON\n"
    "Weight: 2, Value: 50\n"
    "Affects : HITROLL by 3\n"
    "Affects : DAMROLL by 2\n"
)


@pytest.fixture
def conn(tmp_path):
    conn = get_db_connection(str(tmp_path / "eq.db"))
    yield conn
    conn.close()


@pytest.fixture
def record():
    return intake_item(
        CHEETAH_PAW, zone="Cheetah Den", load="R",
        clock=lambda: datetime.date(2024, 5, 1))


def stage(conn, record):
    curs = conn.cursor()
    insert_neweq(curs, record)
    conn.commit()
    return curs


class TestNeweq:
    def test_insert_and_fetch_round_trip(self, conn, record):
        curs = stage(conn, record)
        assert fetch_neweq(curs, "a cheetah paw") == record

    def test_fetch_missing(self, conn):
        assert fetch_neweq(conn.cursor(), "nothing") is None

    def test_summaries(self, conn, record):
        curs = stage(conn, record)
        insert_neweq(curs, {"name": "a blue potion", "TYPE": "POTION"})
        rows = fetch_neweq_summaries(curs)
        assert [r["name"] for r in rows] == ["a blue potion", "a cheetah paw"]
        assert rows[1] == {
            "name": "a cheetah paw",
            "TYPE": "WEAPON",
            "worn": None,
            "wt": 2,
            "VALUE": 50,
            "ac": None,
            "hit": 3,
            "dam": 2,
            "keywords": "paw cheetah",
        }

    def test_unknown_field_rejected(self, conn):
        with pytest.raises(ValueError, match="color"):
            insert_neweq(conn.cursor(), {"name": "a ring", "color": "red"})

    def test_reserved_word_columns(self, conn):
        curs = stage(conn, {"name": "a lockpick", "break": 5, "pick": 10, "int": 1})
        assert fetch_neweq(curs, "a lockpick") == {"name": "a lockpick", "break": 5, "pick": 10, "int": 1}

    def test_update_stats(self, conn, record):
        curs = stage(conn, record)
        assert update_neweq_stats(curs, "a cheetah paw", "short", "long") == 1
        stored = fetch_neweq(curs, "a cheetah paw")
        assert stored["short_stats"] == "short"
        assert stored["long_stats"] == "long"

    def test_reject(self, conn, record):
        curs = stage(conn, record)
        assert delete_neweq(curs, "a cheetah paw") == 1
        assert fetch_neweq(curs, "a cheetah paw") is None
        assert delete_neweq(curs, "a cheetah paw") == 0


class TestApprove:
    def test_moves_row_to_eq(self, conn, record):
        curs = stage(conn, record)
        approve_neweq(conn, "a cheetah paw")
        assert fetch_neweq(curs, "a cheetah paw") is None
        assert fetch_item(curs, "eq", "a cheetah paw") == record

    def test_missing_item(self, conn):
        with pytest.raises(LookupError):
            approve_neweq(conn, "nothing")

    def test_search_eq_stats(self, conn, record):
        stage(conn, record)
        approve_neweq(conn, "a cheetah paw")
        curs = conn.cursor()
        assert search_eq_stats(curs, "cheetah paw") == [
            {"name": "a cheetah paw", "short_stats": record["short_stats"]}
        ]
        assert search_eq_stats(curs, "PAW", stats="long") == [
            {"name": "a cheetah paw", "long_stats": record["long_stats"]}
        ]
        assert search_eq_stats(curs, "paw sword") == []
        assert search_eq_stats(curs, "  ") == []

    def test_zones(self, conn, record):
        curs = stage(conn, record)
        insert_neweq(curs, {"name": "a blue potion", "zone": "Waterdeep"})
        insert_neweq(curs, {"name": "a red potion", "zone": "Waterdeep"})
        insert_neweq(curs, {"name": "a rock"})
        insert_neweq(curs, {"name": "a pending ring", "zone": "Menzoberranzan"})
        conn.commit()
        for name in ["a cheetah paw", "a blue potion", "a red potion", "a rock"]:
            approve_neweq(conn, name)
        assert fetch_eq_zones(conn.cursor()) == ["Cheetah Den", "Waterdeep"]
