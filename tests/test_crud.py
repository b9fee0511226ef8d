import pytest
from sqlmodel import Session
from wordguess import crud, models
from wordguess.config import settings
from wordguess.errors import HistoryBodyTooLong


def test_record_game_start_creates_record_and_entry(engine):
    with Session(engine) as s:
        g = crud.record_game_start(s, 5, 3)
        assert g.id and g.status == "active"
        assert g.started_at > 0 and g.formatted_started_at

        entries = crud.list_entries_for_game(s, g.id)
        assert len(entries) == 1
        assert entries[0].body == "Game was started, word length: 5, tries: 3"
        assert entries[0].game_id == g.id


def test_record_event_appends_and_filters_by_game(engine):
    with Session(engine) as s:
        g1 = crud.record_game_start(s, 3, 2)
        g2 = crud.record_game_start(s, 4, 2)
        crud.record_event(s, g1.id, "first")
        crud.record_event(s, g1.id, "second")
        crud.record_event(s, g2.id, "other")

        bodies = [e.body for e in crud.list_entries_for_game(s, g1.id)]
        assert len(bodies) == 3 and "first" in bodies and "second" in bodies
        assert "other" not in bodies
        assert len(crud.list_entries_for_game(s, g2.id)) == 2
        assert crud.list_entries_for_game(s, "missing") == []


def test_end_game_record_flips_status(engine):
    with Session(engine) as s:
        g = crud.record_game_start(s, 3, 2)
        ended = crud.end_game_record(s, g.id)
        assert ended is not None and ended.status == "ended"
        assert crud.get_game(s, g.id).status == "ended"
        # unknown ids are ignored
        assert crud.end_game_record(s, "missing") is None


def test_list_games_returns_every_record(engine):
    with Session(engine) as s:
        ids = {crud.record_game_start(s, 3, 1).id for _ in range(3)}
        assert {g.id for g in crud.list_games(s)} == ids


def test_clear_all_empties_both_tables(engine):
    with Session(engine) as s:
        gid = crud.record_game_start(s, 3, 2).id
        crud.record_event(s, gid, "guess")
        games, entries = crud.clear_all(s)
        assert (games, entries) == (1, 2)
        assert crud.list_games(s) == []
        assert crud.list_entries_for_game(s, gid) == []
        assert s.get(models.GameRecord, gid) is None


def test_oversized_body_rejected_before_write(engine, monkeypatch):
    monkeypatch.setattr(settings, "history_body_max_length", 10)
    with Session(engine) as s:
        g = models.GameRecord(id="g1", status="active")
        s.add(g)
        s.commit()
        with pytest.raises(HistoryBodyTooLong):
            crud.record_event(s, "g1", "x" * 11)
        assert crud.list_entries_for_game(s, "g1") == []


def test_format_timestamp():
    # 2021-01-01T00:00:00Z
    assert crud.format_timestamp(1_609_459_200 * 1_000_000_000) == "Fri Jan 01 2021 00:00:00 GMT+0000"


def test_body_budget_counts_utf8_bytes(monkeypatch):
    monkeypatch.setattr(settings, "history_body_max_length", 10)
    crud.check_body("a" * 10)
    # five characters, ten bytes
    crud.check_body("é" * 5)
    with pytest.raises(HistoryBodyTooLong) as exc:
        crud.check_body("é" * 6)
    assert exc.value.message == "History entry exceeds 10 bytes."
