from datetime import datetime, timedelta, timezone

import pytest

from exam_results.models import StoredResult
from exam_results.schemas import PersistedResultRecord, ResultSummary


def make_record(exam_id, correct=7, title="Mock Test", minutes_ago=0):
    return PersistedResultRecord(
        exam_id=exam_id,
        result=ResultSummary(
            total_questions=10,
            correct_answers=correct,
            incorrect_answers=10 - correct,
            percentage=correct * 10,
            result_status="Pass" if correct >= 5 else "Fail",
        ),
        answers=[0, 1, None],
        exam_title=title,
        time_spent=300,
        timestamp=datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago),
    )


@pytest.fixture(params=["memory", "database"])
def store(request, memory_store, database_store):
    return memory_store if request.param == "memory" else database_store


def test_get_missing_returns_none(store):
    assert store.get("404") is None


def test_put_then_get_round_trips(store):
    record = make_record("1")

    store.put("1", record)

    assert store.get("1") == record


def test_last_write_wins(store):
    first = make_record("1", correct=3, title="First attempt")
    second = make_record("1", correct=9, title="Second attempt")

    store.put("1", first)
    store.put("1", second)

    assert store.get("1") == second


def test_records_for_different_exams_do_not_collide(store):
    store.put("1", make_record("1", correct=2))
    store.put("2", make_record("2", correct=8))

    assert store.get("1").result.correct_answers == 2
    assert store.get("2").result.correct_answers == 8


def test_list_all_is_newest_first(store):
    store.put("old", make_record("old", minutes_ago=60))
    store.put("new", make_record("new", minutes_ago=0))
    store.put("mid", make_record("mid", minutes_ago=30))

    assert [r.exam_id for r in store.list_all()] == ["new", "mid", "old"]


def test_memory_store_uses_prefixed_key_and_camel_case_json(memory_store):
    memory_store.put("42", make_record("42"))

    raw = memory_store.entries["exam_result_42"]
    assert '"examId":"42"' in raw
    assert '"totalQuestions":10' in raw


def test_memory_store_corrupted_entry_is_absent(memory_store):
    memory_store.entries["exam_result_42"] = "{not json"

    assert memory_store.get("42") is None


def test_memory_store_incompatible_entry_is_absent(memory_store):
    memory_store.entries["exam_result_42"] = '{"examId": "42", "answers": "nope"}'

    assert memory_store.get("42") is None


def test_list_all_skips_corrupt_and_foreign_entries(memory_store):
    memory_store.put("1", make_record("1"))
    memory_store.entries["exam_result_2"] = "garbage"
    memory_store.entries["user"] = '{"name": "someone"}'

    assert [r.exam_id for r in memory_store.list_all()] == ["1"]


def test_database_store_corrupted_row_is_absent(database_store, session_factory):
    with session_factory() as session:
        session.add(StoredResult(key="exam_result_9", value="}}}"))
        session.commit()

    assert database_store.get("9") is None


def test_database_store_keeps_single_row_per_exam(database_store, session_factory):
    database_store.put("5", make_record("5", correct=1))
    database_store.put("5", make_record("5", correct=6))

    with session_factory() as session:
        rows = session.query(StoredResult).all()

    assert [row.key for row in rows] == ["exam_result_5"]
    assert database_store.get("5").result.correct_answers == 6


def test_custom_key_prefix(session_factory):
    from exam_results.services.result_store import DatabaseResultStore

    store = DatabaseResultStore(session_factory, key_prefix="attempt:")
    store.put("3", make_record("3"))

    with session_factory() as session:
        assert session.get(StoredResult, "attempt:3") is not None
