# tests/test_tracker.py

import datetime

import pytest

from core.exceptions import StorageError
from core.response import ErrorCode
from core.storage import ITEMS_KEY, RECORDS_KEY, MemoryStore
from models.homework_status import HomeworkStatus
from models.tracker import HomeworkTracker


class FailingStore(MemoryStore):
    """A store whose writes always fail."""

    def save(self, key, value):
        raise StorageError(f"disk full while saving {key}")


# === load ===


def test_load_empty_store_seeds_defaults(sample_tracker, memory_store):
    assert sample_tracker.all_records() == []
    assert sample_tracker.homework_names() == [
        "Chinese Workbook",
        "Math Test",
        "English Homework",
    ]
    # loading never writes
    assert ITEMS_KEY not in memory_store


def test_load_existing_data(make_record):
    record = make_record(12, HomeworkStatus.MISSING)
    store = MemoryStore(
        {
            RECORDS_KEY: [record.to_dict()],
            ITEMS_KEY: [{"id": "x1", "name": "Spelling Quiz"}],
        }
    )

    response = HomeworkTracker.load(store)

    assert response.success
    tracker = response.data["tracker"]
    assert [r.id for r in tracker.all_records()] == [record.id]
    assert tracker.homework_names() == ["Spelling Quiz"]


def test_load_empty_catalog_stays_empty():
    tracker = HomeworkTracker.load(MemoryStore({ITEMS_KEY: []})).data["tracker"]

    assert tracker.homework_names() == []


def test_load_malformed_record_fails():
    store = MemoryStore({RECORDS_KEY: [{"id": "broken"}]})

    response = HomeworkTracker.load(store)

    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_load_non_list_fails():
    response = HomeworkTracker.load(MemoryStore({RECORDS_KEY: {"id": "x"}}))

    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_load_unreadable_store_fails():
    class UnreadableStore(MemoryStore):
        def load(self, key):
            raise StorageError("permission denied")

    response = HomeworkTracker.load(UnreadableStore())

    assert not response.success
    assert response.error is ErrorCode.STORAGE_ERROR


# === records ===


def test_append_records_saves(sample_tracker, memory_store, make_record):
    records = [
        make_record(12, HomeworkStatus.MISSING, updated_at=1),
        make_record(3, HomeworkStatus.SUBMITTED, updated_at=2),
    ]

    response = sample_tracker.append_records(records)

    assert response.success
    assert response.data["added"] == records
    assert len(memory_store.load(RECORDS_KEY)) == 2


def test_append_records_rejects_duplicate_batch(sample_tracker, memory_store, make_record):
    first = make_record(12, HomeworkStatus.MISSING, updated_at=1)
    sample_tracker.append_records([first])

    response = sample_tracker.append_records(
        [make_record(3, HomeworkStatus.SUBMITTED, updated_at=2), first]
    )

    assert not response.success
    assert response.error is ErrorCode.DUPLICATE_ID
    assert len(sample_tracker.all_records()) == 1
    assert len(memory_store.load(RECORDS_KEY)) == 1


def test_append_records_storage_failure_keeps_memory(make_record):
    tracker = HomeworkTracker.load(FailingStore()).data["tracker"]

    response = tracker.append_records([make_record(12, HomeworkStatus.MISSING)])

    assert not response.success
    assert response.error is ErrorCode.STORAGE_ERROR
    assert len(response.data["added"]) == 1
    assert len(tracker.all_records()) == 1


def test_remove_record_leaves_others(sample_tracker, make_record):
    target = make_record(12, HomeworkStatus.MISSING, updated_at=1)
    same_day = make_record(12, HomeworkStatus.CORRECTED, updated_at=2)
    other = make_record(3, HomeworkStatus.MISSING, updated_at=3)
    sample_tracker.append_records([target, same_day, other])

    response = sample_tracker.remove_record(target.id)

    assert response.success
    assert response.data["removed"] is target
    assert [r.id for r in sample_tracker.all_records()] == [same_day.id, other.id]


def test_remove_missing_record_is_noop(sample_tracker, memory_store, make_record):
    sample_tracker.append_records([make_record(12, HomeworkStatus.MISSING)])

    response = sample_tracker.remove_record("no-such-id")

    assert response.success
    assert response.data["removed"] is None
    assert len(sample_tracker.all_records()) == 1


def test_find_record_by_id(sample_tracker, make_record):
    record = make_record(12, HomeworkStatus.MISSING)
    sample_tracker.append_records([record])

    assert sample_tracker.find_record_by_id(record.id).data["record"] is record

    response = sample_tracker.find_record_by_id("nope")
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


# === history ===


@pytest.fixture
def history_tracker(sample_tracker, make_record):
    sample_tracker.append_records(
        [
            make_record(12, HomeworkStatus.MISSING, datetime.date(2025, 3, 13), updated_at=10),
            make_record(3, HomeworkStatus.SUBMITTED, datetime.date(2025, 3, 14), updated_at=30),
            make_record(12, HomeworkStatus.CORRECTED, datetime.date(2025, 3, 14), updated_at=20),
            make_record(99, HomeworkStatus.LATE, datetime.date(2025, 3, 14), updated_at=40),
        ]
    )
    return sample_tracker


def test_find_records_newest_first(history_tracker):
    records = history_tracker.find_records().data["records"]

    assert [r.updated_at for r in records] == [40, 30, 20, 10]


def test_find_records_by_date(history_tracker):
    records = history_tracker.find_records(date=datetime.date(2025, 3, 13)).data["records"]

    assert [r.student_id for r in records] == [12]


def test_find_records_by_name(history_tracker):
    records = history_tracker.find_records(name_query=" 杰 ").data["records"]

    assert [r.updated_at for r in records] == [20, 10]


def test_find_records_by_date_and_name(history_tracker):
    records = history_tracker.find_records(
        date=datetime.date(2025, 3, 14), name_query="杰薰"
    ).data["records"]

    assert [r.updated_at for r in records] == [20]


def test_find_records_blank_name_matches_all(history_tracker):
    assert len(history_tracker.find_records(name_query="   ").data["records"]) == 4


# === homework catalog ===


def test_add_and_remove_homework_item_restores_catalog(sample_tracker, make_record):
    record = make_record(12, HomeworkStatus.MISSING, homework_name="Spelling Quiz")
    sample_tracker.append_records([record])
    before = [i.to_dict() for i in sample_tracker.all_homework_items()]

    add_response = sample_tracker.add_homework_item("Spelling Quiz")
    item = add_response.data["record"]

    assert add_response.success
    assert sample_tracker.homework_names()[-1] == "Spelling Quiz"

    remove_response = sample_tracker.remove_homework_item(item.id)

    assert remove_response.success
    assert [i.to_dict() for i in sample_tracker.all_homework_items()] == before
    assert sample_tracker.all_records()[0].homework_name == "Spelling Quiz"


def test_add_homework_item_trims_and_saves(sample_tracker, memory_store):
    sample_tracker.add_homework_item("  Science Report ")

    assert memory_store.load(ITEMS_KEY)[-1]["name"] == "Science Report"


def test_add_blank_homework_item_is_rejected(sample_tracker, memory_store):
    response = sample_tracker.add_homework_item("  ")

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert len(sample_tracker.all_homework_items()) == 3
    assert ITEMS_KEY not in memory_store


def test_duplicate_homework_names_are_allowed(sample_tracker):
    sample_tracker.add_homework_item("Math Test")

    assert sample_tracker.homework_names().count("Math Test") == 2


def test_remove_missing_homework_item_is_noop(sample_tracker):
    response = sample_tracker.remove_homework_item("no-such-id")

    assert response.success
    assert response.data["removed"] is None
    assert len(sample_tracker.all_homework_items()) == 3


def test_add_homework_item_storage_failure():
    tracker = HomeworkTracker.load(FailingStore()).data["tracker"]

    response = tracker.add_homework_item("Spelling Quiz")

    assert response.error is ErrorCode.STORAGE_ERROR
    assert "Spelling Quiz" in tracker.homework_names()
