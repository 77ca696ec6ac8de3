# models/tracker.py

"""
The HomeworkTracker model is the central data object of the program and represents the "source of truth" for all records.

Homework records and assignment catalog items are held in insertion-ordered dictionaries keyed by id, and written
through an injected key-value store after every mutation (load-all on startup, save-all on change).

Provides functions for loading a HomeworkTracker from a store, appending and deleting homework records,
querying the record history, and adding and removing assignment catalog items.
The class roster is fixed reference data and is passed in at construction.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Callable

from core.exceptions import StorageError, ValidationError
from core.response import ErrorCode, Response
from core.storage import ITEMS_KEY, RECORDS_KEY, KeyValueStore
from core.utils import generate_uuid
from models.homework_item import HomeworkItem, default_homework_items
from models.homework_record import HomeworkRecord
from models.roster import STUDENTS, find_student, students_in_group
from models.student import Student
from models.types import RecordType

logger = logging.getLogger(__name__)


class HomeworkTracker:

    def __init__(
        self,
        store: KeyValueStore,
        roster: tuple[Student, ...] | list[Student] = STUDENTS,
    ):
        self._store = store
        self._roster: tuple[Student, ...] = tuple(roster)
        self._records: dict[str, HomeworkRecord] = {}
        self._homework_items: dict[str, HomeworkItem] = {}

    # === properties ===

    # --- core data structures ---

    @property
    def records(self) -> dict[str, HomeworkRecord]:
        return self._records

    @property
    def homework_items(self) -> dict[str, HomeworkItem]:
        return self._homework_items

    @property
    def roster(self) -> tuple[Student, ...]:
        return self._roster

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # === public classmethods ===

    @classmethod
    def load(
        cls,
        store: KeyValueStore,
        roster: tuple[Student, ...] | list[Student] = STUDENTS,
    ) -> Response:
        """
        Loads the stored records and assignment catalog and returns a `HomeworkTracker` instance.

        Args:
            store (KeyValueStore): The backing store to read from and write through to.
            roster (tuple[Student, ...] | list[Student]): The fixed class roster. Defaults to `STUDENTS`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if both keys were read (or found absent) and deserialized.
                    - False for unreadable data, malformed records, or duplicate ids.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.STORAGE_ERROR` if the store cannot be read.
                    - `ErrorCode.INVALID_FIELD_VALUE` if a record or item is malformed.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "tracker" (HomeworkTracker): The loaded tracker.
                    - On failure:
                        - None

        Notes:
            - An absent record list loads as empty; an absent catalog loads as the default seed items.
            - Loading never writes to the store.
        """
        try:
            tracker = cls(store, roster)

            record_data = store.load(RECORDS_KEY)
            tracker.import_records(record_data if record_data is not None else [])

            item_data = store.load(ITEMS_KEY)
            if item_data is None:
                for item in default_homework_items():
                    tracker._add_record(item, tracker.homework_items)
            else:
                tracker.import_homework_items(item_data)

        except StorageError as e:
            return Response.fail(
                detail=f"Failed to read stored data: {e}",
                error=ErrorCode.STORAGE_ERROR,
            )

        except (ValueError, TypeError, KeyError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            logger.info(
                f"Loaded {len(tracker.records)} records and {len(tracker.homework_items)} homework items"
            )

            return Response.succeed(
                data={
                    "tracker": tracker,
                },
            )

    # === persistence and import ===

    def _save_records(self) -> None:
        self._store.save(RECORDS_KEY, [r.to_dict() for r in self._records.values()])

    def _save_homework_items(self) -> None:
        self._store.save(
            ITEMS_KEY, [i.to_dict() for i in self._homework_items.values()]
        )

    def _import_records(
        self,
        data: Any,
        from_dict_fn: Callable[[dict[str, Any]], RecordType],
        dictionary: dict[str, RecordType],
        record_name: str,
    ) -> None:
        """
        Deserializes a stored list into the given dictionary, failing fast on error.

        Args:
            data (Any): The value loaded from the store; must be a list of dictionaries.
            from_dict_fn (Callable[[dict[str, Any]], RecordType]): Deserializer for one entry.
            dictionary (dict[str, RecordType]): The tracking dictionary to fill.
            record_name (str): A human-readable name used in error messages.

        Raises:
            ValueError: If the data is not a list, an entry is malformed, or two entries share an id.
        """
        if not isinstance(data, list):
            raise ValueError(f"Expected stored {record_name}s to be a list.")

        for record_dict in data:
            try:
                record = from_dict_fn(record_dict)
            except (ValueError, TypeError, KeyError) as e:
                raise ValueError(
                    f"Failed to deserialize {record_name}: {record_dict} - {e}"
                )

            if record.id in dictionary:
                raise ValueError(f"Duplicate {record_name} id in stored data: {record.id}")

            self._add_record(record, dictionary)

    def import_records(self, record_data: Any) -> None:
        self._import_records(
            data=record_data,
            from_dict_fn=HomeworkRecord.from_dict,
            dictionary=self.records,
            record_name="homework record",
        )

    def import_homework_items(self, item_data: Any) -> None:
        self._import_records(
            data=item_data,
            from_dict_fn=HomeworkItem.from_dict,
            dictionary=self.homework_items,
            record_name="homework item",
        )

    # === data accessors ===

    def get_records(
        self,
        dictionary: dict[str, RecordType],
        predicate: Callable[[RecordType], bool] | None = None,
    ) -> Response:
        """
        Fetches records from a dictionary, optionally filtered by a predicate.

        Args:
            dictionary (dict[str, RecordType]): A mapping of record IDs to record objects.
            predicate (Callable[[RecordType], bool]): Optional filter function. If omitted, all records are returned.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the operation succeeded, even if no records were found.
                    - False for unexpected errors.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "records" (list[RecordType]): The matching records in insertion order (may be empty).
                    - On failure:
                        - None

        Notes:
            - This method is read-only and never raises exceptions.
        """
        try:
            if predicate:
                records = list(filter(predicate, dictionary.values()))
            else:
                records = list(dictionary.values())

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            return Response.succeed(
                data={
                    "records": records,
                }
            )

    def all_records(self) -> list[HomeworkRecord]:
        return list(self._records.values())

    def all_homework_items(self) -> list[HomeworkItem]:
        return list(self._homework_items.values())

    def homework_names(self) -> list[str]:
        return [item.name for item in self._homework_items.values()]

    # --- roster lookups ---

    def find_student(self, student_id: int) -> Student | None:
        return find_student(student_id, self._roster)

    def students_in_group(self, group: int) -> list[Student]:
        return students_in_group(group, self._roster)

    # --- record lookups ---

    def find_record_by_id(self, record_id: str) -> Response:
        """
        Finds a `HomeworkRecord` by id.

        Returns:
            Response: On success, data["record"] holds the record. On failure, `ErrorCode.NOT_FOUND` with status 404.
        """
        record = self._records.get(record_id)

        if record is None:
            return Response.fail(
                detail=f"No matching record could be found: id {record_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(
            data={
                "record": record,
            },
        )

    def find_records(
        self,
        date: datetime.date | None = None,
        name_query: str | None = None,
    ) -> Response:
        """
        Lists the record history, filtered by date and student name, newest first.

        Args:
            date (datetime.date | None): If given, only records on this date are included.
            name_query (str | None): If given (and not blank), only records whose student's name contains this text are included.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True unless an unexpected error occurs.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "records" (list[HomeworkRecord]): Matching records sorted by `updated_at`, most recent first.

        Notes:
            - This method is read-only.
            - Records whose student id is not on the roster never match a name query.
            - Name matching is case-sensitive substring matching after stripping the query.
        """
        query = name_query.strip() if name_query else ""

        def matches(record: HomeworkRecord) -> bool:
            if date is not None and record.date != date:
                return False

            if query:
                student = self.find_student(record.student_id)
                return student is not None and query in student.name

            return True

        response = self.get_records(self.records, matches)

        if not response.success:
            return response

        return Response.succeed(
            data={
                "records": sorted(
                    response.data["records"], key=lambda r: r.updated_at, reverse=True
                ),
            },
        )

    # === data manipulators ===

    # --- generalized record operations ---

    def _add_record(self, record: RecordType, dictionary: dict) -> None:
        dictionary[record.id] = record

    def _remove_record(self, record_id: str, dictionary: dict) -> RecordType | None:
        return dictionary.pop(record_id, None)

    # --- homework record manipulation ---

    def append_records(self, records: list[HomeworkRecord]) -> Response:
        """
        Appends a batch of `HomeworkRecord` objects and persists the full record list.

        Args:
            records (list[HomeworkRecord]): The new records, typically one entry session's commit.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if every record was appended and the list was persisted.
                    - False if an id collides, or if the store write failed.
                - detail (str | None):
                    - A human-readable confirmation or description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.DUPLICATE_ID` if any id is already stored or repeated in the batch.
                    - `ErrorCode.STORAGE_ERROR` if the store write failed.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - "added" (list[HomeworkRecord]): The appended records (also present on storage failure).

        Notes:
            - The batch is validated before any record is appended; a duplicate id rejects the whole batch.
            - On `STORAGE_ERROR` the records remain appended in memory; the write is not retried.
        """
        try:
            self.require_unique_record_ids(records)

            for record in records:
                self._add_record(record, self.records)

        except ValueError as e:
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.DUPLICATE_ID,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        try:
            self._save_records()

        except StorageError as e:
            logger.error(f"Appended {len(records)} records but could not save them: {e}")

            return Response.fail(
                detail=f"Records were added but could not be saved: {e}",
                error=ErrorCode.STORAGE_ERROR,
                data={
                    "added": list(records),
                },
            )

        logger.info(f"Appended {len(records)} homework records")

        return Response.succeed(
            detail=f"{len(records)} records successfully added.",
            data={
                "added": list(records),
            },
        )

    def remove_record(self, record_id: str) -> Response:
        """
        Deletes a single `HomeworkRecord` by id and persists the full record list.

        Args:
            record_id (str): The id of the record to delete.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was removed, or if no record had this id.
                    - False if the store write failed.
                - error (ErrorCode | str | None):
                    - `ErrorCode.STORAGE_ERROR` if the store write failed.
                - data (dict | None): Payload with the following keys:
                    - "removed" (HomeworkRecord | None): The deleted record, or None if the id was absent.

        Notes:
            - Deleting an absent id is a no-op and does not write to the store.
            - Other records, including those for the same student and date, are untouched.
        """
        removed = self._remove_record(record_id, self.records)

        if removed is None:
            logger.debug(f"Record {record_id} not found; nothing to remove")

            return Response.succeed(
                detail="No record with this id; nothing was removed.",
                data={
                    "removed": None,
                },
            )

        try:
            self._save_records()

        except StorageError as e:
            logger.error(f"Removed record {record_id} but could not save: {e}")

            return Response.fail(
                detail=f"Record was removed but the change could not be saved: {e}",
                error=ErrorCode.STORAGE_ERROR,
                data={
                    "removed": removed,
                },
            )

        logger.info(f"Removed homework record {record_id}")

        return Response.succeed(
            detail="Record successfully removed.",
            data={
                "removed": removed,
            },
        )

    # --- homework catalog manipulation ---

    def add_homework_item(self, name: str) -> Response:
        """
        Adds a named item to the assignment catalog and persists the catalog.

        Args:
            name (str): The item name; leading and trailing whitespace is removed.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the item was added and saved.
                    - False if the name is blank, or the store write failed.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if the name is empty or whitespace only.
                    - `ErrorCode.STORAGE_ERROR` if the store write failed.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - data (dict | None): Payload with the following keys:
                    - "record" (HomeworkItem): The new item (absent on validation failure).

        Notes:
            - Duplicate names are permitted.
        """
        try:
            item = HomeworkItem(id=generate_uuid(), name=name)

            self._add_record(item, self.homework_items)

        except ValidationError as e:
            return Response.fail(
                detail=f"{e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        try:
            self._save_homework_items()

        except StorageError as e:
            logger.error(f"Added homework item '{item.name}' but could not save: {e}")

            return Response.fail(
                detail=f"Homework item was added but could not be saved: {e}",
                error=ErrorCode.STORAGE_ERROR,
                data={
                    "record": item,
                },
            )

        logger.info(f"Added homework item '{item.name}'")

        return Response.succeed(
            detail=f"Homework item '{item.name}' successfully added.",
            data={
                "record": item,
            },
        )

    def remove_homework_item(self, item_id: str) -> Response:
        """
        Removes an item from the assignment catalog and persists the catalog.

        Returns:
            Response: Success with data["removed"] (HomeworkItem | None); a missing id is a no-op success.
            `ErrorCode.STORAGE_ERROR` if the store write failed.

        Notes:
            - Records that reference the item's name are not touched.
        """
        removed = self._remove_record(item_id, self.homework_items)

        if removed is None:
            return Response.succeed(
                detail="No homework item with this id; nothing was removed.",
                data={
                    "removed": None,
                },
            )

        try:
            self._save_homework_items()

        except StorageError as e:
            logger.error(f"Removed homework item '{removed.name}' but could not save: {e}")

            return Response.fail(
                detail=f"Homework item was removed but the change could not be saved: {e}",
                error=ErrorCode.STORAGE_ERROR,
                data={
                    "removed": removed,
                },
            )

        logger.info(f"Removed homework item '{removed.name}'")

        return Response.succeed(
            detail=f"Homework item '{removed.name}' successfully removed.",
            data={
                "removed": removed,
            },
        )

    # === data validators ===

    def require_unique_record_ids(self, records: list[HomeworkRecord]) -> None:
        """
        Validates that none of the given records shares an id with a stored record or with another in the batch.

        Raises:
            ValueError: If an id collision is found.
        """
        seen: set[str] = set()

        for record in records:
            if record.id in self._records or record.id in seen:
                raise ValueError(f"A record with the id '{record.id}' already exists.")

            seen.add(record.id)

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"HomeworkTracker({len(self._records)} records, {len(self._homework_items)} homework items)"
