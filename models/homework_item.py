# models/homework_item.py

"""
The HomeworkItem model represents one named entry in the assignment catalog.

Catalog items only populate the assignment picker during entry. Records store
the assignment name as a string snapshot, so removing or renaming an item never
touches historical records.
"""

from __future__ import annotations

from core.exceptions import ValidationError


class HomeworkItem:

    def __init__(self, id: str, name: str):
        self._id = id
        # name is validated and trimmed on construction
        self._name = HomeworkItem.validate_name_input(name)

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> HomeworkItem:
        return cls(
            id=str(data["id"]),
            name=data["name"],
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"HomeworkItem({self._id}, {self._name})"

    def __str__(self) -> str:
        return f"HOMEWORK ITEM: {self._name} (id: {self._id})"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: str | None) -> str:
        """
        Validates and normalizes a homework name.

        Args:
            name: The raw name as typed by the user.

        Returns:
            The name with leading and trailing whitespace removed.

        Raises:
            ValidationError: If the name is missing, empty, or whitespace only.
        """
        if name is None or not name.strip():
            raise ValidationError("Homework name cannot be empty.")

        return name.strip()


DEFAULT_HOMEWORK_ITEMS: tuple[tuple[str, str], ...] = (
    ("1", "Chinese Workbook"),
    ("2", "Math Test"),
    ("3", "English Homework"),
)


def default_homework_items() -> list[HomeworkItem]:
    return [HomeworkItem(id, name) for id, name in DEFAULT_HOMEWORK_ITEMS]
