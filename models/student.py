# models/student.py

"""
Represents a student on the fixed class roster.

A student's id is stable for the life of the program and doubles as the roll
number printed on exports. Students are reference data: they are created once
when the roster module is imported and never mutated.
"""

from __future__ import annotations


class Student:

    def __init__(self, id: int, name: str, group: int):
        self._id: int = id
        self._name: str = name
        self._group: int = group

    # === properties ===

    @property
    def id(self) -> int:
        return self._id

    @property
    def roll_number(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def group(self) -> int:
        return self._group

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "group": self._group,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        return cls(
            id=int(data["id"]),
            name=data["name"],
            group=int(data["group"]),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented

        return (self._id, self._name, self._group) == (
            other._id,
            other._name,
            other._group,
        )

    def __hash__(self) -> int:
        return hash((self._id, self._name, self._group))

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._name}, {self._group})"

    def __str__(self) -> str:
        return f"STUDENT: #{self._id} {self._name} (group {self._group})"
