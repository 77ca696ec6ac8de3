# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .homework_item import HomeworkItem
from .homework_record import HomeworkRecord

RecordType = TypeVar("RecordType", HomeworkItem, HomeworkRecord)
