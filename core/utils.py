# core/utils.py

"""
Repository for program-wide utilities.
"""

import datetime
import time
import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


def today() -> datetime.date:
    return datetime.date.today()
