from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Teacher:
    """A teacher; `commission_rate` is the percentage of tuition paid out."""

    id: str
    name: str
    commission_rate: int
    email: str = ""
    phone: str = ""
    color: str = ""


@dataclass(frozen=True)
class Student:
    id: str
    name: str
    grade: str = ""
    phone: str = ""
    parent_name: str = ""
    notes: str = ""
    joined_date: str = ""
