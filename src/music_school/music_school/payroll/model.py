from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClassTypeTotals:
    count: int = 0
    hours: float = 0.0
    amount: int = 0

    def to_dict(self) -> dict:
        return {"count": self.count, "hours": self.hours, "amount": self.amount}


@dataclass(frozen=True)
class PayrollRecord:
    """One teacher's completed lessons within a window.

    Derived on every query and never persisted. The breakdown always
    reconciles with the totals, including slots for class types that are no
    longer in the catalog.
    """

    teacher_id: str
    teacher_name: str
    total_hours: float
    total_lessons: int
    total_pay: int
    breakdown: dict = field(default_factory=dict)

    @property
    def average_pay(self) -> float:
        if self.total_lessons == 0:
            return 0
        return self.total_pay / self.total_lessons

    def amount_for(self, type_id: str) -> int:
        totals = self.breakdown.get(type_id)
        return totals.amount if totals else 0

    def to_dict(self) -> dict:
        return {
            "teacher_id": self.teacher_id,
            "teacher_name": self.teacher_name,
            "total_hours": self.total_hours,
            "total_lessons": self.total_lessons,
            "total_pay": self.total_pay,
            "average_pay": self.average_pay,
            "breakdown": {k: v.to_dict() for k, v in self.breakdown.items()},
        }
