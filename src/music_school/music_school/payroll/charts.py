from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..catalog.model import ClassType
from ..core.constants import CHART_COLORS
from .model import PayrollRecord


@dataclass(frozen=True)
class ChartPoint:
    name: str
    value: float
    color: str

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "color": self.color}


def color_at(index: int) -> str:
    return CHART_COLORS[index % len(CHART_COLORS)]


def class_type_series(records: Iterable[PayrollRecord], class_types: Sequence[ClassType]) -> list[ChartPoint]:
    """Pay per catalog class type over the given records, zero totals dropped.

    Colors follow catalog position, so a type keeps its color when others
    drop out.
    """
    records = list(records)
    points: list[ChartPoint] = []
    for index, ct in enumerate(class_types):
        total = sum(r.amount_for(ct.id) for r in records)
        if total != 0:
            points.append(ChartPoint(name=ct.name, value=total, color=color_at(index)))
    return points
