from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..catalog.model import ClassType
from ..catalog.service import CatalogService
from ..core.exceptions import AuthorizationError, NotFoundError
from ..lessons.model import Lesson
from ..lessons.repository import LessonRepository
from ..roster.repository import TeacherRepository
from ..users.viewer import Viewer
from .aggregator import aggregate_payroll, lessons_for_teacher, total_revenue
from .charts import ChartPoint, class_type_series
from .export import payroll_csv, payroll_filename
from .model import PayrollRecord
from .sorting import SortState, search_and_sort_payroll
from .visibility import revenue_visible, teachers_in_scope
from .window import DateWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollSummary:
    window: DateWindow
    records: list[PayrollRecord]
    class_types: tuple[ClassType, ...]
    total_cost: int
    revenue: Optional[int]
    chart: list[ChartPoint]
    sort: SortState

    def to_dict(self) -> dict:
        data = {
            "window": self.window.label,
            "records": [r.to_dict() for r in self.records],
            "class_types": [{"id": ct.id, "name": ct.name} for ct in self.class_types],
            "total_cost": self.total_cost,
            "chart": [p.to_dict() for p in self.chart],
            "sort": self.sort.to_dict(),
        }
        if self.revenue is not None:
            data["revenue"] = self.revenue
        return data


class PayrollReportService:
    """Use case: teacher payroll for a month or date range.

    Every call reloads lessons, teachers and the catalog and recomputes from
    scratch.
    """

    def __init__(self, lessons: LessonRepository, teachers: TeacherRepository, catalog: CatalogService):
        self._lessons = lessons
        self._teachers = teachers
        self._catalog = catalog

    def build_payroll(
        self,
        viewer: Viewer,
        window: DateWindow,
        *,
        search: Optional[str] = None,
        sort: SortState = SortState(),
    ) -> PayrollSummary:
        class_types = self._catalog.get_config().class_types
        teachers = teachers_in_scope(viewer, self._teachers.list_all())
        lessons = self._lessons.list_all() if teachers else []

        records = aggregate_payroll(lessons, teachers, class_types, window)
        visible = search_and_sort_payroll(records, search=search, state=sort)

        revenue = None
        if revenue_visible(viewer):
            revenue = total_revenue(lessons, window)

        logger.debug("payroll %s: %d record(s) for %r", window.label, len(visible), viewer)
        return PayrollSummary(
            window=window,
            records=visible,
            class_types=class_types,
            total_cost=sum(r.total_pay for r in visible),
            revenue=revenue,
            chart=class_type_series(visible, class_types),
            sort=sort,
        )

    def export_payroll(
        self,
        viewer: Viewer,
        window: DateWindow,
        *,
        search: Optional[str] = None,
        sort: SortState = SortState(),
    ) -> tuple[str, bytes]:
        summary = self.build_payroll(viewer, window, search=search, sort=sort)
        return payroll_filename(window), payroll_csv(summary.records, summary.class_types)

    def teacher_lessons(self, viewer: Viewer, window: DateWindow, teacher_id: str) -> Sequence[Lesson]:
        """Detail rows behind one payroll record."""
        teachers = self._teachers.list_all()
        if not any(t.id == teacher_id for t in teachers):
            raise NotFoundError("Teacher does not exist")
        if not any(t.id == teacher_id for t in teachers_in_scope(viewer, teachers)):
            raise AuthorizationError("You can only view your own payroll")
        return lessons_for_teacher(self._lessons.list_all(), window, teacher_id)
