from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .catalog.repository import SystemConfigRepository
from .catalog.service import CatalogService
from .core.enums import DataMode
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .finance.repository import ExpenseRepository, SaleRepository
from .finance.service import ExpenseService, SalesService
from .inquiries.repository import InquiryRepository
from .inquiries.service import InquiryService
from .lessons.repository import LessonRepository
from .lessons.service import LessonService
from .payroll.service import PayrollReportService
from .reports.service import ReportService
from .roster.repository import StudentRepository, TeacherRepository
from .roster.service import StudentService, TeacherService
from .storage.memory_store import InMemoryCollectionStore
from .storage.mysql_store import MySQLCollectionStore
from .storage.repository import CollectionStore
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Services:
    """Repositories and use cases bound to one data mode's store."""

    store: CollectionStore

    users_repo: UserRepository
    teachers_repo: TeacherRepository
    students_repo: StudentRepository
    lessons_repo: LessonRepository

    auth_service: AuthService
    user_service: UserService
    catalog_service: CatalogService
    teacher_service: TeacherService
    student_service: StudentService
    lesson_service: LessonService
    payroll_report_service: PayrollReportService
    report_service: ReportService
    expense_service: ExpenseService
    sales_service: SalesService
    inquiry_service: InquiryService


def build_services(store: CollectionStore) -> Services:
    users_repo = UserRepository(store)
    teachers_repo = TeacherRepository(store)
    students_repo = StudentRepository(store)
    lessons_repo = LessonRepository(store)

    catalog_service = CatalogService(SystemConfigRepository(store))

    return Services(
        store=store,
        users_repo=users_repo,
        teachers_repo=teachers_repo,
        students_repo=students_repo,
        lessons_repo=lessons_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, teachers_repo),
        catalog_service=catalog_service,
        teacher_service=TeacherService(teachers_repo),
        student_service=StudentService(students_repo),
        lesson_service=LessonService(lessons_repo, teachers_repo, catalog_service),
        payroll_report_service=PayrollReportService(lessons_repo, teachers_repo, catalog_service),
        report_service=ReportService(lessons_repo, teachers_repo, students_repo),
        expense_service=ExpenseService(ExpenseRepository(store)),
        sales_service=SalesService(SaleRepository(store)),
        inquiry_service=InquiryService(InquiryRepository(store)),
    )


@dataclass(frozen=True)
class Container:
    backend: str
    default_mode: DataMode
    by_mode: dict = field(default_factory=dict)

    def services(self, mode: Optional[DataMode] = None) -> Services:
        return self.by_mode[DataMode(mode or self.default_mode)]


def build_store(*, backend: str, db_config: dict) -> CollectionStore:
    if backend == "memory":
        return InMemoryCollectionStore()
    if backend == "mysql":
        return MySQLCollectionStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    raise ValidationError(f"Unknown storage backend: {backend}")


def build_container(
    *,
    db_config: dict,
    backend: str = "mysql",
    default_mode: DataMode = DataMode.PRODUCTION,
) -> Container:
    base = build_store(backend=backend, db_config=db_config)
    return Container(
        backend=backend,
        default_mode=DataMode(default_mode),
        by_mode={mode: build_services(base.with_mode(mode)) for mode in DataMode},
    )
