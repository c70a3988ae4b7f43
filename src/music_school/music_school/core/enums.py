from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"


class DataMode(str, Enum):
    """Which namespace of the collection store a request works against."""

    PRODUCTION = "production"
    TEST = "test"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class InquiryStatus(str, Enum):
    """Follow-up state of a website inquiry."""

    NEW = "new"
    CONTACTED = "contacted"
    CLOSED = "closed"


class ModuleId(str, Enum):
    """Screens/features a staff account can be granted access to."""

    DASHBOARD = "dashboard"
    CALENDAR = "calendar"
    STUDENTS = "students"
    TEACHERS = "teachers"
    SALES = "sales"
    EXPENSES = "expenses"
    PAYROLL = "payroll"
    REPORTS = "reports"
    USERS = "users"
    SETTINGS = "settings"
    WEBSITE = "website"
    TEST_MODE = "test_mode"
    INQUIRIES = "inquiries"
