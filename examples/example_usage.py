"""Example: use the service layer directly (no Flask).

Controllers stay thin; payroll rules live in the services.
"""

import importlib

from config import get_settings_module

from src.music_school.music_school.common.datetime_utils import month_key, today_local
from src.music_school.music_school.container import build_container
from src.music_school.music_school.payroll.window import month_window
from src.music_school.music_school.users.viewer import AdminViewer


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, backend=getattr(settings, "STORAGE_BACKEND", "mysql"))
    summary = container.services().payroll_report_service.build_payroll(
        AdminViewer(), month_window(month_key(today_local()))
    )
    for record in summary.records:
        print(record.teacher_name, record.total_lessons, record.total_pay)
    print("revenue:", summary.revenue)


if __name__ == "__main__":
    main()
