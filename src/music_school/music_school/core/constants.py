"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TEST_TABLE_PREFIX = "Test_"
BATCH_CHUNK_SIZE = 50

DEFAULT_CLASS_TYPES = (
    ("PRIVATE", "Private lesson"),
    ("SMALL_GROUP", "Small group"),
    ("LARGE_GROUP", "Group class"),
)

DEFAULT_EXPENSE_CATEGORIES = (
    "Teaching materials",
    "Equipment",
    "Rent & utilities",
    "Marketing",
    "Staff sundries",
    "Other",
)

DEFAULT_MUSIC_SUBJECTS = (
    "Piano",
    "Violin",
    "Vocal",
    "Guitar",
    "Flute",
    "Drums",
    "Music Theory",
    "Music & Movement",
    "Cello",
    "Saxophone",
)

DEFAULT_APP_INFO = {
    "loginTitle": "Huahua Music Class",
    "loginSubtitle": "Lesson scheduling & payroll",
    "sidebarTitle": "Huahua Music",
    "sidebarSubtitle": "Scheduling system",
}

CHART_COLORS = ("#3b82f6", "#10b981", "#f59e0b", "#8b5cf6", "#ec4899", "#06b6d4")

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin"
MIN_PASSWORD_LENGTH = 4

DASHBOARD_TOP_SUBJECTS = 5
DASHBOARD_ACTIVITY_DAYS = 7
