from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import InquiryStatus


@dataclass(frozen=True)
class Inquiry:
    """Trial-lesson request left on the public website."""

    id: str
    name: str
    phone: str
    subject: str
    message: str
    status: InquiryStatus
    created_at: str
    last_contacted_at: Optional[str] = None
    last_contacted_by: Optional[str] = None
    admin_notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "subject": self.subject,
            "message": self.message,
            "status": self.status.value,
            "created_at": self.created_at,
            "last_contacted_at": self.last_contacted_at,
            "last_contacted_by": self.last_contacted_by,
            "admin_notes": self.admin_notes,
        }
