from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import InquiryStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Inquiry
from .repository import InquiryRepository

logger = logging.getLogger(__name__)


def _parse_status(value: str) -> InquiryStatus:
    try:
        return InquiryStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid inquiry status: {value}")


class InquiryService:
    """Use case: collect website inquiries and track follow-up."""

    def __init__(self, inquiries: InquiryRepository):
        self._inquiries = inquiries

    def submit(self, *, name: str, phone: str, subject: str = "", message: str = "", now: datetime) -> Inquiry:
        inquiry = Inquiry(
            id=new_id("inq"),
            name=require_non_empty(name, "Name"),
            phone=require_non_empty(phone, "Phone"),
            subject=(subject or "").strip(),
            message=(message or "").strip(),
            status=InquiryStatus.NEW,
            created_at=now.isoformat(timespec="seconds"),
        )
        self._inquiries.add(inquiry)
        logger.info("New website inquiry %s", inquiry.id)
        return inquiry

    def list_inquiries(self, *, status: Optional[str] = None, search: Optional[str] = None) -> list[Inquiry]:
        wanted = _parse_status(status) if status and status != "all" else None
        term = (search or "").strip().lower()
        rows = [
            i for i in self._inquiries.list_all()
            if (wanted is None or i.status == wanted)
            and (not term or term in i.name.lower() or term in i.phone or term in i.subject.lower())
        ]
        rows.sort(key=lambda i: i.created_at, reverse=True)
        return rows

    def follow_up(
        self,
        inquiry_id: str,
        *,
        status: Optional[str] = None,
        admin_notes: Optional[str] = None,
        contacted_by: str,
        now: datetime,
    ) -> Inquiry:
        """Save status/notes; every save stamps who followed up and when."""
        inquiry = self._inquiries.get_by_id(inquiry_id)
        if not inquiry:
            raise NotFoundError("Inquiry does not exist")
        updated = replace(
            inquiry,
            status=_parse_status(status) if status else inquiry.status,
            admin_notes=admin_notes if admin_notes is not None else inquiry.admin_notes,
            last_contacted_at=now.isoformat(timespec="seconds"),
            last_contacted_by=contacted_by,
        )
        self._inquiries.update(updated)
        return updated

    def delete(self, inquiry_id: str) -> None:
        if not self._inquiries.delete(inquiry_id):
            raise NotFoundError("Inquiry does not exist")
