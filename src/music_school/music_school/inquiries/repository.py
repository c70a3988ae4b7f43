from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import InquiryStatus
from ..storage.repository import CollectionStore
from .model import Inquiry


def inquiry_from_item(item: dict[str, Any]) -> Inquiry:
    try:
        status = InquiryStatus(item.get("status") or InquiryStatus.NEW.value)
    except ValueError:
        status = InquiryStatus.NEW
    return Inquiry(
        id=str(item["id"]),
        name=str(item.get("name") or ""),
        phone=str(item.get("phone") or ""),
        subject=item.get("subject") or "",
        message=item.get("message") or "",
        status=status,
        created_at=str(item.get("createdAt") or ""),
        last_contacted_at=item.get("lastContactedAt") or None,
        last_contacted_by=item.get("lastContactedBy") or None,
        admin_notes=item.get("adminNotes") or "",
    )


def inquiry_to_item(i: Inquiry) -> dict[str, Any]:
    return {
        "id": i.id,
        "name": i.name,
        "phone": i.phone,
        "subject": i.subject,
        "message": i.message,
        "status": i.status.value,
        "createdAt": i.created_at,
        "lastContactedAt": i.last_contacted_at,
        "lastContactedBy": i.last_contacted_by,
        "adminNotes": i.admin_notes,
    }


class InquiryRepository:
    COLLECTION = "inquiries"

    def __init__(self, store: CollectionStore):
        self._store = store

    def list_all(self) -> Sequence[Inquiry]:
        return [inquiry_from_item(i) for i in self._store.get(self.COLLECTION)]

    def get_by_id(self, inquiry_id: str) -> Optional[Inquiry]:
        for i in self.list_all():
            if i.id == inquiry_id:
                return i
        return None

    def add(self, inquiry: Inquiry) -> None:
        self._store.add(self.COLLECTION, inquiry_to_item(inquiry))

    def update(self, inquiry: Inquiry) -> bool:
        return self._store.update(self.COLLECTION, inquiry_to_item(inquiry))

    def delete(self, inquiry_id: str) -> bool:
        return self._store.delete(self.COLLECTION, inquiry_id)
