from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, PydanticObjectId
from pymongo import ASCENDING, DESCENDING, IndexModel


class AdminRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AdminRequest(Document):
    user: PydanticObjectId
    reason: str
    experience: Optional[str] = None
    status: AdminRequestStatus = AdminRequestStatus.PENDING
    processedBy: Optional[PydanticObjectId] = None
    processedAt: Optional[datetime] = None
    createdAt: datetime

    class Settings:
        name = "admin_requests"
        indexes = [
            # at most one pending request per user; a racing second insert fails
            # with DuplicateKeyError instead of slipping past the pre-check
            IndexModel(
                [("user", ASCENDING)],
                name="one_pending_request_per_user",
                unique=True,
                partialFilterExpression={"status": AdminRequestStatus.PENDING.value},
            ),
            IndexModel(
                [("status", ASCENDING), ("createdAt", DESCENDING)],
                name="admin_request_status_created_at",
            ),
        ]


"""
Indexes for AdminRequests

db.admin_requests.createIndex(
    { user: 1 },
    { name: "one_pending_request_per_user", unique: true, partialFilterExpression: { status: "pending" } }
)

db.admin_requests.createIndex(
    { status: 1, createdAt: -1 },
    { name: "admin_request_status_created_at" }
)
"""
