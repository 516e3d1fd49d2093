from datetime import datetime
from enum import Enum
from typing import Any, Optional

from beanie import Document, PydanticObjectId
from bson import ObjectId
from pydantic import BaseModel, Field, field_validator


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class ExcelRecord(BaseModel):
    filename: Optional[str] = None
    filesize: Optional[int] = None
    uploadedAt: Optional[datetime] = None
    rows: Optional[int] = None
    columns: Optional[int] = None


class ChartRecord(BaseModel):
    chartType: Optional[str] = None
    createdAt: Optional[datetime] = None
    fromExcelFile: Optional[str] = None
    chartConfig: Optional[dict[str, Any]] = None

    @field_validator("fromExcelFile", mode="before")
    @classmethod
    def stringify_file_reference(cls, value):
        # the upload pipeline may store the reference as an ObjectId
        if isinstance(value, ObjectId):
            return str(value)
        return value


class User(Document):
    """
    Account document. Owned by the account service; this package only reads
    profile fields and the upload records, and writes `role` and `status`.
    """

    username: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    # the account service may hold roles beyond the two this package knows
    role: str = UserRole.USER.value
    # legacy accounts may not carry a status; do not assume active
    status: Optional[str] = None
    excelRecords: Optional[list[ExcelRecord]] = None
    chartRecords: Optional[list[ChartRecord]] = None
    createdAt: Optional[datetime] = None

    class Settings:
        name = "users"


class UserIdentity(BaseModel):
    """Projection of the account fields shown next to a pending request."""

    id: PydanticObjectId = Field(alias="_id")
    username: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None


"""
Indexes for Users

db.users.createIndex(
    { email: 1 },
    { name: "unique_user_email", unique: true }
)
"""
