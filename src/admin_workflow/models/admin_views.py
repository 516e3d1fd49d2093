"""
Read models returned by the admin endpoints.

Display-name fallbacks (first name falls back to the username, last name to
an empty string) are applied here and nowhere else; stored documents keep
whatever the account service wrote.
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel

from admin_workflow.models.db.admin_request import AdminRequest
from admin_workflow.models.db.user import ChartRecord, ExcelRecord, User, UserIdentity


class AdminRequestView(BaseModel):
    id: str
    user: str
    reason: str
    experience: Optional[str] = None
    status: str
    processedBy: Optional[str] = None
    processedAt: Optional[datetime] = None
    createdAt: datetime


class RequesterView(BaseModel):
    id: str
    firstName: Optional[str] = None
    lastName: str = ""
    email: Optional[str] = None


class PendingRequestView(BaseModel):
    id: str
    reason: str
    experience: Optional[str] = None
    status: str
    createdAt: datetime
    user: Optional[RequesterView] = None


class UserSummary(BaseModel):
    id: str
    firstName: Optional[str] = None
    lastName: str = ""
    email: Optional[str] = None
    role: str
    # left unset (and so dropped from the response) when the account has none
    status: Optional[str] = None


class UserFileView(BaseModel):
    fileName: Optional[str] = None
    fileSize: Optional[int] = None
    uploadedAt: Optional[datetime] = None
    rows: Optional[int] = None
    columns: Optional[int] = None


class UserChartView(BaseModel):
    chartType: Optional[str] = None
    createdAt: Optional[datetime] = None
    fromExcelFile: Optional[str] = None
    chartConfig: Optional[dict[str, Any]] = None


def _enum_value(value) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", value)


def _optional_str(value) -> Optional[str]:
    return str(value) if value is not None else None


def to_admin_request_view(request: AdminRequest) -> AdminRequestView:
    return AdminRequestView(
        id=str(request.id),
        user=str(request.user),
        reason=request.reason,
        experience=request.experience,
        status=_enum_value(request.status),
        processedBy=_optional_str(request.processedBy),
        processedAt=request.processedAt,
        createdAt=request.createdAt,
    )


def to_requester_view(user: Union[User, UserIdentity]) -> RequesterView:
    return RequesterView(
        id=str(user.id),
        firstName=user.firstName or user.username,
        lastName=user.lastName or "",
        email=user.email,
    )


def to_pending_request_view(
    request: AdminRequest, requester: Optional[UserIdentity]
) -> PendingRequestView:
    return PendingRequestView(
        id=str(request.id),
        reason=request.reason,
        experience=request.experience,
        status=_enum_value(request.status),
        createdAt=request.createdAt,
        user=to_requester_view(requester) if requester is not None else None,
    )


def to_user_summary(user: User) -> UserSummary:
    fields = {
        "id": str(user.id),
        "firstName": user.firstName or user.username,
        "lastName": user.lastName or "",
        "email": user.email,
        "role": _enum_value(user.role),
    }
    if user.status is not None:
        fields["status"] = _enum_value(user.status)
    return UserSummary(**fields)


def to_user_file_view(record: ExcelRecord) -> UserFileView:
    return UserFileView(
        fileName=record.filename,
        fileSize=record.filesize,
        uploadedAt=record.uploadedAt,
        rows=record.rows,
        columns=record.columns,
    )


def to_user_chart_view(record: ChartRecord) -> UserChartView:
    return UserChartView(
        chartType=record.chartType,
        createdAt=record.createdAt,
        fromExcelFile=record.fromExcelFile,
        chartConfig=record.chartConfig,
    )
