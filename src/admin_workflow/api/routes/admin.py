import logging
from typing import Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from admin_workflow.api.deps import get_current_user_id, require_admin
from admin_workflow.models.admin_request_submission import AdminRequestSubmission
from admin_workflow.models.admin_views import (
    PendingRequestView,
    UserChartView,
    UserFileView,
    UserSummary,
    to_admin_request_view,
)
from admin_workflow.models.user_status_update import UserStatusUpdate
from admin_workflow.services import admin_request_service, user_admin_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/request", status_code=status.HTTP_201_CREATED, response_class=JSONResponse
)
async def request_admin_access(
    submission: Optional[AdminRequestSubmission] = None,
    caller_id: PydanticObjectId = Depends(get_current_user_id),
):
    """Submit the caller's request for admin access."""
    submission = submission or AdminRequestSubmission()
    request = await admin_request_service.submit_request(
        caller_id, submission.reason, submission.experience
    )
    return {
        "message": "Admin request submitted successfully",
        "request": to_admin_request_view(request),
    }


@router.get("/requests", response_model=list[PendingRequestView])
async def get_pending_requests(
    admin_id: PydanticObjectId = Depends(require_admin),
):
    return await admin_request_service.list_pending_requests()


@router.put("/requests/{request_id}/approve", response_class=JSONResponse)
async def approve_request(
    request_id: str,
    admin_id: PydanticObjectId = Depends(require_admin),
):
    await admin_request_service.approve_request(request_id, admin_id)
    return {"message": "Admin request approved successfully"}


@router.put("/requests/{request_id}/reject", response_class=JSONResponse)
async def reject_request(
    request_id: str,
    admin_id: PydanticObjectId = Depends(require_admin),
):
    await admin_request_service.reject_request(request_id, admin_id)
    return {"message": "Admin request rejected"}


@router.get(
    "/users",
    response_model=list[UserSummary],
    response_model_exclude_unset=True,
)
async def get_all_users(
    admin_id: PydanticObjectId = Depends(require_admin),
):
    return await user_admin_service.list_users()


@router.get("/users/{user_id}/files", response_model=list[UserFileView])
async def get_user_files(
    user_id: str,
    admin_id: PydanticObjectId = Depends(require_admin),
):
    return await user_admin_service.get_user_files(user_id)


@router.get("/users/{user_id}/charts", response_model=list[UserChartView])
async def get_user_charts(
    user_id: str,
    admin_id: PydanticObjectId = Depends(require_admin),
):
    return await user_admin_service.get_user_charts(user_id)


@router.put("/users/{user_id}", response_class=JSONResponse)
async def update_user_status(
    user_id: str,
    update: Optional[UserStatusUpdate] = None,
    admin_id: PydanticObjectId = Depends(require_admin),
):
    """Suspend or activate an account (`{"action": "suspend" | "activate"}`)."""
    update = update or UserStatusUpdate()
    return await user_admin_service.update_user_status(user_id, update.action)
