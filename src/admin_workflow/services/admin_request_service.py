import logging
from typing import Optional

from beanie import PydanticObjectId, UpdateResponse
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError, PyMongoError

from admin_workflow.errors import (
    ConflictError,
    NotFoundError,
    PartialApprovalError,
    ValidationError,
)
from admin_workflow.models.admin_views import PendingRequestView, to_pending_request_view
from admin_workflow.models.db.admin_request import AdminRequest, AdminRequestStatus
from admin_workflow.models.db.user import User, UserIdentity, UserRole
from admin_workflow.utils.time_util import get_current_time

logger = logging.getLogger(__name__)

REQUEST_NOT_FOUND = "Request not found or already processed"
DUPLICATE_PENDING = "You already have a pending admin request"


def _parse_request_id(request_id: str) -> PydanticObjectId:
    try:
        return PydanticObjectId(request_id)
    except (InvalidId, TypeError):
        raise NotFoundError(REQUEST_NOT_FOUND)


async def find_pending_request_by_user(
    user_id: PydanticObjectId,
) -> Optional[AdminRequest]:
    return await AdminRequest.find_one(
        {"user": user_id, "status": AdminRequestStatus.PENDING.value}
    )


async def submit_request(
    caller_id: PydanticObjectId,
    reason: Optional[str],
    experience: Optional[str] = None,
) -> AdminRequest:
    """
    Create a pending admin request for the caller.

    Args:
        caller_id (PydanticObjectId): Account id of the authenticated caller.
        reason (Optional[str]): Why the caller wants admin access. Required.
        experience (Optional[str]): Free-text background, optional.

    Returns:
        AdminRequest: The inserted request, status `pending`.

    Raises:
        ValidationError: If the reason is missing or blank.
        ConflictError: If the caller already has a pending request.
    """
    if not reason or not reason.strip():
        logger.warning(f"Admin request from {caller_id} rejected: empty reason")
        raise ValidationError("Reason is required")

    if await find_pending_request_by_user(caller_id):
        logger.warning(f"Admin request from {caller_id} rejected: already pending")
        raise ConflictError(DUPLICATE_PENDING)

    request = AdminRequest(
        user=caller_id,
        reason=reason,
        experience=experience,
        status=AdminRequestStatus.PENDING,
        createdAt=get_current_time(),
    )
    try:
        await request.insert()
    except DuplicateKeyError:
        # lost a race against a concurrent submission by the same user
        logger.warning(f"Admin request from {caller_id} hit the pending index")
        raise ConflictError(DUPLICATE_PENDING)

    logger.info(f"Admin request {request.id} submitted by {caller_id}")
    return request


async def list_pending_requests() -> list[PendingRequestView]:
    """
    All pending requests, newest first, each joined with its requester.
    """
    requests = (
        await AdminRequest.find({"status": AdminRequestStatus.PENDING.value})
        .sort("-createdAt")
        .to_list()
    )
    if not requests:
        return []

    requester_ids = list({request.user for request in requests})
    requesters = (
        await User.find({"_id": {"$in": requester_ids}})
        .project(UserIdentity)
        .to_list()
    )
    requesters_by_id = {requester.id: requester for requester in requesters}

    return [
        to_pending_request_view(request, requesters_by_id.get(request.user))
        for request in requests
    ]


async def _revert_claim(request: AdminRequest) -> None:
    try:
        await AdminRequest.find_one(
            {"_id": request.id, "status": AdminRequestStatus.APPROVED.value}
        ).update(
            {
                "$set": {"status": AdminRequestStatus.PENDING.value},
                "$unset": {"processedBy": "", "processedAt": ""},
            }
        )
    except PyMongoError:
        logger.critical(
            f"Admin request {request.id} is marked approved but user {request.user} "
            f"was not promoted, and reverting the request failed",
            exc_info=True,
        )
        raise PartialApprovalError(
            "Approval failed and the request could not be reset; contact support"
        )
    logger.info(f"Admin request {request.id} reverted to pending")


async def approve_request(
    request_id: str, admin_id: PydanticObjectId
) -> AdminRequest:
    """
    Approve a pending request and promote its requester to admin.

    The request is claimed first with a single conditional update, so two
    administrators approving at once cannot both succeed. If the promotion
    that follows does not happen, the claim is undone and the request is
    pending again.

    Args:
        request_id (str): Id of the request, as received in the URL.
        admin_id (PydanticObjectId): Account id of the approving administrator.

    Returns:
        AdminRequest: The request as stored after approval.

    Raises:
        NotFoundError: If the request does not exist or is not pending, or the
            requesting account no longer exists.
        PartialApprovalError: If the promotion failed in the store.
    """
    request_oid = _parse_request_id(request_id)

    claimed = await AdminRequest.find_one(
        {"_id": request_oid, "status": AdminRequestStatus.PENDING.value}
    ).update(
        {
            "$set": {
                "status": AdminRequestStatus.APPROVED.value,
                "processedBy": admin_id,
                "processedAt": get_current_time(),
            }
        },
        response_type=UpdateResponse.NEW_DOCUMENT,
    )
    if claimed is None:
        raise NotFoundError(REQUEST_NOT_FOUND)

    try:
        promotion = await User.find_one({"_id": claimed.user}).update(
            {"$set": {"role": UserRole.ADMIN.value}},
            response_type=UpdateResponse.UPDATE_RESULT,
        )
    except PyMongoError:
        logger.error(
            f"Promoting user {claimed.user} for admin request {claimed.id} failed",
            exc_info=True,
        )
        await _revert_claim(claimed)
        raise PartialApprovalError()

    if promotion.matched_count == 0:
        logger.warning(
            f"Admin request {claimed.id} references missing user {claimed.user}"
        )
        await _revert_claim(claimed)
        raise NotFoundError("Requesting user not found")

    logger.info(
        f"Admin request {claimed.id} approved by {admin_id}; user {claimed.user} is now admin"
    )
    return claimed


async def reject_request(
    request_id: str, admin_id: PydanticObjectId
) -> AdminRequest:
    """
    Reject a pending request in one conditional update.

    Raises:
        NotFoundError: If the request does not exist or is not pending.
    """
    request_oid = _parse_request_id(request_id)

    rejected = await AdminRequest.find_one(
        {"_id": request_oid, "status": AdminRequestStatus.PENDING.value}
    ).update(
        {
            "$set": {
                "status": AdminRequestStatus.REJECTED.value,
                "processedBy": admin_id,
                "processedAt": get_current_time(),
            }
        },
        response_type=UpdateResponse.NEW_DOCUMENT,
    )
    if rejected is None:
        raise NotFoundError(REQUEST_NOT_FOUND)

    logger.info(f"Admin request {rejected.id} rejected by {admin_id}")
    return rejected
