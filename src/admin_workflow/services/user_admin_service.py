import logging
from typing import Any

from beanie import PydanticObjectId, UpdateResponse
from bson.errors import InvalidId

from admin_workflow.errors import NotFoundError, ValidationError
from admin_workflow.models.admin_views import (
    UserChartView,
    UserFileView,
    UserSummary,
    to_user_chart_view,
    to_user_file_view,
    to_user_summary,
)
from admin_workflow.models.db.user import User, UserStatus

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"

# action -> (target status, past tense for the response message)
STATUS_BY_ACTION = {
    "suspend": (UserStatus.SUSPENDED, "suspended"),
    "activate": (UserStatus.ACTIVE, "activated"),
}


def _parse_user_id(user_id: str) -> PydanticObjectId:
    try:
        return PydanticObjectId(user_id)
    except (InvalidId, TypeError):
        raise NotFoundError(USER_NOT_FOUND)


async def _get_user_or_raise(user_id: str) -> User:
    user = await User.get(_parse_user_id(user_id))
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    return user


async def list_users() -> list[UserSummary]:
    """
    Every account's public profile, newest first.
    """
    users = await User.find_all().sort("-createdAt").to_list()
    return [to_user_summary(user) for user in users]


async def get_user_files(user_id: str) -> list[UserFileView]:
    """
    Spreadsheet uploads recorded on the account, in stored order.

    Raises:
        NotFoundError: If there is no such user.
    """
    user = await _get_user_or_raise(user_id)
    return [to_user_file_view(record) for record in user.excelRecords or []]


async def get_user_charts(user_id: str) -> list[UserChartView]:
    """
    Charts recorded on the account, in stored order.

    Raises:
        NotFoundError: If there is no such user.
    """
    user = await _get_user_or_raise(user_id)
    return [to_user_chart_view(record) for record in user.chartRecords or []]


async def update_user_status(user_id: str, action: Any) -> dict:
    """
    Suspend or activate an account.

    Args:
        user_id (str): Id of the account, as received in the URL.
        action (Any): Either "suspend" or "activate", as received in the body.

    Returns:
        dict: `{"success": True, "message": ...}`.

    Raises:
        ValidationError: If the action is not one of the two above. Nothing is
            written in that case.
        NotFoundError: If there is no such user.
    """
    if not isinstance(action, str) or action not in STATUS_BY_ACTION:
        logger.warning(f"Invalid status action {action!r} for user {user_id}")
        raise ValidationError("Invalid action")

    target_status, past_tense = STATUS_BY_ACTION[action]

    result = await User.find_one({"_id": _parse_user_id(user_id)}).update(
        {"$set": {"status": target_status.value}},
        response_type=UpdateResponse.UPDATE_RESULT,
    )
    if result.matched_count == 0:
        raise NotFoundError(USER_NOT_FOUND)

    logger.info(f"User {user_id} status set to {target_status.value}")
    return {"success": True, "message": f"User {past_tense} successfully"}
