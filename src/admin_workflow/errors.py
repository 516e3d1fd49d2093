from fastapi import status


class AdminWorkflowError(Exception):
    """
    Base class for every failure the admin workflow reports to a caller.

    `message` is the public text sent in the response body; anything more
    detailed belongs in the server log only.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AdminWorkflowError):
    """Missing or malformed input (empty reason, unknown action)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class ConflictError(AdminWorkflowError):
    """The operation would break a workflow invariant."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflicting request"


class NotFoundError(AdminWorkflowError):
    """Referenced entity does not exist or is not in the expected state."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UnauthorizedError(AdminWorkflowError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AdminWorkflowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin access required"


class StoreError(AdminWorkflowError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


class PartialApprovalError(StoreError):
    """
    Approval could not be completed after the request was claimed.

    Unlike a plain StoreError the message is explicit, since the caller
    needs to know whether the request can be approved again.
    """

    default_message = "Approval failed; the request was left pending and can be retried"
