from typing import Any, Optional
from pydantic import BaseModel


class UserStatusUpdate(BaseModel):
    action: Optional[Any] = None  # "suspend" or "activate"; anything else is a 400
