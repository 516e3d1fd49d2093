from typing import Optional
from pydantic import BaseModel


class AdminRequestSubmission(BaseModel):
    # presence is checked by the service so a blank reason gets a 400, not a 422
    reason: Optional[str] = None
    experience: Optional[str] = None
