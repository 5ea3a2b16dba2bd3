from pydantic import BaseModel
from typing import Optional

class CurrentUser(BaseModel):
    """Authenticated user as seen by route handlers."""
    id: int
    email: str
    name: str
    preferences: Optional[dict] = None
