from pydantic import BaseModel
from typing import Optional


class CurrentUser(BaseModel):
    """Identity carried by a verified bearer token."""
    id: str
    name: Optional[str] = None
    avatar: Optional[str] = None
