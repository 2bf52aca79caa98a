"""User schemas for API responses."""

from uuid import UUID

from pydantic import BaseModel


class UserRead(BaseModel):
    """Directory user as exposed to project members."""

    id: UUID
    user_name: str
    full_name: str
    email: str

    model_config = {"from_attributes": True}
