"""Group-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from quadboard.models import JoinRequestStatus


class GroupCreate(BaseModel):
    """Schema for creating a new group."""

    name: str = Field(..., min_length=1, max_length=100)
    is_private: bool = False


class JoinRequestResponse(BaseModel):
    """Schema for a join request."""

    user_id: str
    status: JoinRequestStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GroupResponse(BaseModel):
    """Schema for group information returned by the API."""

    id: int
    name: str
    is_private: bool
    admin_id: str
    members: list[str]
    join_requests: list[JoinRequestResponse]
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _flatten_members(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            data = extracted

        members = data.get("members") or []
        data["members"] = sorted(
            member if isinstance(member, str) else member.user_id for member in members
        )
        data["join_requests"] = data.get("join_requests") or []
        return data

    model_config = ConfigDict(from_attributes=True)


class GroupMessageCreate(BaseModel):
    """Schema for sending a group chat message."""

    text: str = Field(..., min_length=1, max_length=2000)


class GroupMessageResponse(BaseModel):
    """Schema for a group chat message."""

    id: int
    group_id: int
    sender_id: str
    text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
