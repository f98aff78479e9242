# roomchat/models/models.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire and in the store."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Room(CamelModel):
    id: str
    name: str
    description: Optional[str] = ""


class RoomMembership(CamelModel):
    user_id: str
    username: str
    joined_at: int


class ChatMessage(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    user_id: str
    username: str
    message: str
    image_url: Optional[str] = None
    timestamp: int


# Request bodies. Fields are optional so that missing values surface as a
# "Missing required fields" error from the services instead of a schema error.

class JoinRoomRequest(CamelModel):
    room_id: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None


class LeaveRoomRequest(CamelModel):
    room_id: Optional[str] = None
    user_id: Optional[str] = None


class SendMessageRequest(CamelModel):
    room_id: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None
    message: Optional[str] = None
    image_url: Optional[str] = None
