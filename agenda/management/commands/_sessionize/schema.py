"""
Pydantic models of the Sessionize "All data" JSON feed.

Field aliases are the wire contract. Lists the feed may omit or send as ``null`` are optional so
the normalizer can tell "absent" apart from "empty" and decide what to skip.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


#: Sessionize sends this value (or nothing) for unscheduled sessions.
ZERO_DATETIME = datetime(1, 1, 1)  # noqa: DTZ001


def is_unset(value: datetime | None) -> bool:
    """Return ``True`` if *value* is missing or the zero sentinel."""
    return value is None or value.replace(tzinfo=None) == ZERO_DATETIME


class FeedModel(BaseModel):
    """Base for feed models: populate by alias or name, ignore unknown keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SessionizeItem(FeedModel):
    """One entry of a category (a track candidate when the category is ``"Track"``)."""

    id: int
    name: str = ""
    sort: int = 0


class SessionizeCategory(FeedModel):
    """A category such as ``"Track"`` or ``"Level"``."""

    id: int
    title: str = ""
    items: list[SessionizeItem] = Field(default_factory=list)
    sort: int = 0
    type: str | None = None


class SessionizeRoom(FeedModel):
    """A room of the venue."""

    id: int
    name: str = ""
    sort: int = 0


class SessionizeSpeaker(FeedModel):
    """A speaker, keyed by a string id (usually a UUID)."""

    id: str
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    bio: str | None = None
    tag_line: str | None = Field(default=None, alias="tagLine")
    profile_picture: str | None = Field(default=None, alias="profilePicture")
    is_top_speaker: bool = Field(default=False, alias="isTopSpeaker")
    sessions: list[int] | None = None
    full_name: str | None = Field(default=None, alias="fullName")
    category_items: list[int] | None = Field(default=None, alias="categoryItems")

    @property
    def display_name(self) -> str:
        """Full name as sent, falling back to first and last name."""
        if self.full_name:
            return self.full_name
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class SessionizeSession(FeedModel):
    """A session as published in the feed."""

    id: str
    title: str = ""
    description: str | None = None
    starts_at: datetime | None = Field(default=None, alias="startsAt")
    ends_at: datetime | None = Field(default=None, alias="endsAt")
    is_service_session: bool = Field(default=False, alias="isServiceSession")
    is_plenum_session: bool = Field(default=False, alias="isPlenumSession")
    speakers: list[str] | None = None
    category_items: list[int] | None = Field(default=None, alias="categoryItems")
    room_id: int | None = Field(default=None, alias="roomId")
    live_url: Any = Field(default=None, alias="liveUrl")
    recording_url: Any = Field(default=None, alias="recordingUrl")
    status: str | None = None
    is_informed: bool = Field(default=False, alias="isInformed")
    is_confirmed: bool = Field(default=False, alias="isConfirmed")


class SessionizeData(FeedModel):
    """The whole feed document."""

    sessions: list[SessionizeSession] = Field(default_factory=list)
    speakers: list[SessionizeSpeaker] = Field(default_factory=list)
    categories: list[SessionizeCategory] = Field(default_factory=list)
    rooms: list[SessionizeRoom] = Field(default_factory=list)
