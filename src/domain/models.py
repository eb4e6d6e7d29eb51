from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

# Documents and request bodies use camelCase keys; Python code uses snake_case.
_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(BaseModel):
    """A resolved geographic coordinate pair."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class ProfileEvent(BaseModel):
    """A single community-activity event, e.g. a commit or a pull request."""
    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., min_length=1, description="Activity kind, e.g. 'commit'")
    magnitude: Optional[int] = Field(
        default=None,
        ge=0,
        description="How much to add to the counter; one when omitted",
    )


class GithubProfile(BaseModel):
    """
    Immutable domain model representing a tracked GitHub profile.
    Changes are made by copying the instance, never in place.
    """
    model_config = ConfigDict(frozen=True, **_CAMEL_CONFIG)

    id: Optional[str] = Field(default=None, description="Store-assigned document id")
    username: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    blog: Optional[str] = None
    organization: Optional[str] = None
    followers: Optional[int] = Field(default=None, ge=0)
    repos: Optional[List[Any]] = None
    location: Optional[Coordinates] = None
    community_stats: Dict[str, int] = Field(default_factory=dict)
    created_on: datetime
    updated_on: datetime


class ProfileInput(BaseModel):
    """Request body accepted by the create and update operations."""
    model_config = ConfigDict(extra="ignore", **_CAMEL_CONFIG)

    username: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    repos: Optional[List[Any]] = None
    followers: Optional[int] = Field(default=None, ge=0)
    blog: Optional[str] = None
    organization: Optional[str] = None
    location: Optional[str] = Field(default=None, description="Free-text location to geocode")
    event: Optional[ProfileEvent] = None


class DeleteResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    deleted: bool
