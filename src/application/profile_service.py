import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from src.domain.community_stats import map_community_state
from src.domain.exceptions import CreationError, NotFoundError, UpstreamError
from src.domain.models import DeleteResult, GithubProfile, ProfileInput
from src.domain.ports import CoordinateLookup, ProfileStore

logger = logging.getLogger(__name__)

# Fields an update copies over when the request supplies a truthy value.
MERGEABLE_FIELDS = (
    "username",
    "bio",
    "avatar_url",
    "repos",
    "followers",
    "organization",
    "blog",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProfileService:
    """
    Service implementing create, read, update and delete for GitHub profiles.

    Locations are resolved through the coordinate lookup before anything is
    written, and community stats only ever change through the mapper.
    """

    def __init__(self, store: ProfileStore, geocoder: CoordinateLookup):
        self.store = store
        self.geocoder = geocoder

    async def create(self, body: ProfileInput) -> str:
        """
        Builds and stores a new profile.

        Returns:
            str: The id assigned by the store.

        Raises:
            CreationError: If the store hands back no id.
            UpstreamError: If geocoding or the store fails.
        """
        profile = await self._build_profile(body)
        profile_id = await self.store.create(profile)
        if profile_id is None:
            raise CreationError()
        logger.info(f"Created github-profile {profile_id}.")
        return profile_id

    async def find_all(self) -> List[GithubProfile]:
        # Store failures degrade to an empty listing instead of an error.
        try:
            return await self.store.find()
        except UpstreamError as e:
            logger.warning(f"Listing github-profiles failed, returning none: {e}")
            return []

    async def find_one(self, profile_id: str) -> GithubProfile:
        profile = await self.store.get(profile_id)
        if profile is None:
            raise NotFoundError(profile_id)
        return profile

    async def update(self, profile_id: str, body: ProfileInput) -> str:
        """
        Merges ``body`` into the stored profile and writes the whole record back.

        Falsy values (0, "", [], None) count as "not supplied", so they can
        neither clear a field nor set followers to zero.

        Raises:
            NotFoundError: If the profile is missing before or at write time.
        """
        existing = await self.find_one(profile_id)

        changes: Dict[str, Any] = {}
        for field in MERGEABLE_FIELDS:
            value = getattr(body, field)
            if value:
                changes[field] = value

        if body.event:
            changes['community_stats'] = map_community_state(body.event, existing.community_stats)

        if body.location:
            changes['location'] = await self.geocoder.fetch_coordinates(body.location)

        changes['updated_on'] = _utcnow()
        updated = existing.model_copy(update=changes)

        replaced_id = await self.store.replace(profile_id, updated)
        if replaced_id is None:
            raise NotFoundError(profile_id)
        logger.info(f"Updated github-profile {profile_id} ({', '.join(sorted(changes))}).")
        return replaced_id

    async def remove(self, profile_id: str) -> Optional[DeleteResult]:
        """
        Deletes an existing profile.

        Returns:
            Optional[DeleteResult]: The store's confirmation, or None when the
            store did not confirm the delete.
        """
        await self.find_one(profile_id)

        result = await self.store.delete(profile_id)
        if not result.deleted:
            logger.warning(f"Delete of github-profile {profile_id} was not confirmed.")
            return None
        logger.info(f"Deleted github-profile {profile_id}.")
        return result

    async def _build_profile(self, body: ProfileInput) -> GithubProfile:
        now = _utcnow()
        location = None
        if body.location:
            location = await self.geocoder.fetch_coordinates(body.location)

        return GithubProfile(
            username=body.username,
            bio=body.bio,
            avatar_url=body.avatar_url,
            followers=body.followers,
            repos=body.repos,
            blog=body.blog,
            organization=body.organization,
            location=location,
            community_stats=map_community_state(body.event, {}) if body.event else {},
            created_on=now,
            updated_on=now,
        )
