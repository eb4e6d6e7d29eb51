from typing import List, Optional, Protocol

from src.domain.models import Coordinates, DeleteResult, GithubProfile


class CoordinateLookup(Protocol):
    """Resolves a free-text location; raises GeocodingException on failure."""

    async def fetch_coordinates(self, location: str) -> Coordinates: ...


class ProfileStore(Protocol):
    """
    Identifier-keyed document store for profiles.
    A miss is reported as None (or deleted=False), never as an exception;
    backend failures raise DatabaseException.
    """

    async def create(self, profile: GithubProfile) -> Optional[str]: ...

    async def get(self, profile_id: str) -> Optional[GithubProfile]: ...

    async def find(self) -> List[GithubProfile]: ...

    async def replace(self, profile_id: str, profile: GithubProfile) -> Optional[str]: ...

    async def delete(self, profile_id: str) -> DeleteResult: ...
