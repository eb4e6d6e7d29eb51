from typing import Any, Dict
from src.domain.models import GithubProfile

class ProfileTranslator:
    """
    Anti-corruption layer between stored JSON documents and GithubProfile instances.
    The document never carries the id; it lives in its own column.
    """

    @staticmethod
    def to_document(profile: GithubProfile) -> Dict[str, Any]:
        """
        Serialises a profile into the camelCase JSON document kept in the store.

        Args:
            profile (GithubProfile): The profile to persist.

        Returns:
            Dict[str, Any]: JSON-safe document without the id.
        """
        return profile.model_dump(mode="json", by_alias=True, exclude={"id"})

    @staticmethod
    def to_domain(profile_id: str, document: Dict[str, Any]) -> GithubProfile:
        """
        Rebuilds a GithubProfile from a stored document and its row id.

        Raises:
            ValueError: If the document lacks its creation timestamp.
        """
        if not document.get('createdOn'):
            raise ValueError("createdOn is required to build GithubProfile.")

        payload = dict(document)
        payload.setdefault('updatedOn', payload['createdOn'])
        payload['communityStats'] = payload.get('communityStats') or {}
        payload['id'] = profile_id
        return GithubProfile.model_validate(payload)
