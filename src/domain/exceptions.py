class ProfileException(Exception):
    """Base exception for all profile-service errors."""
    pass

class NotFoundError(ProfileException):
    """Raised when no github-profile exists for the given id."""
    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"no github-profile for {profile_id} found")

class CreationError(ProfileException):
    """Raised when the store accepts a create but hands back no id."""
    def __init__(self, message: str = "Creation didn't pass as expected"):
        super().__init__(message)

class UpstreamError(ProfileException):
    """Raised when an external collaborator (store or geocoder) fails."""
    pass

class DatabaseException(UpstreamError):
    """Raised when a database operation fails."""
    pass

class GeocodingException(UpstreamError):
    """Raised when a location cannot be resolved to coordinates."""
    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Could not geocode '{location}': {reason}")
