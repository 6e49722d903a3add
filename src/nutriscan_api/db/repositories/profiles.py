"""Repository for Profiles collection."""

from nutriscan_api.models.profile import ProfileRecord

from .base import BaseRepository

PROFILE_FIELDS = (
    "full_name",
    "health_condition",
    "health_conditions",
    "dietary_preferences",
    "food_allergies",
    "birth_year",
    "gender",
)


class ProfileRepository(BaseRepository):
    """
    Repository for user health profiles.

    Profiles are keyed by the user id itself (`_id` is the user id string).
    """

    async def get_by_user(self, user_id: str) -> ProfileRecord | None:
        """
        Get a user's profile.

        Args:
            user_id: Authenticated user id

        Returns:
            ProfileRecord, or None if the user has no profile yet
        """
        doc = await self.find_one({"_id": user_id})
        if doc is None:
            return None
        return ProfileRecord(
            id=str(doc["_id"]),
            **{field: doc.get(field) for field in PROFILE_FIELDS},
        )
