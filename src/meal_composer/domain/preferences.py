"""Food preference values."""

from enum import Enum


class FoodPreference(str, Enum):
    """A user's stated preference for a food."""

    LIKE = "Like"
    DISLIKE = "Dislike"

    @classmethod
    def from_liked(cls, liked: bool) -> "FoodPreference":
        return cls.LIKE if liked else cls.DISLIKE
