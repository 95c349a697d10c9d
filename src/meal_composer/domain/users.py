"""User profile domain models."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum

from meal_composer.domain.nutrition import DailyTarget


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class ActivityLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Goal(str, Enum):
    """Standard goals; the backend also accepts free-text goals."""

    GAIN = "Gain"
    MAINTAIN = "Maintain"
    LOSE = "Lose"


class Language(str, Enum):
    ENGLISH = "en"
    VIETNAMESE = "vi"


@dataclass(frozen=True)
class UserProfile:
    """Registered user with the daily target the backend computed."""

    name: str
    gender: Gender
    age: int
    weight: float
    height: float
    activity_level: ActivityLevel
    goal: str
    country: str
    city: str
    language: Language = Language.ENGLISH
    id: str | None = None
    target: DailyTarget = field(default_factory=DailyTarget)
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserUpdate:
    """Partial profile update; unset fields are left unchanged."""

    name: str | None = None
    gender: Gender | None = None
    age: int | None = None
    weight: float | None = None
    height: float | None = None
    activity_level: ActivityLevel | None = None
    goal: str | None = None
    country: str | None = None
    city: str | None = None
    language: Language | None = None

    def changes(self) -> dict[str, object]:
        """Return the fields that are set."""
        values: dict[str, object] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            values[item.name] = value.value if isinstance(value, Enum) else value
        return values

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserUpdate":
        return cls(
            name=profile.name,
            gender=profile.gender,
            age=profile.age,
            weight=profile.weight,
            height=profile.height,
            activity_level=profile.activity_level,
            goal=profile.goal,
            country=profile.country,
            city=profile.city,
            language=profile.language,
        )
