"""Health profile records and the summary used to personalize prompts."""

from pydantic import BaseModel, ConfigDict, Field

GENDER_LABELS = {
    "male": "Laki-laki",
    "female": "Perempuan",
}


class ProfileRecord(BaseModel):
    """A stored user profile, as read from persistence."""

    id: str
    full_name: str | None = None
    # Legacy single field, comma separated
    health_condition: str | None = None
    health_conditions: list[str] | None = None
    dietary_preferences: list[str] | None = None
    food_allergies: list[str] | None = None
    birth_year: int | None = None
    gender: str | None = None

    def all_health_conditions(self) -> list[str]:
        """Merge list and legacy conditions, keeping first-seen order."""
        conditions = list(self.health_conditions or [])
        if self.health_condition and self.health_condition.strip():
            conditions.extend(
                part.strip() for part in self.health_condition.split(",") if part.strip()
            )
        return list(dict.fromkeys(c.strip() for c in conditions if c and c.strip()))


class HealthProfileSummary(BaseModel):
    """
    Immutable snapshot of the profile facts a prompt may mention.

    An empty summary means "no personalization". It is computed once per
    pipeline run or chat session and never changes afterwards.
    """

    model_config = ConfigDict(frozen=True)

    conditions: tuple[str, ...] = ()
    allergies: tuple[str, ...] = ()
    dietary_preferences: tuple[str, ...] = ()
    age: int | None = Field(None, ge=0)
    gender: str | None = None

    @classmethod
    def empty(cls) -> "HealthProfileSummary":
        return cls()

    @classmethod
    def from_profile(
        cls,
        profile: ProfileRecord | None,
        current_year: int,
    ) -> "HealthProfileSummary":
        """Derive a summary from a raw record; `None` gives the empty summary."""
        if profile is None:
            return cls.empty()

        age = None
        if profile.birth_year and 0 <= current_year - profile.birth_year <= 150:
            age = current_year - profile.birth_year

        gender = None
        if profile.gender:
            gender = GENDER_LABELS.get(profile.gender.lower(), "Lainnya")

        return cls(
            conditions=tuple(profile.all_health_conditions()),
            allergies=tuple(a.strip() for a in profile.food_allergies or [] if a.strip()),
            dietary_preferences=tuple(
                p.strip() for p in profile.dietary_preferences or [] if p.strip()
            ),
            age=age,
            gender=gender,
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.conditions
            or self.allergies
            or self.dietary_preferences
            or self.age is not None
            or self.gender
        )

    def to_text(self) -> str:
        """Render one fact per line; empty summaries render as ''."""
        lines = []
        if self.conditions:
            lines.append(f"Riwayat penyakit: {', '.join(self.conditions)}")
        if self.allergies:
            lines.append(f"Alergi makanan: {', '.join(self.allergies)}")
        if self.dietary_preferences:
            lines.append(f"Preferensi diet: {', '.join(self.dietary_preferences)}")
        if self.age is not None:
            lines.append(f"Usia: {self.age} tahun")
        if self.gender:
            lines.append(f"Jenis kelamin: {self.gender}")
        return "\n".join(lines)
