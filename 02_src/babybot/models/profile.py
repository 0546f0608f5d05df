"""User profile model."""

from dataclasses import dataclass
from datetime import date

BIRTHDATE_FORMAT = "%Y/%m/%d"


@dataclass
class UserProfile:
    """Name and birthdate collected by the profile flows.

    ``birthdate`` is None until a concrete date has been captured.
    """

    name: str | None = None
    birthdate: date | None = None

    def age_on(self, today: date) -> int | None:
        """Age in whole calendar years; month and day are ignored."""
        if self.birthdate is None:
            return None
        return today.year - self.birthdate.year

    def formatted_birthdate(self) -> str | None:
        if self.birthdate is None:
            return None
        return self.birthdate.strftime(BIRTHDATE_FORMAT)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "birthdate": self.birthdate.isoformat() if self.birthdate else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        birthdate = data.get("birthdate")
        return cls(
            name=data.get("name"),
            birthdate=date.fromisoformat(birthdate) if birthdate else None,
        )
