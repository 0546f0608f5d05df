"""Date/time recognition result models."""

from dataclasses import dataclass


@dataclass
class DateTimeResolution:
    """One candidate interpretation of free-text date input.

    ``timex`` is the symbolic form (``XXXX-05-17`` when the year is unknown),
    ``value`` the concrete ISO date when one could be resolved.
    """

    timex: str | None = None
    value: str | None = None

    def to_dict(self) -> dict:
        return {"timex": self.timex, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> "DateTimeResolution":
        return cls(timex=data.get("timex"), value=data.get("value"))
