"""Per-init session value objects."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


def _field(msg: dict[str, Any], key: str) -> str:
    value = msg.get(key)
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True, slots=True)
class SubjectIdentity:
    name: str = ""
    birth_date: str = ""  # YYYY-MM-DD
    birth_time: str = ""  # HH:MM
    birth_place: str = ""
    gender: str = ""

    @classmethod
    def from_message(cls, msg: dict[str, Any]) -> SubjectIdentity:
        """Build from an inbound ``init`` message (``name, dob, tob, pob, gender``)."""
        return cls(
            name=_field(msg, "name"),
            birth_date=_field(msg, "dob"),
            birth_time=_field(msg, "tob"),
            birth_place=_field(msg, "pob"),
            gender=_field(msg, "gender"),
        )

    def is_complete(self) -> bool:
        return all((self.name, self.birth_date, self.birth_time, self.birth_place, self.gender))


@dataclass(frozen=True, slots=True)
class SessionConfiguration:
    """Created once per ``init``; a later init supersedes it rather than mutating it."""

    identity: SubjectIdentity
    voice: str
    enrichment_text: str


__all__ = ["SessionConfiguration", "SubjectIdentity"]
