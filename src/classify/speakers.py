"""Map platform display names to speaker categories."""

from __future__ import annotations

from dataclasses import dataclass

from src.config import settings
from src.records.models import DELEGATE, OTHER, PRINCIPAL, ROLE_LABELS


@dataclass(frozen=True)
class SpeakerMatch:
    is_relevant: bool
    category: str  # principal, delegate or other
    role_label: str


@dataclass(frozen=True)
class SpeakerRoster:
    """Alias tables for the principal and their delegates.

    Built once at startup and never mutated.
    """

    principal_aliases: tuple[str, ...]
    delegate_aliases: tuple[str, ...]

    @classmethod
    def from_aliases(cls, principal: tuple[str, ...], delegate: tuple[str, ...]) -> SpeakerRoster:
        """Casefold and drop blank aliases (a blank alias would match everyone)."""
        return cls(
            principal_aliases=tuple(a.casefold() for a in principal if a.strip()),
            delegate_aliases=tuple(a.casefold() for a in delegate if a.strip()),
        )

    @classmethod
    def from_settings(cls) -> SpeakerRoster:
        return cls.from_aliases(
            settings.get_principal_aliases(),
            settings.get_delegate_aliases(),
        )


_roster: SpeakerRoster | None = None


def get_roster() -> SpeakerRoster:
    """Lazily build and cache the configured roster."""
    global _roster  # noqa: PLW0603
    if _roster is None:
        _roster = SpeakerRoster.from_settings()
    return _roster


def classify_speaker(display_name: str, roster: SpeakerRoster | None = None) -> SpeakerMatch:
    """Resolve *display_name* to a speaker category.

    Matching is a case-insensitive substring test against each alias.
    Principal aliases are checked first and win when both lists match.
    """
    roster = roster or get_roster()
    name = display_name.casefold()

    if any(alias in name for alias in roster.principal_aliases):
        category = PRINCIPAL
    elif any(alias in name for alias in roster.delegate_aliases):
        category = DELEGATE
    else:
        category = OTHER

    return SpeakerMatch(
        is_relevant=category != OTHER,
        category=category,
        role_label=ROLE_LABELS[category],
    )
