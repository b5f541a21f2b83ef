"""Process-scoped suggestion state for predictive completion."""

from __future__ import annotations

from collections.abc import Iterable


class SuggestionSession:
    """Latest suggestion list, served by case-insensitive prefix match.

    The candidate tuple is replaced by reference, never edited in place, so a
    concurrent ``match`` sees either the old list or the new one.
    """

    def __init__(self) -> None:
        self._candidates: tuple[str, ...] | None = None

    @property
    def populated(self) -> bool:
        return self._candidates is not None

    @property
    def candidates(self) -> list[str]:
        return list(self._candidates or ())

    def record(self, suggestions: Iterable[str]) -> None:
        """Replace the candidate list wholesale."""
        self._candidates = tuple(suggestions)

    def match(self, prefix: str) -> list[str]:
        candidates = self._candidates
        if not candidates:
            return []
        folded = prefix.casefold()
        return [candidate for candidate in candidates if candidate.casefold().startswith(folded)]

    def clear(self) -> None:
        self._candidates = None
