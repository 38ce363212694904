"""Notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParsedPgn:
    """Headers, SAN mainline and result token of one PGN game."""

    headers: dict[str, str]
    sans: list[str]
    result_token: str

    @property
    def start_fen(self) -> str | None:
        """Custom start position from the ``FEN`` tag, if any."""
        return self.headers.get("FEN")
