"""Per-side castling rights."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class CastlingRights:
    """Whether one side may still castle on either wing.

    During play rights are only ever lost; the ``enable_*`` helpers exist
    for setting up custom boards.
    """

    kingside: bool = True
    queenside: bool = True

    def can_kingside_castle(self) -> bool:
        return self.kingside

    def can_queenside_castle(self) -> bool:
        return self.queenside

    def disable_kingside(self) -> CastlingRights:
        return replace(self, kingside=False)

    def disable_queenside(self) -> CastlingRights:
        return replace(self, queenside=False)

    def disable_all(self) -> CastlingRights:
        return CastlingRights(kingside=False, queenside=False)

    def enable_kingside(self) -> CastlingRights:
        return replace(self, kingside=True)

    def enable_queenside(self) -> CastlingRights:
        return replace(self, queenside=True)

    def enable_all(self) -> CastlingRights:
        return CastlingRights(kingside=True, queenside=True)
