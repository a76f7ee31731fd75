"""Bingo Bango Bongo: one point per category per hole."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .game import BbbHole, DomainValidationError, Player, ensure_known_players, roster_ids
from .points import HOLES


def compute_bbb_points(
    holes: Mapping[int, BbbHole],
    players: Sequence[Player | str],
) -> dict[int, dict[str, float]]:
    """Per-hole BBB points for every roster player, in the same shape as 2/9/16 hole points."""
    roster = roster_ids(players)
    hole_points: dict[int, dict[str, float]] = {}
    for hole in sorted(holes):
        if hole not in HOLES:
            raise DomainValidationError(f"hole number must be between 1 and 18, got {hole}")
        winners = holes[hole].winners()
        ensure_known_players(roster, winners, source=f"BBB hole {hole}")
        awarded: dict[str, float] = {player_id: 0 for player_id in roster}
        for player_id in winners:
            awarded[player_id] += 1
        hole_points[hole] = awarded
    return hole_points
