"""Hole-by-hole point awards for the 2/9/16 points game."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from itertools import groupby

from .game import (
    DomainValidationError,
    Player,
    UnsupportedPlayerCount,
    ensure_known_players,
    roster_ids,
)

# Points for each finishing place when nobody ties. Per-hole totals are 2, 9 and 16.
AWARD_TABLES: dict[int, tuple[int, ...]] = {
    2: (2, 0),
    3: (5, 3, 1),
    4: (7, 5, 3, 1),
}

HOLES = range(1, 19)


def compute_hole_points(strokes: Mapping[str, int], player_count: int) -> dict[str, float]:
    """Award points for one hole.

    Players are ranked by strokes ascending. A group of tied players shares the
    table slots it occupies: their points are summed and split evenly, so the
    hole total always matches the table total.

    A hole where any of the ``player_count`` players has no strokes recorded is
    treated as unplayed and yields an empty mapping.
    """
    table = AWARD_TABLES.get(player_count)
    if table is None:
        raise UnsupportedPlayerCount(player_count)

    for player_id, count in strokes.items():
        if count is None:
            continue
        if count < 0:
            raise DomainValidationError(f"negative strokes for {player_id}: {count}")

    played = {player_id: count for player_id, count in strokes.items() if count}
    if len(strokes) > player_count:
        raise DomainValidationError(
            f"hole has strokes for {len(strokes)} players, expected {player_count}"
        )
    if len(played) < player_count:
        return {}

    ranked = sorted(played.items(), key=lambda item: item[1])
    points: dict[str, float] = {}
    slot = 0
    for _, group in groupby(ranked, key=lambda item: item[1]):
        tied = [player_id for player_id, _ in group]
        block = sum(table[slot : slot + len(tied)])
        share = block // len(tied) if block % len(tied) == 0 else block / len(tied)
        for player_id in tied:
            points[player_id] = share
        slot += len(tied)

    return {player_id: points[player_id] for player_id in strokes}


def compute_round_points(
    strokes_by_hole: Mapping[int, Mapping[str, int]],
    players: Sequence[Player | str],
) -> dict[int, dict[str, float]]:
    roster = roster_ids(players)
    hole_points: dict[int, dict[str, float]] = {}
    for hole in sorted(strokes_by_hole):
        _ensure_hole_number(hole)
        hole_strokes = strokes_by_hole[hole]
        ensure_known_players(roster, hole_strokes, source=f"hole {hole}")
        awarded = compute_hole_points(
            {player_id: hole_strokes.get(player_id, 0) for player_id in roster},
            len(roster),
        )
        if awarded:
            hole_points[hole] = awarded
    return hole_points


def total_points(
    hole_points: Mapping[int, Mapping[str, float]],
    players: Sequence[Player | str] | None = None,
) -> dict[str, float]:
    totals: dict[str, float] = {player_id: 0 for player_id in roster_ids(players or [])}
    for hole in sorted(hole_points):
        for player_id, awarded in hole_points[hole].items():
            totals[player_id] = totals.get(player_id, 0) + awarded
    return totals


def _ensure_hole_number(hole: int) -> None:
    if hole not in HOLES:
        raise DomainValidationError(f"hole number must be between 1 and 18, got {hole}")
