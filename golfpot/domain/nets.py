"""Per-game net balance calculators.

Every calculator returns a mapping of player id to a signed amount (positive is
owed money, negative owes money) whose values sum to zero. Nothing is rounded
here; rounding happens once, when transactions are emitted by settlement.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence

from .game import (
    CardAssignment,
    CardOwnership,
    CardsFormula,
    DomainValidationError,
    Player,
    ensure_known_players,
    normalize_player,
    roster_ids,
    unique_preserve_order,
)
from .money import ensure_finite
from .points import HOLES

logger = logging.getLogger(__name__)

FRONT_NINE = range(1, 10)
BACK_NINE = range(10, 19)
SEGMENTS: tuple[tuple[str, range], ...] = (
    ("front", FRONT_NINE),
    ("back", BACK_NINE),
    ("total", HOLES),
)


def current_ownership(history: Iterable[CardAssignment]) -> dict[str, CardOwnership]:
    """Snapshot of who holds each card; the latest assignment of a card wins."""
    latest: dict[str, CardOwnership] = {}
    for assignment in history:
        value = ensure_finite(f"card value of {assignment.card_id}", assignment.card_value)
        latest[assignment.card_id] = CardOwnership(
            player_id=normalize_player(assignment.player_id),
            value=value,
        )
    return latest


def card_debts(
    ownership: Mapping[str, CardOwnership],
    players: Sequence[Player | str] | None = None,
) -> dict[str, float]:
    if players is None:
        roster = unique_preserve_order(card.player_id for card in ownership.values())
    else:
        roster = roster_ids(players)
        ensure_known_players(roster, (card.player_id for card in ownership.values()), source="card assignments")

    debts: dict[str, float] = {player_id: 0.0 for player_id in roster}
    for card_id, card in ownership.items():
        debts[card.player_id] += ensure_finite(f"card value of {card_id}", card.value)
    return debts


def compute_cards_net(
    ownership: Mapping[str, CardOwnership],
    players: Sequence[Player | str] | None = None,
    formula: CardsFormula = CardsFormula.PROPORTIONAL,
) -> dict[str, float]:
    debts = card_debts(ownership, players)
    if formula is CardsFormula.EXCESS_OVER_MINIMUM:
        return _excess_over_minimum(debts)
    if formula is CardsFormula.EQUAL_SPLIT:
        return _equal_split(debts)
    return _proportional_share(debts)


def _proportional_share(debts: Mapping[str, float]) -> dict[str, float]:
    """Each player's advantage over the most penalized player buys a proportional slice of the pot."""
    if not debts:
        return {}
    total_pot = math.fsum(debts.values())
    max_debt = max(debts.values())
    if max_debt == 0:
        return {player_id: 0.0 for player_id in debts}

    advantages = {player_id: max_debt - debt for player_id, debt in debts.items()}
    total_advantage = math.fsum(advantages.values())

    net: dict[str, float] = {}
    for player_id, debt in debts.items():
        if total_advantage > 0:
            share = advantages[player_id] / total_advantage
        else:
            share = 1 / len(debts)
        net[player_id] = share * total_pot - debt

    logger.debug("cards pot %.2f split across %d players", total_pot, len(net))
    return net


def _equal_split(debts: Mapping[str, float]) -> dict[str, float]:
    """The pot is shared evenly and each player pays in what their cards cost."""
    if not debts:
        return {}
    share = math.fsum(debts.values()) / len(debts)
    return {player_id: share - debt for player_id, debt in debts.items()}


def _excess_over_minimum(debts: Mapping[str, float]) -> dict[str, float]:
    """Players at the minimum debt split everyone else's excess over that minimum."""
    if not debts:
        return {}
    min_debt = min(debts.values())
    excess = {player_id: debt - min_debt for player_id, debt in debts.items()}
    baseline = [player_id for player_id, debt in debts.items() if debt == min_debt]
    share = math.fsum(excess.values()) / len(baseline)
    return {
        player_id: share if debt == min_debt else -excess[player_id]
        for player_id, debt in debts.items()
    }


def compute_points_net(total_points: Mapping[str, float], point_value: float) -> dict[str, float]:
    value = ensure_finite("point_value", point_value)
    players = list(total_points)
    points = {
        player_id: ensure_finite(f"points of {player_id}", total_points[player_id], allow_negative=True)
        for player_id in players
    }

    net: dict[str, float] = {player_id: 0.0 for player_id in players}
    for i, first in enumerate(players):
        for second in players[i + 1 :]:
            diff = points[first] - points[second]
            if diff > 0:
                net[first] += diff * value
                net[second] -= diff * value
            elif diff < 0:
                net[second] += -diff * value
                net[first] -= -diff * value
    return net


def compute_fbt_net(
    strokes_by_hole: Mapping[int, Mapping[str, int]],
    fbt_value: float,
    players: Sequence[Player | str] | None = None,
) -> dict[str, float]:
    """Front nine, back nine and full round, each won by the lowest stroke total."""
    value = ensure_finite("fbt_value", fbt_value)
    for hole, hole_strokes in strokes_by_hole.items():
        if hole not in HOLES:
            raise DomainValidationError(f"hole number must be between 1 and 18, got {hole}")
        for player_id, count in hole_strokes.items():
            if count is not None and count < 0:
                raise DomainValidationError(f"negative strokes for {player_id} on hole {hole}: {count}")

    referenced = unique_preserve_order(
        player_id for hole in sorted(strokes_by_hole) for player_id in strokes_by_hole[hole]
    )
    if players is None:
        roster = referenced
    else:
        roster = roster_ids(players)
        ensure_known_players(roster, referenced, source="stroke records")

    net: dict[str, float] = {player_id: 0.0 for player_id in roster}
    for name, holes in SEGMENTS:
        totals: dict[str, float] = {}
        for player_id in roster:
            recorded = [
                strokes_by_hole[hole][player_id]
                for hole in holes
                if hole in strokes_by_hole and strokes_by_hole[hole].get(player_id)
            ]
            if recorded:
                totals[player_id] = sum(recorded)
        _pay_segment(net, totals, value, lowest_wins=True, segment=name)
    return net


def compute_fbt_points_net(
    hole_points: Mapping[int, Mapping[str, float]],
    fbt_value: float,
    players: Sequence[Player | str],
) -> dict[str, float]:
    """Front/back/total on point totals: the highest total wins and every player takes part."""
    value = ensure_finite("fbt_value", fbt_value)
    roster = roster_ids(players)
    net: dict[str, float] = {player_id: 0.0 for player_id in roster}
    for name, holes in SEGMENTS:
        totals: dict[str, float] = {player_id: 0 for player_id in roster}
        for hole in holes:
            for player_id, awarded in hole_points.get(hole, {}).items():
                if player_id in totals:
                    totals[player_id] += awarded
        _pay_segment(net, totals, value, lowest_wins=False, segment=name)
    return net


def _pay_segment(
    net: dict[str, float],
    totals: Mapping[str, float],
    value: float,
    *,
    lowest_wins: bool,
    segment: str,
) -> None:
    if not totals:
        return
    best = min(totals.values()) if lowest_wins else max(totals.values())
    winners = [player_id for player_id, total in totals.items() if total == best]
    losers = [player_id for player_id, total in totals.items() if total != best]
    if not losers:
        logger.debug("fbt %s segment tied between %d players", segment, len(winners))
        return

    for player_id in winners:
        net[player_id] += value / len(winners)
    for player_id in losers:
        net[player_id] -= value / len(losers)
