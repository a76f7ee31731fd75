"""Combining per-game ledgers and reducing them to who-pays-whom transactions."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from .bbb import compute_bbb_points
from .game import (
    BbbFbtInput,
    BbbPointsInput,
    CardsInput,
    DomainValidationError,
    EmptyInputError,
    FbtInput,
    GameInput,
    GameKind,
    Player,
    PointsInput,
    ensure_known_players,
    roster_ids,
)
from .money import allocate_cents, cents_to_decimal, ensure_finite, is_negligible
from .nets import (
    compute_cards_net,
    compute_fbt_net,
    compute_fbt_points_net,
    compute_points_net,
    current_ownership,
)
from .points import compute_round_points, total_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    from_player: str
    to_player: str
    amount_cents: int

    @property
    def amount(self) -> Decimal:
        return cents_to_decimal(self.amount_cents)

    def to_dict(self) -> dict[str, str | float]:
        return {"from": self.from_player, "to": self.to_player, "amount": float(self.amount)}


@dataclass
class RoundSettlement:
    nets: dict[GameKind, dict[str, float]]
    combined: dict[str, float]
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def selection(self) -> tuple[GameKind, ...]:
        return tuple(self.nets)


def combine(balances: Iterable[Mapping[str, float]]) -> dict[str, float]:
    """Sum ledgers by player id; a player missing from a ledger contributes nothing to it."""
    combined: dict[str, float] = {}
    for balance in balances:
        for player_id, amount in balance.items():
            combined[player_id] = combined.get(player_id, 0.0) + amount
    return combined


def settle(
    balance: Mapping[str, float],
    player_order: Sequence[Player | str] | None = None,
) -> list[Transaction]:
    """Greedy largest-creditor/largest-debtor reduction of a ledger.

    Players within a cent of even are left out. The rest of the ledger is
    converted to whole cents once, largest remainders taking the odd cents, so
    every player stays within a cent of their exact balance and the walk itself
    is exact. Creditors and debtors are walked in descending order of the amount
    owed; equal amounts keep ``player_order``. Each step moves the smaller of
    the two remainders.
    """
    balance = dict(zip(roster_ids(list(balance)), balance.values()))
    order = roster_ids(player_order) if player_order is not None else list(balance)
    if not order:
        raise EmptyInputError("settlement requires at least one player")
    ensure_known_players(order, balance, source="balance")

    amounts = {
        player_id: ensure_finite(f"balance of {player_id}", balance.get(player_id, 0.0), allow_negative=True)
        for player_id in order
    }
    cents = allocate_cents(
        {player_id: amount for player_id, amount in amounts.items() if not is_negligible(amount)}
    )
    creditors = [[player_id, owed] for player_id, owed in cents.items() if owed > 0]
    debtors = [[player_id, -owed] for player_id, owed in cents.items() if owed < 0]
    creditors.sort(key=lambda entry: -entry[1])
    debtors.sort(key=lambda entry: -entry[1])

    transactions: list[Transaction] = []
    creditor_idx = 0
    debtor_idx = 0
    while creditor_idx < len(creditors) and debtor_idx < len(debtors):
        creditor = creditors[creditor_idx]
        debtor = debtors[debtor_idx]

        amount = min(creditor[1], debtor[1])
        transactions.append(Transaction(from_player=debtor[0], to_player=creditor[0], amount_cents=amount))

        creditor[1] -= amount
        debtor[1] -= amount
        if creditor[1] == 0:
            creditor_idx += 1
        if debtor[1] == 0:
            debtor_idx += 1

    logger.debug(
        "settled %d creditors and %d debtors with %d transactions",
        len(creditors),
        len(debtors),
        len(transactions),
    )
    return transactions


def apply_transactions(
    balance: Mapping[str, float],
    transactions: Iterable[Transaction],
) -> dict[str, float]:
    """Residual ledger after every payer has paid and every receiver has been paid."""
    residual = dict(balance)
    for transaction in transactions:
        amount = float(transaction.amount)
        residual[transaction.from_player] = residual.get(transaction.from_player, 0.0) + amount
        residual[transaction.to_player] = residual.get(transaction.to_player, 0.0) - amount
    return residual


def compute_game_net(game: GameInput, players: Sequence[Player | str]) -> dict[str, float]:
    roster = roster_ids(players)
    if isinstance(game, CardsInput):
        return compute_cards_net(current_ownership(game.history), roster, game.formula)
    if isinstance(game, PointsInput):
        hole_points = compute_round_points(game.strokes_by_hole, roster)
        return compute_points_net(total_points(hole_points, roster), game.point_value)
    if isinstance(game, FbtInput):
        return compute_fbt_net(game.strokes_by_hole, game.fbt_value, roster)
    if isinstance(game, BbbPointsInput):
        hole_points = compute_bbb_points(game.holes, roster)
        return compute_points_net(total_points(hole_points, roster), game.point_value)
    if isinstance(game, BbbFbtInput):
        return compute_fbt_points_net(compute_bbb_points(game.holes, roster), game.fbt_value, roster)
    raise DomainValidationError(f"unsupported game input: {type(game).__name__}")


def settle_round(games: Sequence[GameInput], players: Sequence[Player | str]) -> RoundSettlement:
    """Run every selected game, merge the ledgers and settle the result in roster order."""
    roster = roster_ids(players)
    if not roster:
        raise EmptyInputError("settlement requires at least one player")

    nets: dict[GameKind, dict[str, float]] = {}
    for game in games:
        if game.kind in nets:
            raise DomainValidationError(f"game selected more than once: {game.kind.value}")
        nets[game.kind] = compute_game_net(game, roster)

    merged = combine(nets.values())
    combined = {player_id: merged.get(player_id, 0.0) for player_id in roster}
    if not is_negligible(math.fsum(combined.values())):
        logger.warning("combined ledger is off zero by %.6f", math.fsum(combined.values()))

    transactions = settle(combined, roster)
    logger.debug("round settled for games %s", [kind.value for kind in nets])
    return RoundSettlement(nets=nets, combined=combined, transactions=transactions)
