from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from golfpot.domain import (
    BbbFbtInput,
    BbbHole,
    BbbPointsInput,
    CardAssignment,
    CardsFormula,
    CardsInput,
    FbtInput,
    GameInput,
    GameKind,
    Player,
    PointsInput,
    RoundSettlement,
    game_selection,
    settle_round,
)
from golfpot.storage.repository import SettlementRepository, SettlementRow

logger = logging.getLogger(__name__)


class SettlementNotFound(LookupError):
    def __init__(self, settlement_id: int | str) -> None:
        super().__init__(f"settlement {settlement_id} not found")
        self.settlement_id = settlement_id


class SettlementService:
    def __init__(self, repo: SettlementRepository) -> None:
        self.repo = repo

    def calculate_combined(
        self,
        *,
        players: Sequence[Player],
        selected_games: Sequence[GameKind | str],
        point_value: float,
        fbt_value: float,
        card_history: Sequence[CardAssignment] = (),
        strokes_by_hole: Mapping[int, Mapping[str, int]] | None = None,
        bbb_holes: Mapping[int, BbbHole] | None = None,
        cards_formula: CardsFormula = CardsFormula.PROPORTIONAL,
        save: bool = False,
        group_id: str | None = None,
    ) -> tuple[RoundSettlement, int | None]:
        selection = game_selection(selected_games)
        games = build_game_inputs(
            selection,
            point_value=point_value,
            fbt_value=fbt_value,
            card_history=card_history,
            strokes_by_hole=strokes_by_hole or {},
            bbb_holes=bbb_holes or {},
            cards_formula=cards_formula,
        )
        result = settle_round(games, players)
        logger.info(
            "settled %s for %d players with %d transactions",
            ",".join(kind.value for kind in selection) or "no games",
            len(players),
            len(result.transactions),
        )

        saved_id = None
        if save:
            saved_id = self.repo.save(
                result,
                players=[{"id": player.id, "name": player.name} for player in players],
                point_value=point_value,
                fbt_value=fbt_value,
                group_id=group_id,
            )
            logger.info("saved settlement %s for group %s", saved_id, group_id)
        return result, saved_id

    def get_saved(self, settlement_id: int) -> SettlementRow:
        row = self.repo.get(settlement_id)
        if row is None:
            raise SettlementNotFound(settlement_id)
        return row

    def get_latest_for_group(self, group_id: str) -> SettlementRow:
        row = self.repo.latest_for_group(group_id)
        if row is None:
            raise SettlementNotFound(group_id)
        return row


def build_game_inputs(
    selection: Sequence[GameKind],
    *,
    point_value: float,
    fbt_value: float,
    card_history: Sequence[CardAssignment],
    strokes_by_hole: Mapping[int, Mapping[str, int]],
    bbb_holes: Mapping[int, BbbHole],
    cards_formula: CardsFormula,
) -> list[GameInput]:
    games: list[GameInput] = []
    for kind in selection:
        if kind is GameKind.CARDS:
            games.append(CardsInput(history=tuple(card_history), formula=cards_formula))
        elif kind is GameKind.POINTS:
            games.append(PointsInput(strokes_by_hole=strokes_by_hole, point_value=point_value))
        elif kind is GameKind.FBT:
            games.append(FbtInput(strokes_by_hole=strokes_by_hole, fbt_value=fbt_value))
        elif kind is GameKind.BBB_POINTS:
            games.append(BbbPointsInput(holes=bbb_holes, point_value=point_value))
        elif kind is GameKind.BBB_FBT:
            games.append(BbbFbtInput(holes=bbb_holes, fbt_value=fbt_value))
    return games
