from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from golfpot.domain import BbbHole, CardAssignment, CardsFormula, GameKind, Player, Transaction


class ErrorDetail(BaseModel):
    code: str = Field(..., examples=["validation_error"])
    message: str
    details: Any | None = None


class ErrorResponse(BaseModel):
    detail: ErrorDetail


class PlayerSchema(BaseModel):
    id: str = Field(..., examples=["p1"])
    name: str | None = Field(default=None, examples=["Alice"])

    def to_domain(self) -> Player:
        return Player(id=self.id, name=self.name or self.id)


class CardAssignmentSchema(BaseModel):
    card_id: str = Field(..., examples=["camel"])
    player_id: str = Field(..., examples=["p1"])
    card_value: float = Field(..., description="Value of the card at the time it is held")
    timestamp: datetime | None = None

    def to_domain(self) -> CardAssignment:
        return CardAssignment(
            card_id=self.card_id,
            player_id=self.player_id,
            card_value=self.card_value,
            timestamp=self.timestamp,
        )


class BbbHoleSchema(BaseModel):
    first_on: str | None = None
    closest_to: str | None = None
    first_in: str | None = None

    def to_domain(self) -> BbbHole:
        return BbbHole(first_on=self.first_on, closest_to=self.closest_to, first_in=self.first_in)


class TransactionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from")
    to: str
    amount: float
    from_name: str | None = None
    to_name: str | None = None

    @classmethod
    def from_domain(cls, transaction: Transaction, names: dict[str, str] | None = None) -> "TransactionSchema":
        names = names or {}
        return cls(
            from_=transaction.from_player,
            to=transaction.to_player,
            amount=float(transaction.amount),
            from_name=names.get(transaction.from_player),
            to_name=names.get(transaction.to_player),
        )


class HolePointsRequest(BaseModel):
    strokes: dict[str, int] = Field(..., examples=[{"p1": 4, "p2": 4, "p3": 6}])
    player_count: int | None = Field(
        default=None,
        description="Players in the group; defaults to the number of stroke entries",
    )


class HolePointsResponse(BaseModel):
    points: dict[str, float]


class RoundPointsRequest(BaseModel):
    players: list[str]
    strokes_by_hole: dict[int, dict[str, int]] = Field(default_factory=dict)


class RoundPointsResponse(BaseModel):
    points_by_hole: dict[int, dict[str, float]]
    totals: dict[str, float]


class CardsNetRequest(BaseModel):
    history: list[CardAssignmentSchema] = Field(default_factory=list)
    players: list[PlayerSchema] | None = None
    formula: CardsFormula = CardsFormula.PROPORTIONAL


class CardsNetResponse(BaseModel):
    total_pot: float
    debts: dict[str, float]
    net: dict[str, float]


class PointsNetRequest(BaseModel):
    total_points: dict[str, float]
    point_value: float


class FbtNetRequest(BaseModel):
    strokes_by_hole: dict[int, dict[str, int]] = Field(default_factory=dict)
    fbt_value: float
    players: list[str] | None = None


class NetResponse(BaseModel):
    net: dict[str, float]


class SettleRequest(BaseModel):
    balance: dict[str, float]
    player_order: list[str] | None = None


class SettleResponse(BaseModel):
    transactions: list[TransactionSchema]
    total_transactions: int


class CombinedGamesRequest(BaseModel):
    players: list[PlayerSchema]
    selected_games: list[GameKind] = Field(..., examples=[["cards", "points"]])
    point_value: float | None = None
    fbt_value: float | None = None
    card_history: list[CardAssignmentSchema] = Field(default_factory=list)
    strokes_by_hole: dict[int, dict[str, int]] = Field(default_factory=dict)
    bbb_holes: dict[int, BbbHoleSchema] = Field(default_factory=dict)
    cards_formula: CardsFormula = CardsFormula.PROPORTIONAL
    save: bool = False
    group_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "players": [{"id": "p1", "name": "Alice"}, {"id": "p2", "name": "Bob"}],
                    "selected_games": ["cards", "points"],
                    "point_value": 1,
                    "card_history": [{"card_id": "camel", "player_id": "p1", "card_value": 4}],
                    "strokes_by_hole": {"1": {"p1": 4, "p2": 5}},
                }
            ]
        }
    }


class CombinedGamesResponse(BaseModel):
    id: int | None = None
    selected_games: list[str]
    nets: dict[str, dict[str, float]]
    payouts: dict[str, float]
    transactions: list[TransactionSchema]
    total_transactions: int


class SavedSettlementResponse(BaseModel):
    id: int
    group_id: str | None
    selected_games: list[str]
    point_value: float
    fbt_value: float
    nets: dict[str, dict[str, float]]
    payouts: dict[str, float]
    transactions: list[TransactionSchema]
    created_at: str
