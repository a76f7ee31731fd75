from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Tuple, Union


class DomainValidationError(ValueError):
    """Raised when play records or wager settings are malformed."""


class UnsupportedPlayerCount(DomainValidationError):
    def __init__(self, player_count: int) -> None:
        super().__init__(f"points table is defined for 2-4 players, got {player_count}")
        self.player_count = player_count


class EmptyInputError(DomainValidationError):
    """Raised when settlement is requested on an empty roster."""


class GameKind(str, Enum):
    CARDS = "cards"
    POINTS = "points"
    FBT = "fbt"
    BBB_POINTS = "bbb-points"
    BBB_FBT = "bbb-fbt"


class CardsFormula(str, Enum):
    PROPORTIONAL = "proportional"
    EQUAL_SPLIT = "equal_split"
    EXCESS_OVER_MINIMUM = "excess_over_minimum"


@dataclass(frozen=True)
class Player:
    id: str
    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", normalize_player(self.id))


@dataclass(frozen=True)
class CardAssignment:
    card_id: str
    player_id: str
    card_value: float
    timestamp: datetime | None = None


@dataclass(frozen=True)
class CardOwnership:
    player_id: str
    value: float


@dataclass(frozen=True)
class BbbHole:
    first_on: str | None = None
    closest_to: str | None = None
    first_in: str | None = None

    def winners(self) -> tuple[str, ...]:
        return tuple(
            player_id
            for player_id in (self.first_on, self.closest_to, self.first_in)
            if player_id and player_id != "none"
        )


@dataclass(frozen=True)
class CardsInput:
    history: Tuple[CardAssignment, ...]
    formula: CardsFormula = CardsFormula.PROPORTIONAL
    kind: GameKind = field(default=GameKind.CARDS, init=False)


@dataclass(frozen=True)
class PointsInput:
    strokes_by_hole: Mapping[int, Mapping[str, int]]
    point_value: float
    kind: GameKind = field(default=GameKind.POINTS, init=False)


@dataclass(frozen=True)
class FbtInput:
    strokes_by_hole: Mapping[int, Mapping[str, int]]
    fbt_value: float
    kind: GameKind = field(default=GameKind.FBT, init=False)


@dataclass(frozen=True)
class BbbPointsInput:
    holes: Mapping[int, BbbHole]
    point_value: float
    kind: GameKind = field(default=GameKind.BBB_POINTS, init=False)


@dataclass(frozen=True)
class BbbFbtInput:
    holes: Mapping[int, BbbHole]
    fbt_value: float
    kind: GameKind = field(default=GameKind.BBB_FBT, init=False)


GameInput = Union[CardsInput, PointsInput, FbtInput, BbbPointsInput, BbbFbtInput]


def normalize_player(player_id: str) -> str:
    value = player_id.strip()
    if not value:
        raise DomainValidationError("player id must be non-empty")
    return value


def unique_preserve_order(players: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for player in players:
        normalized = normalize_player(player)
        if normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def game_selection(kinds: Iterable[GameKind | str]) -> tuple[GameKind, ...]:
    """Parse a game selection, dropping repeats and keeping the caller's order."""
    selected: list[GameKind] = []
    for kind in kinds:
        try:
            parsed = GameKind(kind)
        except ValueError as exc:
            raise DomainValidationError(f"unknown game: {kind}") from exc
        if parsed not in selected:
            selected.append(parsed)
    return tuple(selected)


def roster_ids(players: Sequence[Player | str]) -> list[str]:
    ids = [player.id if isinstance(player, Player) else normalize_player(player) for player in players]
    if len(set(ids)) != len(ids):
        raise DomainValidationError("players must be unique")
    return ids


def ensure_known_players(roster: Iterable[str], referenced: Iterable[str], *, source: str) -> None:
    known = set(roster)
    unknown = sorted({player_id for player_id in referenced if player_id not in known})
    if unknown:
        raise DomainValidationError(f"unknown players in {source}: {', '.join(unknown)}")
