from .bbb import compute_bbb_points
from .game import (
    BbbFbtInput,
    BbbHole,
    BbbPointsInput,
    CardAssignment,
    CardOwnership,
    CardsFormula,
    CardsInput,
    DomainValidationError,
    EmptyInputError,
    FbtInput,
    GameInput,
    GameKind,
    Player,
    PointsInput,
    UnsupportedPlayerCount,
    game_selection,
    normalize_player,
    unique_preserve_order,
)
from .money import EPSILON, ZERO_SUM_TOLERANCE, allocate_cents, is_negligible, is_zero_sum, to_cents
from .nets import (
    card_debts,
    compute_cards_net,
    compute_fbt_net,
    compute_fbt_points_net,
    compute_points_net,
    current_ownership,
)
from .points import compute_hole_points, compute_round_points, total_points
from .settlement import (
    RoundSettlement,
    Transaction,
    apply_transactions,
    combine,
    compute_game_net,
    settle,
    settle_round,
)

__all__ = [
    "EPSILON",
    "ZERO_SUM_TOLERANCE",
    "BbbFbtInput",
    "BbbHole",
    "BbbPointsInput",
    "CardAssignment",
    "CardOwnership",
    "CardsFormula",
    "CardsInput",
    "DomainValidationError",
    "EmptyInputError",
    "FbtInput",
    "GameInput",
    "GameKind",
    "Player",
    "PointsInput",
    "RoundSettlement",
    "Transaction",
    "UnsupportedPlayerCount",
    "allocate_cents",
    "apply_transactions",
    "card_debts",
    "combine",
    "compute_bbb_points",
    "compute_cards_net",
    "compute_fbt_net",
    "compute_fbt_points_net",
    "compute_game_net",
    "compute_hole_points",
    "compute_points_net",
    "compute_round_points",
    "current_ownership",
    "game_selection",
    "is_negligible",
    "is_zero_sum",
    "normalize_player",
    "settle",
    "settle_round",
    "to_cents",
    "total_points",
    "unique_preserve_order",
]
