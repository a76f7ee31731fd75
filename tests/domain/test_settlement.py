from decimal import Decimal

import pytest

from golfpot.domain import (
    EPSILON,
    BbbHole,
    BbbPointsInput,
    CardAssignment,
    CardOwnership,
    CardsInput,
    DomainValidationError,
    EmptyInputError,
    FbtInput,
    GameKind,
    Player,
    PointsInput,
    Transaction,
    UnsupportedPlayerCount,
    allocate_cents,
    apply_transactions,
    combine,
    compute_cards_net,
    is_zero_sum,
    settle,
    settle_round,
    to_cents,
)


def _payers_and_receivers(balance: dict[str, float]) -> tuple[int, int]:
    creditors = sum(1 for amount in balance.values() if amount > EPSILON)
    debtors = sum(1 for amount in balance.values() if amount < -EPSILON)
    return creditors, debtors


def test_points_scenario_settles_with_one_transaction() -> None:
    transactions = settle({"A": 6.0, "B": -6.0}, ["A", "B"])

    assert transactions == [Transaction(from_player="B", to_player="A", amount_cents=600)]
    assert transactions[0].amount == Decimal("6.00")


@pytest.mark.parametrize(
    "balance",
    [
        {"A": 0.0, "B": 0.0},
        {"A": 0.004, "B": -0.004},
        {"A": 0.009, "B": -0.005, "C": -0.004},
    ],
)
def test_all_even_balances_need_no_transactions(balance: dict[str, float]) -> None:
    assert settle(balance) == []


def test_largest_debtor_pays_largest_creditor_first() -> None:
    balance = {"A": 3.0, "B": -10.0, "C": 7.0, "D": -1.0, "E": 1.0}

    transactions = settle(balance, ["A", "B", "C", "D", "E"])

    assert [t.to_dict() for t in transactions] == [
        {"from": "B", "to": "C", "amount": 7.0},
        {"from": "B", "to": "A", "amount": 3.0},
        {"from": "D", "to": "E", "amount": 1.0},
    ]


@pytest.mark.parametrize(
    "order, first_receiver",
    [(["A", "B", "C"], "A"), (["B", "A", "C"], "B")],
)
def test_equal_balances_keep_player_order(order: list[str], first_receiver: str) -> None:
    transactions = settle({"A": 5.0, "B": 5.0, "C": -10.0}, order)

    assert transactions[0].to_player == first_receiver
    assert [t.amount_cents for t in transactions] == [500, 500]


def test_transfers_round_half_up_to_cents() -> None:
    transactions = settle({"A": 0.125, "B": -0.125})

    assert transactions == [Transaction(from_player="B", to_player="A", amount_cents=13)]


def test_odd_cents_go_to_the_largest_remainders() -> None:
    third = 10 / 3
    balance = {"A": third, "B": third, "C": -2 * third}

    transactions = settle(balance, ["A", "B", "C"])

    assert [t.to_dict() for t in transactions] == [
        {"from": "C", "to": "A", "amount": 3.34},
        {"from": "C", "to": "B", "amount": 3.33},
    ]
    residual = apply_transactions(balance, transactions)
    assert all(abs(amount) <= 0.01 for amount in residual.values())


def test_to_cents_rounds_halves_away_from_zero() -> None:
    assert to_cents(0.125) == 13
    assert to_cents(-0.125) == -13
    assert to_cents(2.675) == 268


def test_allocate_cents_keeps_the_ledger_total() -> None:
    cents = allocate_cents({"A": 2.625, "B": 2.625, "C": -1.125, "D": -1.125, "E": -3.0})

    assert cents == {"A": 263, "B": 263, "C": -113, "D": -113, "E": -300}
    assert sum(cents.values()) == 0


def test_allocate_cents_ties_favour_earlier_players() -> None:
    assert allocate_cents({"A": 0.125, "B": -0.125}) == {"A": 13, "B": -13}
    assert allocate_cents({"B": -0.125, "A": 0.125}) == {"B": -12, "A": 12}


@pytest.mark.parametrize(
    "balance",
    [
        {"A": 12.5, "B": -3.25, "C": -9.25},
        {"A": 10.0, "B": 10.0, "C": -15.0, "D": -5.0},
        {"A": 4.8, "B": 1.2, "C": -6.0},
        {"A": 40.0, "B": -12.5, "C": -12.5, "D": -15.0},
        {"A": 30.01497, "B": -10.00499, "C": -10.00499, "D": -10.00499},
        {"p1": 2.625, "p2": 2.625, "p3": -1.125, "p4": -1.125, "p5": -3.0},
    ],
)
def test_settlement_reconciles_every_player(balance: dict[str, float]) -> None:
    transactions = settle(balance)

    residual = apply_transactions(balance, transactions)
    creditors, debtors = _payers_and_receivers(balance)

    assert all(abs(amount) <= 0.01 for amount in residual.values())
    assert len(transactions) <= creditors + debtors - 1
    assert all(t.amount_cents >= 1 for t in transactions)


@pytest.mark.parametrize(
    "balance",
    [
        {"A": 12.5, "B": -3.25, "C": -9.25},
        {"A": 40.0, "B": -12.5, "C": -12.5, "D": -15.0},
        {"A": 3.0, "B": 2.0, "C": -5.0},
    ],
)
def test_lone_creditor_or_debtor_pays_each_counterparty_once(balance: dict[str, float]) -> None:
    creditors, debtors = _payers_and_receivers(balance)

    assert len(settle(balance)) == max(creditors, debtors)


def test_cards_round_with_split_creditor_reconciles_to_the_cent() -> None:
    ownership = {
        "camel": CardOwnership(player_id="p3", value=2),
        "snake": CardOwnership(player_id="p4", value=2),
        "fish": CardOwnership(player_id="p5", value=3),
    }
    players = ["p1", "p2", "p3", "p4", "p5"]

    net = compute_cards_net(ownership, players)
    transactions = settle(net, players)

    residual = apply_transactions(net, transactions)
    assert all(abs(amount) <= 0.01 for amount in residual.values())
    assert sum(t.amount_cents for t in transactions if t.to_player in ("p1", "p2")) == 526


def test_balance_ids_are_trimmed_like_roster_ids() -> None:
    assert settle({" A": 1.0, "B ": -1.0}) == [Transaction(from_player="B", to_player="A", amount_cents=100)]
    assert settle({" A": 1.0, "B": -1.0}, ["A", "B"]) == [Transaction(from_player="B", to_player="A", amount_cents=100)]

    with pytest.raises(DomainValidationError):
        settle({"A": 1.0, " A": -1.0})


def test_settlement_is_deterministic() -> None:
    balance = {"A": 5.0, "B": 5.0, "C": -2.5, "D": -7.5}

    assert settle(balance, ["A", "B", "C", "D"]) == settle(balance, ["A", "B", "C", "D"])


def test_settlement_input_errors() -> None:
    with pytest.raises(EmptyInputError):
        settle({})

    with pytest.raises(EmptyInputError):
        settle({}, [])

    with pytest.raises(DomainValidationError):
        settle({"A": 1.0, "Z": -1.0}, ["A", "B"])

    with pytest.raises(DomainValidationError):
        settle({"A": float("nan"), "B": 0.0})


def test_combine_sums_by_player() -> None:
    combined = combine([{"A": 2.0, "B": -2.0}, {"B": 1.0, "C": -1.0}])

    assert combined == {"A": 2.0, "B": -1.0, "C": -1.0}
    assert is_zero_sum(combined.values())


def test_combine_single_ledger_is_identity_and_empty_is_empty() -> None:
    balance = {"A": 1.5, "B": -1.5}

    assert combine([balance]) == balance
    assert combine([]) == {}


def test_round_settlement_combines_cards_and_points() -> None:
    players = [Player(id="A", name="Alice"), Player(id="B", name="Bob")]
    games = [
        CardsInput(history=(CardAssignment(card_id="camel", player_id="A", card_value=4),)),
        PointsInput(strokes_by_hole={1: {"A": 4, "B": 5}, 2: {"A": 4, "B": 4}}, point_value=1.0),
    ]

    result = settle_round(games, players)

    assert result.selection == (GameKind.CARDS, GameKind.POINTS)
    assert result.nets[GameKind.CARDS] == {"A": -4.0, "B": 4.0}
    assert result.nets[GameKind.POINTS] == {"A": 2.0, "B": -2.0}
    assert result.combined == {"A": -2.0, "B": 2.0}
    assert result.transactions == [Transaction(from_player="A", to_player="B", amount_cents=200)]


def test_round_settlement_single_game_is_not_recombined() -> None:
    strokes = {hole: {"A": 4, "B": 5, "C": 5} for hole in range(1, 19)}

    result = settle_round([FbtInput(strokes_by_hole=strokes, fbt_value=10)], ["A", "B", "C"])

    assert result.combined == result.nets[GameKind.FBT] == {"A": 30.0, "B": -15.0, "C": -15.0}
    assert [t.to_dict() for t in result.transactions] == [
        {"from": "B", "to": "A", "amount": 15.0},
        {"from": "C", "to": "A", "amount": 15.0},
    ]


def test_round_settlement_with_no_games_is_even() -> None:
    result = settle_round([], ["A", "B"])

    assert result.combined == {"A": 0.0, "B": 0.0}
    assert result.transactions == []


def test_round_settlement_bbb_points() -> None:
    holes = {1: BbbHole(first_on="A", closest_to="A", first_in="A"), 2: BbbHole(first_on="B")}

    result = settle_round([BbbPointsInput(holes=holes, point_value=2.0)], ["A", "B"])

    assert result.combined == {"A": 4.0, "B": -4.0}


def test_round_settlement_errors() -> None:
    with pytest.raises(EmptyInputError):
        settle_round([], [])

    points = PointsInput(strokes_by_hole={1: {"A": 4, "B": 5}}, point_value=1.0)
    with pytest.raises(DomainValidationError):
        settle_round([points, points], ["A", "B"])

    five = ["A", "B", "C", "D", "E"]
    with pytest.raises(UnsupportedPlayerCount):
        settle_round([points], five)
