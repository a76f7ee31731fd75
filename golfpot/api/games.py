from __future__ import annotations

from fastapi import APIRouter

from golfpot.api.errors import domain_error
from golfpot.api.schemas import (
    CardsNetRequest,
    CardsNetResponse,
    ErrorResponse,
    FbtNetRequest,
    NetResponse,
    PointsNetRequest,
)
from golfpot.domain import (
    DomainValidationError,
    card_debts,
    compute_cards_net,
    compute_fbt_net,
    compute_points_net,
    current_ownership,
)

router = APIRouter(prefix="/games", tags=["games"], responses={400: {"model": ErrorResponse}})


@router.post("/cards/net", response_model=CardsNetResponse, summary="Net balances for the cards game")
def cards_net(payload: CardsNetRequest) -> CardsNetResponse:
    players = [player.to_domain() for player in payload.players] if payload.players is not None else None
    try:
        ownership = current_ownership(assignment.to_domain() for assignment in payload.history)
        debts = card_debts(ownership, players)
        net = compute_cards_net(ownership, players, payload.formula)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return CardsNetResponse(total_pot=sum(debts.values()), debts=debts, net=net)


@router.post("/points/net", response_model=NetResponse, summary="Pairwise net balances for the points game")
def points_net(payload: PointsNetRequest) -> NetResponse:
    try:
        net = compute_points_net(payload.total_points, payload.point_value)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return NetResponse(net=net)


@router.post("/fbt/net", response_model=NetResponse, summary="Front/back/total net balances")
def fbt_net(payload: FbtNetRequest) -> NetResponse:
    try:
        net = compute_fbt_net(payload.strokes_by_hole, payload.fbt_value, payload.players)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return NetResponse(net=net)
