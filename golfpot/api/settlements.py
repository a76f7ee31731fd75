from __future__ import annotations

from fastapi import APIRouter, Depends, status

from golfpot.api.errors import api_error, domain_error
from golfpot.api.schemas import (
    CombinedGamesRequest,
    CombinedGamesResponse,
    ErrorResponse,
    SavedSettlementResponse,
    SettleRequest,
    SettleResponse,
    TransactionSchema,
)
from golfpot.config import get_settings
from golfpot.domain import DomainValidationError, settle
from golfpot.runtime import get_settlement_service
from golfpot.service import SettlementNotFound, SettlementService
from golfpot.storage.repository import SettlementRow

router = APIRouter(
    prefix="/settlements",
    tags=["settlements"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.post("/settle", response_model=SettleResponse, summary="Who owes whom for a ledger")
def settle_balance(payload: SettleRequest) -> SettleResponse:
    try:
        transactions = settle(payload.balance, payload.player_order)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return SettleResponse(
        transactions=[TransactionSchema.from_domain(transaction) for transaction in transactions],
        total_transactions=len(transactions),
    )


@router.post(
    "/combined",
    response_model=CombinedGamesResponse,
    summary="Run the selected games, combine them and settle",
)
def calculate_combined(
    payload: CombinedGamesRequest,
    service: SettlementService = Depends(get_settlement_service),
) -> CombinedGamesResponse:
    settings = get_settings()
    point_value = payload.point_value if payload.point_value is not None else settings.default_point_value
    fbt_value = payload.fbt_value if payload.fbt_value is not None else settings.default_fbt_value
    players = [player.to_domain() for player in payload.players]

    try:
        result, saved_id = service.calculate_combined(
            players=players,
            selected_games=payload.selected_games,
            point_value=point_value,
            fbt_value=fbt_value,
            card_history=[assignment.to_domain() for assignment in payload.card_history],
            strokes_by_hole=payload.strokes_by_hole,
            bbb_holes={hole: data.to_domain() for hole, data in payload.bbb_holes.items()},
            cards_formula=payload.cards_formula,
            save=payload.save,
            group_id=payload.group_id,
        )
    except DomainValidationError as exc:
        raise domain_error(exc) from exc

    names = {player.id: player.name for player in players}
    return CombinedGamesResponse(
        id=saved_id,
        selected_games=[kind.value for kind in result.selection],
        nets={kind.value: net for kind, net in result.nets.items()},
        payouts=result.combined,
        transactions=[TransactionSchema.from_domain(transaction, names) for transaction in result.transactions],
        total_transactions=len(result.transactions),
    )


@router.get(
    "/groups/{group_id}/latest",
    response_model=SavedSettlementResponse,
    summary="Most recent saved settlement of a group",
)
def latest_group_settlement(
    group_id: str,
    service: SettlementService = Depends(get_settlement_service),
) -> SavedSettlementResponse:
    try:
        row = service.get_latest_for_group(group_id)
    except SettlementNotFound as exc:
        raise _not_found(exc) from exc
    return _saved_response(row)


@router.get("/{settlement_id}", response_model=SavedSettlementResponse, summary="Fetch a saved settlement")
def get_settlement(
    settlement_id: int,
    service: SettlementService = Depends(get_settlement_service),
) -> SavedSettlementResponse:
    try:
        row = service.get_saved(settlement_id)
    except SettlementNotFound as exc:
        raise _not_found(exc) from exc
    return _saved_response(row)


def _not_found(exc: SettlementNotFound):
    return api_error(
        code="settlement_not_found",
        message=str(exc),
        details={"id": exc.settlement_id},
        status_code=status.HTTP_404_NOT_FOUND,
    )


def _saved_response(row: SettlementRow) -> SavedSettlementResponse:
    names = {player["id"]: player["name"] for player in row.players}
    return SavedSettlementResponse(
        id=row.id,
        group_id=row.group_id,
        selected_games=row.selected_games,
        point_value=row.point_value,
        fbt_value=row.fbt_value,
        nets=row.nets,
        payouts=row.combined,
        transactions=[TransactionSchema.from_domain(transaction, names) for transaction in row.transactions],
        created_at=row.created_at,
    )
