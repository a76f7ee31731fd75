from __future__ import annotations

from fastapi import APIRouter

from golfpot.api.errors import domain_error
from golfpot.api.schemas import (
    ErrorResponse,
    HolePointsRequest,
    HolePointsResponse,
    RoundPointsRequest,
    RoundPointsResponse,
)
from golfpot.domain import DomainValidationError, compute_hole_points, compute_round_points, total_points

router = APIRouter(prefix="/points", tags=["points"], responses={400: {"model": ErrorResponse}})


@router.post("/hole", response_model=HolePointsResponse, summary="Award 2/9/16 points for one hole")
def hole_points(payload: HolePointsRequest) -> HolePointsResponse:
    player_count = payload.player_count if payload.player_count is not None else len(payload.strokes)
    try:
        points = compute_hole_points(payload.strokes, player_count)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return HolePointsResponse(points=points)


@router.post("/round", response_model=RoundPointsResponse, summary="Award points for every played hole")
def round_points(payload: RoundPointsRequest) -> RoundPointsResponse:
    try:
        points_by_hole = compute_round_points(payload.strokes_by_hole, payload.players)
        totals = total_points(points_by_hole, payload.players)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return RoundPointsResponse(points_by_hole=points_by_hole, totals=totals)
