from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from golfpot.domain import DomainValidationError, EmptyInputError, UnsupportedPlayerCount

logger = logging.getLogger(__name__)


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def domain_error(exc: DomainValidationError) -> HTTPException:
    logger.warning("rejected settlement input: %s", exc)
    if isinstance(exc, UnsupportedPlayerCount):
        return api_error(
            code="unsupported_player_count",
            message=str(exc),
            details={"player_count": exc.player_count},
        )
    if isinstance(exc, EmptyInputError):
        return api_error(code="empty_input", message=str(exc))
    return api_error(code="validation_error", message=str(exc))
