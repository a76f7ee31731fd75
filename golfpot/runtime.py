from __future__ import annotations

from golfpot.service import SettlementService
from golfpot.storage.database import SessionLocal
from golfpot.storage.repository import SettlementRepository

repo = SettlementRepository(SessionLocal)
service = SettlementService(repo)


def get_settlement_service() -> SettlementService:
    return service
