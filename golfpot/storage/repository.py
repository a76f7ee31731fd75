from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload, sessionmaker

from golfpot.domain import RoundSettlement, Transaction
from golfpot.storage.models import SettlementRecord, SettlementTransfer


@dataclass(slots=True)
class SettlementRow:
    id: int
    group_id: str | None
    selected_games: list[str]
    point_value: float
    fbt_value: float
    players: list[dict[str, str]]
    nets: dict[str, dict[str, float]]
    combined: dict[str, float]
    transactions: list[Transaction]
    created_at: str


class SettlementRepository:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def save(
        self,
        result: RoundSettlement,
        *,
        players: list[dict[str, str]],
        point_value: float,
        fbt_value: float,
        group_id: str | None = None,
    ) -> int:
        with self._session_factory() as db:
            record = SettlementRecord(
                group_id=group_id,
                selected_games=[kind.value for kind in result.selection],
                point_value=point_value,
                fbt_value=fbt_value,
                players=players,
                nets={kind.value: net for kind, net in result.nets.items()},
                combined=result.combined,
            )
            db.add(record)
            db.flush()
            db.add_all(
                [
                    SettlementTransfer(
                        settlement_id=record.id,
                        position=position,
                        from_player=transaction.from_player,
                        to_player=transaction.to_player,
                        amount_cents=transaction.amount_cents,
                    )
                    for position, transaction in enumerate(result.transactions)
                ]
            )
            db.commit()
            return record.id

    def get(self, settlement_id: int) -> SettlementRow | None:
        with self._session_factory() as db:
            record = db.scalars(
                select(SettlementRecord)
                .options(selectinload(SettlementRecord.transfers))
                .where(SettlementRecord.id == settlement_id)
            ).first()
            if record is None:
                return None

            created_at = record.created_at.replace(tzinfo=timezone.utc).isoformat()
            return SettlementRow(
                id=record.id,
                group_id=record.group_id,
                selected_games=list(record.selected_games),
                point_value=record.point_value,
                fbt_value=record.fbt_value,
                players=list(record.players),
                nets=dict(record.nets),
                combined=dict(record.combined),
                transactions=[
                    Transaction(
                        from_player=transfer.from_player,
                        to_player=transfer.to_player,
                        amount_cents=transfer.amount_cents,
                    )
                    for transfer in record.transfers
                ],
                created_at=created_at,
            )

    def latest_for_group(self, group_id: str) -> SettlementRow | None:
        with self._session_factory() as db:
            settlement_id = db.scalars(
                select(SettlementRecord.id)
                .where(SettlementRecord.group_id == group_id)
                .order_by(SettlementRecord.created_at.desc(), SettlementRecord.id.desc())
                .limit(1)
            ).first()
        if settlement_id is None:
            return None
        return self.get(settlement_id)
