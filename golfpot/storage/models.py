from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from golfpot.storage.database import Base


class SettlementRecord(Base):
    __tablename__ = "settlements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    group_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    selected_games: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    point_value: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    fbt_value: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    players: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    nets: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    combined: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    transfers: Mapped[list["SettlementTransfer"]] = relationship(
        back_populates="settlement",
        cascade="all, delete-orphan",
        order_by="SettlementTransfer.position",
    )


class SettlementTransfer(Base):
    __tablename__ = "settlement_transfers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    settlement_id: Mapped[int] = mapped_column(ForeignKey("settlements.id"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    from_player: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    to_player: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)

    settlement: Mapped[SettlementRecord] = relationship(back_populates="transfers")
