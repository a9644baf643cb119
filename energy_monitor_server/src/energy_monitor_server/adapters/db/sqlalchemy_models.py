__all__ = ["Base", "DeviceORM", "EventORM", "MeasurementORM"]

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from energy_monitor_server.adapters.db.session import Base


class DeviceORM(Base):
    __tablename__ = "devices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    organization_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
    room_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
    category: Mapped[str] = mapped_column(String, nullable=False)
    units: Mapped[str | None] = mapped_column(String, nullable=True)
    power_consumption: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deleted_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class EventORM(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    device_id: Mapped[int] = mapped_column(ForeignKey("devices.id"), index=True, nullable=False)
    room_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
    action: Mapped[str] = mapped_column(String(8), nullable=False)
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), index=True, nullable=False
    )
    updated_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deleted_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class MeasurementORM(Base):
    __tablename__ = "measurements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    device_id: Mapped[int] = mapped_column(ForeignKey("devices.id"), index=True, nullable=False)
    room_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), index=True, nullable=False
    )
    updated_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deleted_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
