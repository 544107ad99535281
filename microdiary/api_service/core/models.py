from sqlalchemy import String, Text, Date, DateTime, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import datetime as dt
from typing import Optional, Dict, Any
import uuid as uuid_pkg

from .database import Base

ENTRY_SOURCE = "manual-entry"

class DiaryEntry(Base):
    """A single logged activity on one calendar date."""
    __tablename__ = "diary_entries"
    __table_args__ = (
        Index("ix_diary_entries_date_start", "date", "start_time"),
    )

    id: Mapped[uuid_pkg.UUID] = mapped_column(Uuid, primary_key=True, default=uuid_pkg.uuid4)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    activity: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Provenance: how and where the entry was created
    source: Mapped[str] = mapped_column(String, nullable=False, default=ENTRY_SOURCE)
    client_id: Mapped[str] = mapped_column(String, nullable=False)
    time_zone: Mapped[str] = mapped_column(String, nullable=False)

    schema_version: Mapped[str] = mapped_column(String, nullable=False)
    app_version: Mapped[str] = mapped_column(String, nullable=False)

    @property
    def provenance(self) -> Dict[str, Any]:
        return {"source": self.source, "client_id": self.client_id, "time_zone": self.time_zone}
