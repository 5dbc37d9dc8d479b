"""SQLAlchemy models for searchable content and stored search indexes."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from uniqueness.db.base import Base, TimestampMixin


class ContentItem(TimestampMixin, Base):
    __tablename__ = "content_items"
    __table_args__ = (Index("ix_content_items_type_bundle", "entity_type", "bundle"),)

    entity_type: Mapped[str] = mapped_column(String(32), default="node", nullable=False)
    bundle: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    path: Mapped[str | None] = mapped_column(String(255))

    @property
    def url(self) -> str:
        return self.path or f"/{self.entity_type}/{self.id}"


class SearchIndex(TimestampMixin, Base):
    __tablename__ = "search_indexes"
    __table_args__ = (UniqueConstraint("machine_name", name="uq_search_indexes_machine_name"),)

    machine_name: Mapped[str] = mapped_column(String(64), nullable=False)
    label: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    items: Mapped[list["SearchIndexItem"]] = relationship(back_populates="index")


class SearchIndexItem(Base):
    __tablename__ = "search_index_items"
    __table_args__ = (
        UniqueConstraint(
            "index_id", "entity_type", "entity_id", name="uq_search_index_items_entity"
        ),
    )

    index_id: Mapped[int] = mapped_column(ForeignKey("search_indexes.id"), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(32), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    bundle: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str | None] = mapped_column(Text)
    status: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    url: Mapped[str | None] = mapped_column(String(255))

    index: Mapped[SearchIndex] = relationship(back_populates="items")


__all__ = ["ContentItem", "SearchIndex", "SearchIndexItem"]
