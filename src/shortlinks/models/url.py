from datetime import datetime, UTC

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from src.shortlinks.db.base import Base, BaseModel


class UrlMapping(BaseModel):
    __tablename__ = "urls"

    id = Column(Integer, primary_key=True)
    short_code = Column(String, unique=True, index=True, nullable=False)
    destination = Column(String, nullable=False)
    owner_id = Column(String, ForeignKey("accounts.id"), index=True, nullable=False)
    total_visits = Column(Integer, default=0, nullable=False)

    owner = relationship("Account", back_populates="urls")
    visits = relationship(
        "VisitEvent",
        back_populates="url",
        cascade="all, delete-orphan",
        order_by="VisitEvent.id",
    )
    unique_visitors = relationship(
        "UniqueVisitor", back_populates="url", cascade="all, delete-orphan"
    )


class VisitEvent(Base):
    """One redirect through a short code. Append-only."""

    __tablename__ = "visit_events"

    id = Column(Integer, primary_key=True)
    url_id = Column(Integer, ForeignKey("urls.id", ondelete="CASCADE"), index=True, nullable=False)
    visitor_id = Column(String, nullable=False)
    visited_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    url = relationship("UrlMapping", back_populates="visits")


class UniqueVisitor(BaseModel):
    __tablename__ = "unique_visitors"

    id = Column(Integer, primary_key=True)
    url_id = Column(Integer, ForeignKey("urls.id", ondelete="CASCADE"), nullable=False)
    visitor_id = Column(String, nullable=False)

    url = relationship("UrlMapping", back_populates="unique_visitors")

    __table_args__ = (
        UniqueConstraint("url_id", "visitor_id", name="uix_url_visitor"),
    )
