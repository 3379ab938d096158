from datetime import date, datetime
from sqlalchemy import Integer, String, Date, Text, JSON, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from ..db import Base

class ContactInfo(Base):
    __tablename__ = "contact_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    icon: Mapped[str | None] = mapped_column(String(50))
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    # e.g. ["+251 46 555 1234", "+251 911 234 567"] for the "Phone" entry
    details: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

class SocialLink(Base):
    __tablename__ = "social_links"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    icon: Mapped[str | None] = mapped_column(String(50))
    href: Mapped[str] = mapped_column(String(500), nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)

class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50))
    check_in: Mapped[date | None] = mapped_column(Date)
    check_out: Mapped[date | None] = mapped_column(Date)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
