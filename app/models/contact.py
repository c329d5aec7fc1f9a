"""ORM model for messages submitted through the public contact form."""

from sqlalchemy import Column, DateTime, String, Text

from app.models.base import Base, new_id, utcnow

CONTACT_STATUSES = ("new", "read", "replied")


class ContactMessage(Base):
    __tablename__ = "contacts"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default="new", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
