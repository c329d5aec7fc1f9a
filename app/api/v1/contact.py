"""Contact form: public submission, administrator moderation."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.models import ContactMessage
from app.schemas.common import MessageResponse
from app.schemas.contact import (
    ContactListResponse,
    ContactOut,
    ContactRequest,
    ContactResponse,
)

router = APIRouter()

# Listing and moderating messages: authentication first, then the admin role.
ADMIN_ONLY = [Depends(get_current_user), Depends(require_admin)]


def _get_message(db: Session, message_id: str) -> ContactMessage:
    message = db.get(ContactMessage, message_id)
    if message is None:
        raise NotFoundError("Message not found")
    return message


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
def submit_contact(
    body: ContactRequest,
    db: Annotated[Session, Depends(get_db)],
) -> ContactResponse:
    message = ContactMessage(
        name=body.name,
        email=body.email,
        subject=body.subject,
        message=body.message,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return ContactResponse(
        message="Message sent successfully. We'll get back to you soon.",
        data=ContactOut.model_validate(message),
    )


@router.get("", response_model=ContactListResponse, dependencies=ADMIN_ONLY)
def list_messages(
    db: Annotated[Session, Depends(get_db)],
) -> ContactListResponse:
    messages = db.query(ContactMessage).order_by(ContactMessage.created_at.desc()).all()
    return ContactListResponse(
        count=len(messages), data=[ContactOut.model_validate(m) for m in messages]
    )


@router.put("/{message_id}/read", response_model=ContactResponse, dependencies=ADMIN_ONLY)
def mark_as_read(
    message_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> ContactResponse:
    message = _get_message(db, message_id)
    message.status = "read"
    db.commit()
    db.refresh(message)
    return ContactResponse(data=ContactOut.model_validate(message))


@router.delete("/{message_id}", response_model=MessageResponse, dependencies=ADMIN_ONLY)
def delete_message(
    message_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    _get_message(db, message_id)
    db.query(ContactMessage).filter(ContactMessage.id == message_id).delete(
        synchronize_session=False
    )
    db.commit()
    return MessageResponse(message="Message deleted successfully")
