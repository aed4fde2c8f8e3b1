import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..db import get_db
from ..models import ContactMessage
from ..schemas import ContactIn, ContactOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["contact"])

@router.post("", response_model=ContactOut)
def submit_contact(body: ContactIn, db: Session = Depends(get_db)):
    fields = {k: v.strip() for k, v in body.model_dump().items()}
    if not all(fields.values()):
        raise HTTPException(400, "Please fill in all fields")
    if "@" not in fields["email"]:
        raise HTTPException(400, "Please enter a valid email address")

    msg = ContactMessage(**fields)
    db.add(msg); db.commit()
    logger.info(f"Contact message {msg.id} received from {msg.email}")
    return ContactOut(success=True, message="Message sent successfully!")
