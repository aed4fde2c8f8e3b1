from sqlalchemy import Column, String, DateTime, Text, Integer
from sqlalchemy.dialects.sqlite import JSON as SQLiteJSON
from .db import Base
import uuid
from datetime import datetime, timezone

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def uid() -> str:
    return str(uuid.uuid4())

def empty_resume_data() -> dict:
    return {
        "personalInfo": {"name": "", "email": "", "phone": "", "location": "", "linkedin": "", "summary": ""},
        "experience": [],
        "education": [],
        "skills": [],
        "projects": [],
    }

class Resume(Base):
    __tablename__ = "resumes"
    id = Column(String, primary_key=True, default=uid)
    title = Column(String, default="Untitled resume")
    template_id = Column(Integer, nullable=True)  # gallery id, see template_catalog
    data = Column(SQLiteJSON, default=empty_resume_data)  # ResumeData in its camelCase JSON form
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

class ATSAnalysisRecord(Base):
    __tablename__ = "ats_analyses"
    id = Column(String, primary_key=True, default=uid)
    resume_id = Column(String, index=True, nullable=True)  # null for unsaved editor state
    job_description = Column(Text, nullable=True)
    overall_score = Column(Integer)
    analysis = Column(SQLiteJSON)  # normalized ATSAnalysis
    model_used = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow)  # sub-second precision, history sorts on it

class ContactMessage(Base):
    __tablename__ = "contact_messages"
    id = Column(String, primary_key=True, default=uid)
    name = Column(String)
    email = Column(String, index=True)
    subject = Column(String)
    message = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
