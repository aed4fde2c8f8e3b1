import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Body
from fastapi.responses import Response
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Resume, ATSAnalysisRecord, empty_resume_data
from ..schemas import (
    ResumeIn, ResumeOut, ResumeData, PersonalInfo, PreScoreOut, AnalyzeSavedResumeRequest,
    AnalysisRecordOut, AnalyzeResumeResponse, ExportPdfRequest,
)
from ..resume_editor import SECTION_MODELS, ResumeValidationError, add_entry, remove_entry, update_personal_info
from ..ats_prescore import prescore_report
from ..ats_analyzer import ATSAnalysisError, get_ats_analyzer
from ..template_catalog import get_template
from ..pdf_export import render_pdf, pdf_filename, content_disposition
from .routes_analysis import store_analysis, analysis_response, analysis_failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["resumes"])


def _get_resume(db: Session, resume_id: str) -> Resume:
    r = db.get(Resume, resume_id)
    if not r:
        raise HTTPException(404, "resume not found")
    return r

def _resume_out(r: Resume) -> ResumeOut:
    return ResumeOut(
        id=r.id,
        title=r.title or "",
        templateId=r.template_id,
        data=ResumeData.model_validate(r.data or empty_resume_data()),
        createdAt=r.created_at,
        updatedAt=r.updated_at,
    )

def _check_template(template_id):
    if template_id is not None and get_template(template_id) is None:
        raise HTTPException(400, f"Unknown template {template_id}")

def _save_data(db: Session, r: Resume, data: ResumeData) -> ResumeOut:
    r.data = data.model_dump()
    db.commit()
    db.refresh(r)
    return _resume_out(r)

def _section_entry(section: str, body: dict):
    model = SECTION_MODELS.get(section)
    if model is None:
        raise HTTPException(404, f"Unknown section '{section}'")
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise HTTPException(422, e.errors(include_url=False))

def _pdf_response(data: ResumeData, template_id=None) -> Response:
    pdf = render_pdf(data, get_template(template_id))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(pdf_filename(data))},
    )


# ----- Resumes -----
@router.post("/resumes", response_model=ResumeOut)
def create_resume(body: ResumeIn, db: Session = Depends(get_db)):
    _check_template(body.templateId)
    data = body.data or ResumeData()
    r = Resume(title=body.title or "Untitled resume", template_id=body.templateId, data=data.model_dump())
    db.add(r); db.commit(); db.refresh(r)
    logger.info(f"Created resume {r.id}")
    return _resume_out(r)

@router.get("/resumes", response_model=List[ResumeOut])
def list_resumes(db: Session = Depends(get_db)):
    return [_resume_out(r) for r in db.query(Resume).order_by(Resume.created_at.desc()).all()]

@router.get("/resumes/{resume_id}", response_model=ResumeOut)
def get_resume(resume_id: str, db: Session = Depends(get_db)):
    return _resume_out(_get_resume(db, resume_id))

@router.put("/resumes/{resume_id}", response_model=ResumeOut)
def replace_resume(resume_id: str, body: ResumeIn, db: Session = Depends(get_db)):
    r = _get_resume(db, resume_id)
    _check_template(body.templateId)
    if body.title is not None:
        r.title = body.title
    if "templateId" in body.model_fields_set:
        r.template_id = body.templateId
    data = body.data if body.data is not None else ResumeData.model_validate(r.data or empty_resume_data())
    return _save_data(db, r, data)

@router.delete("/resumes/{resume_id}")
def delete_resume(resume_id: str, db: Session = Depends(get_db)):
    r = _get_resume(db, resume_id)
    db.delete(r); db.commit()
    return {"ok": True}

@router.put("/resumes/{resume_id}/personal-info", response_model=ResumeOut)
def put_personal_info(resume_id: str, body: PersonalInfo, db: Session = Depends(get_db)):
    r = _get_resume(db, resume_id)
    data = update_personal_info(ResumeData.model_validate(r.data), body)
    return _save_data(db, r, data)

# ----- Scoring / analysis -----
@router.get("/resumes/{resume_id}/score", response_model=PreScoreOut)
def resume_score(resume_id: str, db: Session = Depends(get_db)):
    r = _get_resume(db, resume_id)
    return prescore_report(ResumeData.model_validate(r.data))

@router.post("/resumes/{resume_id}/analyze", response_model=AnalyzeResumeResponse)
async def analyze_saved_resume(resume_id: str, body: Optional[AnalyzeSavedResumeRequest] = Body(default=None),
                               db: Session = Depends(get_db)):
    """LLM ATS analysis of a saved resume, recorded in its history"""
    r = _get_resume(db, resume_id)
    job_description = ((body.jobDescription if body else None) or "").strip() or None

    analyzer = get_ats_analyzer()
    try:
        analysis = await analyzer.analyze_resume(ResumeData.model_validate(r.data), job_description)
    except ATSAnalysisError as e:
        return analysis_failure(str(e))

    store_analysis(db, analysis, analyzer.model, resume_id=r.id, job_description=job_description)
    return analysis_response(analysis)

@router.get("/resumes/{resume_id}/analyses", response_model=List[AnalysisRecordOut])
def resume_analyses(resume_id: str, db: Session = Depends(get_db)):
    _get_resume(db, resume_id)
    records = db.query(ATSAnalysisRecord).filter(ATSAnalysisRecord.resume_id == resume_id)\
        .order_by(ATSAnalysisRecord.created_at.desc()).all()
    return [AnalysisRecordOut(id=a.id, resumeId=a.resume_id, overallScore=a.overall_score or 0,
                              modelUsed=a.model_used, createdAt=a.created_at, analysis=a.analysis)
            for a in records]

# ----- Sections -----
@router.post("/resumes/{resume_id}/{section}", response_model=ResumeOut)
def add_section_entry(resume_id: str, section: str, body: dict = Body(...), db: Session = Depends(get_db)):
    """Add an experience/education/skills/projects entry"""
    r = _get_resume(db, resume_id)
    entry = _section_entry(section, body)
    try:
        data = add_entry(ResumeData.model_validate(r.data), section, entry)
    except ResumeValidationError as e:
        raise HTTPException(400, str(e))
    return _save_data(db, r, data)

@router.put("/resumes/{resume_id}/{section}/{index}", response_model=ResumeOut)
def replace_section_entry(resume_id: str, section: str, index: int, body: dict = Body(...), db: Session = Depends(get_db)):
    r = _get_resume(db, resume_id)
    entry = _section_entry(section, body)
    try:
        data = add_entry(ResumeData.model_validate(r.data), section, entry, index=index)
    except ResumeValidationError as e:
        raise HTTPException(400, str(e))
    except IndexError as e:
        raise HTTPException(404, str(e))
    return _save_data(db, r, data)

@router.delete("/resumes/{resume_id}/{section}/{index}", response_model=ResumeOut)
def delete_section_entry(resume_id: str, section: str, index: int, db: Session = Depends(get_db)):
    r = _get_resume(db, resume_id)
    if section not in SECTION_MODELS:
        raise HTTPException(404, f"Unknown section '{section}'")
    try:
        data = remove_entry(ResumeData.model_validate(r.data), section, index)
    except IndexError as e:
        raise HTTPException(404, str(e))
    return _save_data(db, r, data)

# ----- PDF -----
@router.get("/resumes/{resume_id}/pdf")
def resume_pdf(resume_id: str, db: Session = Depends(get_db)):
    r = _get_resume(db, resume_id)
    return _pdf_response(ResumeData.model_validate(r.data), r.template_id)

@router.post("/export-pdf")
def export_pdf(body: ExportPdfRequest):
    """PDF download for unsaved editor state"""
    _check_template(body.templateId)
    return _pdf_response(body.resumeData, body.templateId)
