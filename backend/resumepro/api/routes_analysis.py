"""
ATS endpoints: LLM analysis, rule-based pre-score, keyword coverage, assistant.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import ATSAnalysisRecord
from ..schemas import (
    AnalyzeResumeRequest, AnalyzeResumeResponse, ResumeData, PreScoreOut, KeywordRequest, KeywordReport,
    AssistantRequest, AssistantReply, ATSAnalysis,
)
from ..ats_analyzer import ATSAnalysisError, get_ats_analyzer, resume_to_text
from ..ats_prescore import prescore_report, score_label
from ..keywords import extract_keywords, keyword_coverage
from ..job_description import fetch_job_description
from ..llm_client import LLMError, get_llm_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])

ASSISTANT_SYSTEM_PROMPT = (
    "You are a concise resume writing assistant. Answer the user's request about their resume "
    "in plain text. Rewrite content when asked, never invent employers, titles or dates."
)


def store_analysis(db: Session, analysis: ATSAnalysis, model_used: str,
                   resume_id: Optional[str] = None, job_description: Optional[str] = None) -> Optional[ATSAnalysisRecord]:
    """Persist an analysis for history; failures are logged, not raised."""
    try:
        record = ATSAnalysisRecord(
            resume_id=resume_id,
            job_description=job_description,
            overall_score=analysis.overallScore,
            analysis=analysis.model_dump(),
            model_used=model_used,
        )
        db.add(record)
        db.commit()
        return record
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to store ATS analysis: {e}")
        return None


def analysis_response(analysis: ATSAnalysis) -> dict:
    return {"success": True, "analysis": analysis.model_dump(), "label": score_label(analysis.overallScore)}


def analysis_failure(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@router.post("/analyze-resume", response_model=AnalyzeResumeResponse)
async def analyze_resume(request: AnalyzeResumeRequest, db: Session = Depends(get_db)):
    """Score resume data for ATS compatibility with the LLM"""
    job_description = (request.jobDescription or "").strip() or None
    if not job_description and request.jobUrl:
        try:
            job_description = await fetch_job_description(request.jobUrl)
        except Exception as e:
            logger.error(f"Job description fetch failed for {request.jobUrl}: {e}")
            return analysis_failure(f"Failed to fetch job description: {e}", status_code=400)

    analyzer = get_ats_analyzer()
    try:
        analysis = await analyzer.analyze_resume(request.resumeData, job_description)
    except ATSAnalysisError as e:
        return analysis_failure(str(e))

    store_analysis(db, analysis, analyzer.model, job_description=job_description)
    return analysis_response(analysis)


@router.post("/ats-prescore", response_model=PreScoreOut)
def ats_prescore(resume: ResumeData):
    return prescore_report(resume)


@router.post("/keywords", response_model=KeywordReport)
def keywords(request: KeywordRequest):
    """Job description keywords split by whether the resume already mentions them"""
    if not request.jobDescription.strip():
        raise HTTPException(400, "No job description provided")
    kws = extract_keywords(request.jobDescription, top_k=request.topK)
    coverage = keyword_coverage(resume_to_text(request.resumeData), kws)
    return KeywordReport(keywords=kws, **coverage)


@router.post("/assistant", response_model=AssistantReply)
async def assistant(request: AssistantRequest):
    query = request.query.strip()
    if not query:
        raise HTTPException(400, "Query must not be empty")

    messages = [
        {"role": "system", "content": ASSISTANT_SYSTEM_PROMPT},
        {"role": "user", "content": f"My resume:\n{resume_to_text(request.resumeData)}\nRequest: {query}"},
    ]
    try:
        reply = await get_llm_client().complete(messages, temperature=0.7)
    except LLMError as e:
        logger.error(f"Assistant request failed: {e}")
        raise HTTPException(502, f"AI assistant unavailable: {e}")
    if not reply.strip():
        raise HTTPException(502, "AI assistant returned an empty response")
    return AssistantReply(reply=reply.strip())
