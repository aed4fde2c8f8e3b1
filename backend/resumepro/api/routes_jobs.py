import logging
from fastapi import APIRouter, UploadFile, File, HTTPException
from ..schemas import JobUrlIn, JobDescriptionOut
from ..job_description import fetch_job_description, text_from_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/job-description", tags=["job-description"])

@router.post("/fetch", response_model=JobDescriptionOut)
async def fetch(body: JobUrlIn):
    """Scrape a job posting URL into plain text"""
    try:
        text = await fetch_job_description(body.url)
    except Exception as e:
        logger.error(f"Job description fetch failed for {body.url}: {e}")
        raise HTTPException(400, f"Failed to fetch job description: {str(e)}")
    return JobDescriptionOut(text=text)

@router.post("/upload", response_model=JobDescriptionOut)
async def upload(file: UploadFile = File(...)):
    """Upload a job description file using multipart/form-data"""
    if not file.filename:
        raise HTTPException(400, "No file selected")
    contents = await file.read()
    try:
        text = text_from_upload(file.filename, contents)
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not text:
        raise HTTPException(400, "Uploaded file contains no text")
    return JobDescriptionOut(filename=file.filename, text=text)
