import os
import re
import logging
from urllib.parse import quote
from typing import Dict, Optional
from fastapi import HTTPException
from jinja2 import Environment, FileSystemLoader, select_autoescape
# WeasyPrint is optional at import time; server should still boot without it
try:
    from weasyprint import HTML  # type: ignore
except Exception:  # pragma: no cover - environment without weasyprint/pango
    HTML = None  # type: ignore

from .schemas import ResumeData
from .resume_editor import group_skills, PREVIEW_SKILL_CATEGORIES
from .template_catalog import style_for

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
env = Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=select_autoescape(["html"]))

def pdf_filename(resume: ResumeData) -> str:
    name = resume.personalInfo.name.strip() or "resume"
    # keep the header value safe: no quotes, slashes or control characters
    return re.sub(r'[\\/"\r\n\t]', "", name) + ".pdf"

def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name (RFC 6266)."""
    fallback = filename.encode("ascii", "ignore").decode("ascii").strip()
    if not fallback or fallback.startswith("."):
        fallback = "resume.pdf"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"

def render_resume_html(resume: ResumeData, template: Optional[Dict] = None) -> str:
    tpl = env.get_template("resume.html")
    return tpl.render(
        r=resume,
        skill_groups=group_skills(resume.skills, PREVIEW_SKILL_CATEGORIES),
        template=template,
        style=style_for(template),
    )

def render_pdf(resume: ResumeData, template: Optional[Dict] = None) -> bytes:
    html = render_resume_html(resume, template)
    if HTML is None:
        # Defer failure until actually attempting to render a PDF
        raise HTTPException(500, "WeasyPrint is not installed. Install 'weasyprint' to enable PDF export.")
    try:
        return HTML(string=html, base_url=TEMPLATES_DIR).write_pdf()
    except Exception as e:
        logger.error(f"PDF rendering failed: {e}")
        raise HTTPException(500, "Failed to generate PDF") from e
