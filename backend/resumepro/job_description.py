import os
import logging
import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

CONTENT_SELECTORS = "main, .content, #content, .job, article"
TEXT_TYPES = {".txt": "text", ".html": "html", ".htm": "html"}

def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    content = soup.select_one(CONTENT_SELECTORS) or soup
    return content.get_text(" ", strip=True)

async def fetch_job_description(url: str) -> str:
    """GET a job posting and return the readable text of its main content."""
    async with httpx.AsyncClient(timeout=30, follow_redirects=True) as client:
        response = await client.get(url)
    if response.status_code >= 400:
        raise ValueError(f"Job posting returned HTTP {response.status_code}")
    text = html_to_text(response.text)
    if not text:
        raise ValueError("No text found at job posting URL")
    logger.info(f"Fetched job description from {url} ({len(text)} chars)")
    return text

def text_from_upload(filename: str, data: bytes) -> str:
    """Plain text of an uploaded job description (.txt or .html)."""
    ext = os.path.splitext(filename or "")[1].lower()
    kind = TEXT_TYPES.get(ext)
    if kind is None:
        raise ValueError("Invalid file type. Please upload TXT or HTML files only")
    decoded = data.decode("utf-8", errors="ignore")
    return html_to_text(decoded) if kind == "html" else decoded.strip()
