"""
ATS analysis service.
Turns structured resume data into plain text, asks the LLM for a scored
compatibility report, and clamps the reply into the ATSAnalysis shape.
"""
import json
import math
import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from .llm_client import ChatCompletionClient, LLMError, get_llm_client
from .schemas import ATSAnalysis, ResumeData

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert ATS analyzer with deep knowledge of modern applicant tracking systems "
    "used by Fortune 500 companies. Provide accurate, actionable analysis based on real ATS requirements."
)

SCORE_FIELDS = ["overallScore", "keywordScore", "formatScore", "contentScore", "readabilityScore"]
LIST_FIELDS = [
    "strengths", "weaknesses", "recommendations",
    "missingKeywords", "presentKeywords",
    "formatIssues", "contentIssues",
]
IMPACT_LEVELS = {"high", "medium", "low"}
UNDETERMINED = "Unable to determine"


class ATSAnalysisError(Exception):
    """Raised when the resume could not be analyzed."""


def resume_to_text(resume: ResumeData) -> str:
    info = resume.personalInfo

    text = f"Name: {info.name}\n"
    text += f"Email: {info.email}\n"
    text += f"Phone: {info.phone}\n"
    text += f"Location: {info.location}\n"
    text += f"LinkedIn: {info.linkedin}\n\n"

    if info.summary:
        text += f"PROFESSIONAL SUMMARY:\n{info.summary}\n\n"

    if resume.experience:
        text += "WORK EXPERIENCE:\n"
        for exp in resume.experience:
            text += f"{exp.position} at {exp.company}\n"
            text += f"{exp.startDate} - {'Present' if exp.current else exp.endDate}\n"
            text += f"{exp.description}\n\n"

    if resume.education:
        text += "EDUCATION:\n"
        for edu in resume.education:
            text += f"{edu.degree} in {edu.field}\n"
            text += f"{edu.institution}\n"
            text += f"{edu.startDate} - {edu.endDate}\n"
            if edu.gpa:
                text += f"GPA: {edu.gpa}\n"
            text += "\n"

    if resume.skills:
        text += "SKILLS:\n"
        by_category: "OrderedDict[str, List[str]]" = OrderedDict()
        for skill in resume.skills:
            by_category.setdefault(skill.category, []).append(f"{skill.name} ({skill.level})")
        for category, skill_list in by_category.items():
            text += f"{category}: {', '.join(skill_list)}\n"
        text += "\n"

    if resume.projects:
        text += "PROJECTS:\n"
        for project in resume.projects:
            text += f"{project.name}\n"
            text += f"{project.description}\n"
            text += f"Technologies: {project.technologies}\n"
            if project.link:
                text += f"Link: {project.link}\n"
            text += "\n"

    return text


def build_prompt(resume_text: str, job_description: Optional[str] = None) -> str:
    job_block = ""
    if job_description and job_description.strip():
        job_block = f"""Job Description for Analysis:
{job_description.strip()}"""

    return f"""
You are an expert ATS (Applicant Tracking System) analyzer. Analyze the following resume and provide a comprehensive ATS compatibility score.

Resume Content:
{resume_text}

{job_block}

Please analyze the resume based on these ATS criteria:
1. Keyword optimization and industry relevance
2. Format compatibility (headers, sections, formatting)
3. Content quality and quantifiable achievements
4. Readability and structure
5. Missing critical elements

Provide a detailed analysis with specific scores and actionable recommendations. Focus on real ATS requirements used by major companies.

Respond with JSON in this exact format:
{{
  "overallScore": number (0-100),
  "keywordScore": number (0-100),
  "formatScore": number (0-100),
  "contentScore": number (0-100),
  "readabilityScore": number (0-100),
  "strengths": ["strength1", "strength2", ...],
  "weaknesses": ["weakness1", "weakness2", ...],
  "recommendations": ["recommendation1", "recommendation2", ...],
  "missingKeywords": ["keyword1", "keyword2", ...],
  "presentKeywords": ["keyword1", "keyword2", ...],
  "formatIssues": ["issue1", "issue2", ...],
  "contentIssues": ["issue1", "issue2", ...],
  "industryAlignment": "industry assessment",
  "experienceLevel": "junior/mid/senior level assessment",
  "improvementPriority": [
    {{
      "category": "category name",
      "issue": "specific issue",
      "impact": "high/medium/low",
      "suggestion": "specific suggestion"
    }}
  ]
}}
"""


def clamp_score(value: Any) -> int:
    """Coerce a model-reported score into an int in [0, 100]; junk becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or (isinstance(value, float) and math.isnan(value)):
        return 0
    return int(round(max(0, min(100, value))))


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            items.append(str(item))
    return items


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _improvement_item(item: Any) -> Dict[str, str]:
    if not isinstance(item, dict):
        item = {}
    impact = item.get("impact")
    impact = impact.strip().lower() if isinstance(impact, str) else ""
    return {
        "category": _text(item.get("category"), "General"),
        "issue": _text(item.get("issue"), "Unknown issue"),
        "impact": impact if impact in IMPACT_LEVELS else "medium",
        "suggestion": _text(item.get("suggestion"), "No suggestion provided"),
    }


def normalize_analysis(raw: Any) -> ATSAnalysis:
    """Fill defaults and clamp everything the model returned into ATSAnalysis."""
    if not isinstance(raw, dict):
        raw = {}

    data: Dict[str, Any] = {name: clamp_score(raw.get(name)) for name in SCORE_FIELDS}
    for name in LIST_FIELDS:
        data[name] = _string_list(raw.get(name))

    data["industryAlignment"] = _text(raw.get("industryAlignment"), UNDETERMINED)
    data["experienceLevel"] = _text(raw.get("experienceLevel"), UNDETERMINED)

    priority = raw.get("improvementPriority")
    data["improvementPriority"] = [_improvement_item(i) for i in priority] if isinstance(priority, list) else []

    return ATSAnalysis(**data)


def parse_model_json(content: str) -> Any:
    cleaned = (content or "").replace("```json", "").replace("```", "").strip()
    return json.loads(cleaned or "{}")


class ATSAnalyzer:
    """Scores a resume for ATS compatibility through one LLM call"""

    def __init__(self, client: Optional[ChatCompletionClient] = None, temperature: float = 0.1):
        self.client = client or get_llm_client()
        self.temperature = temperature

    @property
    def model(self) -> str:
        return self.client.model

    async def analyze_resume(self, resume: ResumeData, job_description: Optional[str] = None) -> ATSAnalysis:
        prompt = build_prompt(resume_to_text(resume), job_description)
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        try:
            content = await self.client.complete(messages, temperature=self.temperature, json_mode=True)
            return normalize_analysis(parse_model_json(content))
        except (LLMError, ValueError) as e:
            logger.error(f"Error analyzing resume: {e}")
            raise ATSAnalysisError(f"Failed to analyze resume: {e}") from e


def get_ats_analyzer() -> ATSAnalyzer:
    """Analyzer wired to the environment-configured LLM client"""
    return ATSAnalyzer()
