from typing import Dict, List
from .schemas import ResumeData

SUGGESTIONS = [
    "Add quantifiable achievements to your work experience",
    "Include relevant keywords from the job description",
    "Strengthen your professional summary with specific skills",
    "Add more technical skills relevant to your target role",
]

def calculate_prescore(resume: ResumeData) -> int:
    """Weighted checklist over field presence and length, capped at 100."""
    info = resume.personalInfo
    score = 0

    # Basic info (40)
    if info.name: score += 10
    if info.email: score += 10
    if info.phone: score += 10
    if info.summary: score += 10

    # Sections (40)
    if resume.experience: score += 20
    if resume.education: score += 10
    if resume.skills: score += 10

    # Quality (20)
    if len(info.summary) > 50: score += 10
    if any(len(exp.description) > 100 for exp in resume.experience): score += 10

    return min(score, 100)

def prescore_issues(resume: ResumeData) -> List[Dict[str, str]]:
    info = resume.personalInfo
    issues = []
    if not info.email or not info.phone:
        issues.append({"type": "error", "text": "Missing contact information"})
    if not resume.experience:
        issues.append({"type": "warning", "text": "Add work experience"})
    if len(resume.skills) < 5:
        issues.append({"type": "info", "text": "Add more relevant skills"})
    if len(info.summary) < 50:
        issues.append({"type": "warning", "text": "Expand professional summary"})
    return issues

def prescore_label(score: int) -> str:
    if score >= 90: return "Excellent"
    if score >= 70: return "Good"
    return "Needs Improvement"

def score_label(score: int) -> str:
    """Label for LLM analysis scores (finer grained than the pre-score label)."""
    if score >= 90: return "Excellent"
    if score >= 80: return "Good"
    if score >= 60: return "Fair"
    return "Needs Improvement"

def prescore_report(resume: ResumeData) -> dict:
    score = calculate_prescore(resume)
    return {
        "score": score,
        "label": prescore_label(score),
        "issues": prescore_issues(resume),
        "suggestions": list(SUGGESTIONS),
    }
