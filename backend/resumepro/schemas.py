from pydantic import BaseModel, Field
from typing import List, Optional, Literal
from datetime import datetime

# ----- Resume data (camelCase, the shape the editor serializes) -----

class PersonalInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    summary: str = ""

class ExperienceItem(BaseModel):
    company: str = ""
    position: str = ""
    startDate: str = ""
    endDate: str = ""
    current: bool = False
    description: str = ""

class EducationItem(BaseModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    startDate: str = ""
    endDate: str = ""
    gpa: Optional[str] = None

class SkillItem(BaseModel):
    name: str = ""
    level: str = "Intermediate"
    category: str = "Technical"

class ProjectItem(BaseModel):
    name: str = ""
    description: str = ""
    technologies: str = ""
    link: Optional[str] = None

class ResumeData(BaseModel):
    personalInfo: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: List[ExperienceItem] = Field(default_factory=list)
    education: List[EducationItem] = Field(default_factory=list)
    skills: List[SkillItem] = Field(default_factory=list)
    projects: List[ProjectItem] = Field(default_factory=list)

# ----- ATS analysis -----

class ImprovementItem(BaseModel):
    category: str
    issue: str
    impact: Literal["high", "medium", "low"]
    suggestion: str

class ATSAnalysis(BaseModel):
    overallScore: int = Field(ge=0, le=100)
    keywordScore: int = Field(ge=0, le=100)
    formatScore: int = Field(ge=0, le=100)
    contentScore: int = Field(ge=0, le=100)
    readabilityScore: int = Field(ge=0, le=100)

    strengths: List[str]
    weaknesses: List[str]
    recommendations: List[str]

    missingKeywords: List[str]
    presentKeywords: List[str]

    formatIssues: List[str]
    contentIssues: List[str]

    industryAlignment: str
    experienceLevel: str

    improvementPriority: List[ImprovementItem]

class AnalyzeResumeRequest(BaseModel):
    resumeData: ResumeData
    jobDescription: Optional[str] = None
    jobUrl: Optional[str] = None  # fetched when no jobDescription is pasted

class AnalyzeResumeResponse(BaseModel):
    success: bool = True
    analysis: ATSAnalysis
    label: str

class AnalyzeSavedResumeRequest(BaseModel):
    jobDescription: Optional[str] = None

class AnalysisRecordOut(BaseModel):
    id: str
    resumeId: Optional[str] = None
    overallScore: int
    modelUsed: Optional[str] = None
    createdAt: Optional[datetime] = None
    analysis: ATSAnalysis

# ----- Rule-based pre-score -----

class ScoreIssue(BaseModel):
    type: Literal["error", "warning", "info"]
    text: str

class PreScoreOut(BaseModel):
    score: int
    label: str
    issues: List[ScoreIssue]
    suggestions: List[str]

# ----- Keywords / assistant -----

class KeywordRequest(BaseModel):
    resumeData: ResumeData
    jobDescription: str
    topK: int = Field(default=10, ge=1, le=50)

class KeywordReport(BaseModel):
    keywords: List[str]
    present: List[str]
    missing: List[str]

class AssistantRequest(BaseModel):
    resumeData: ResumeData
    query: str

class AssistantReply(BaseModel):
    reply: str

# ----- Saved resumes -----

class ResumeIn(BaseModel):
    title: Optional[str] = None
    templateId: Optional[int] = None
    data: Optional[ResumeData] = None

class ResumeOut(BaseModel):
    id: str
    title: str
    templateId: Optional[int] = None
    data: ResumeData
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

class ExportPdfRequest(BaseModel):
    resumeData: ResumeData
    templateId: Optional[int] = None

# ----- Templates -----

class TemplateOut(BaseModel):
    id: int
    name: str
    category: str
    popular: bool
    atsScore: int
    description: str

class TemplateListOut(BaseModel):
    categories: List[str]
    templates: List[TemplateOut]

# ----- Contact / job description -----

class ContactIn(BaseModel):
    name: str
    email: str
    subject: str
    message: str

class ContactOut(BaseModel):
    success: bool
    message: str

class JobUrlIn(BaseModel):
    url: str

class JobDescriptionOut(BaseModel):
    text: str
    filename: Optional[str] = None
