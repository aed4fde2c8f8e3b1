import asyncio

import pytest

from resumepro.ats_analyzer import (
    ATSAnalyzer, ATSAnalysisError, build_prompt, clamp_score, normalize_analysis,
    parse_model_json, resume_to_text, UNDETERMINED,
)
from resumepro.llm_client import LLMError
from resumepro.schemas import ResumeData


class FakeClient:
    model = "gpt-test"

    def __init__(self, content="{}", error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def complete(self, messages, temperature=0.7, json_mode=False, max_tokens=None):
        self.calls.append({"messages": messages, "temperature": temperature, "json_mode": json_mode})
        if self.error:
            raise self.error
        return self.content


def test_resume_to_text_layout(resume_payload):
    text = resume_to_text(ResumeData.model_validate(resume_payload))
    assert text.startswith("Name: Jane Doe\nEmail: jane@example.com\nPhone: 555-0100\n")
    assert "LinkedIn: linkedin.com/in/janedoe\n\n" in text
    assert "PROFESSIONAL SUMMARY:\nBackend engineer" in text
    assert "Senior Engineer at Acme\n2021-01 - Present\n" in text
    assert "BS in Computer Science\nState University\n2013 - 2017\nGPA: 3.8\n" in text
    assert "Technical: Python (Expert)\n" in text
    assert "Tools: Docker (Advanced)\n" in text
    assert "pipeline-kit\nETL helpers\nTechnologies: Python, Spark\n" in text
    assert "Link:" not in text


def test_resume_to_text_skips_empty_sections():
    text = resume_to_text(ResumeData())
    assert text == "Name: \nEmail: \nPhone: \nLocation: \nLinkedIn: \n\n"


def test_build_prompt_includes_job_description_only_when_given():
    with_jd = build_prompt("RESUME", "  Python role  ")
    assert "Job Description for Analysis:\nPython role" in with_jd
    assert "Resume Content:\nRESUME" in with_jd
    assert '"overallScore": number (0-100)' in with_jd

    assert "Job Description for Analysis" not in build_prompt("RESUME", "   ")
    assert "Job Description for Analysis" not in build_prompt("RESUME")


@pytest.mark.parametrize("value,expected", [
    (87, 87), (87.6, 88), (150, 100), (-5, 0), ("72", 72), ("90%", 90),
    ("high", 0), (None, 0), (True, 0), (float("nan"), 0), ([1], 0), (10**400, 100), (-10**400, 0),
])
def test_clamp_score(value, expected):
    assert clamp_score(value) == expected


def test_normalize_analysis_fills_defaults():
    analysis = normalize_analysis({})
    assert analysis.overallScore == 0
    assert analysis.strengths == []
    assert analysis.industryAlignment == UNDETERMINED
    assert analysis.experienceLevel == UNDETERMINED
    assert analysis.improvementPriority == []

    assert normalize_analysis(["not", "a", "dict"]).overallScore == 0


def test_normalize_analysis_cleans_model_output():
    analysis = normalize_analysis({
        "overallScore": 120,
        "keywordScore": "65",
        "strengths": ["Strong metrics", 3, None, {"x": 1}],
        "missingKeywords": "kubernetes",
        "industryAlignment": "",
        "experienceLevel": "Senior",
        "improvementPriority": [
            {"category": "Keywords", "issue": "Few terms", "impact": "HIGH", "suggestion": "Add terms"},
            {"impact": "critical"},
            "junk",
        ],
    })
    assert analysis.overallScore == 100
    assert analysis.keywordScore == 65
    assert analysis.strengths == ["Strong metrics", "3"]
    assert analysis.missingKeywords == []
    assert analysis.industryAlignment == UNDETERMINED
    assert analysis.experienceLevel == "Senior"

    first, second, third = analysis.improvementPriority
    assert first.impact == "high"
    assert second.model_dump() == {
        "category": "General", "issue": "Unknown issue", "impact": "medium", "suggestion": "No suggestion provided",
    }
    assert third.category == "General"


def test_parse_model_json_strips_fences():
    assert parse_model_json('```json\n{"overallScore": 70}\n```') == {"overallScore": 70}
    assert parse_model_json("") == {}
    with pytest.raises(ValueError):
        parse_model_json("not json")


def test_analyze_resume_sends_json_mode_prompt(resume_payload):
    client = FakeClient(content='{"overallScore": 91, "improvementPriority": []}')
    analyzer = ATSAnalyzer(client=client)

    analysis = asyncio.run(analyzer.analyze_resume(ResumeData.model_validate(resume_payload), "Kubernetes"))

    assert analysis.overallScore == 91
    call = client.calls[0]
    assert call["temperature"] == 0.1
    assert call["json_mode"] is True
    assert call["messages"][0]["role"] == "system"
    assert "Kubernetes" in call["messages"][1]["content"]
    assert analyzer.model == "gpt-test"


def test_analyze_resume_wraps_failures(resume_payload):
    resume = ResumeData.model_validate(resume_payload)

    with pytest.raises(ATSAnalysisError) as exc:
        asyncio.run(ATSAnalyzer(client=FakeClient(error=LLMError("API call failed: 500 boom"))).analyze_resume(resume))
    assert str(exc.value).startswith("Failed to analyze resume: ")
    assert "500 boom" in str(exc.value)

    with pytest.raises(ATSAnalysisError):
        asyncio.run(ATSAnalyzer(client=FakeClient(content="{broken")).analyze_resume(resume))


def test_analyze_resume_clamps_huge_integer_scores(resume_payload):
    client = FakeClient(content='{"overallScore": 1' + "0" * 400 + "}")
    analysis = asyncio.run(ATSAnalyzer(client=client).analyze_resume(ResumeData.model_validate(resume_payload)))
    assert analysis.overallScore == 100
