from resumepro.ats_prescore import (
    SUGGESTIONS, calculate_prescore, prescore_issues, prescore_label, prescore_report, score_label,
)
from resumepro.schemas import ResumeData


def test_empty_resume_scores_zero_with_all_issues():
    resume = ResumeData()
    assert calculate_prescore(resume) == 0
    assert prescore_issues(resume) == [
        {"type": "error", "text": "Missing contact information"},
        {"type": "warning", "text": "Add work experience"},
        {"type": "info", "text": "Add more relevant skills"},
        {"type": "warning", "text": "Expand professional summary"},
    ]


def test_full_resume_hits_every_weight(resume_payload):
    resume = ResumeData.model_validate(resume_payload)
    # 40 basics + 20 experience + 10 education + 10 skills + 10 long summary + 10 long description
    assert calculate_prescore(resume) == 100
    assert prescore_issues(resume) == [{"type": "info", "text": "Add more relevant skills"}]


def test_partial_resume(resume_payload):
    resume_payload["personalInfo"]["phone"] = ""
    resume_payload["personalInfo"]["summary"] = "Short"
    resume_payload["experience"][0]["description"] = "Did things"
    resume = ResumeData.model_validate(resume_payload)

    # name, email, summary present (30) + sections (40)
    assert calculate_prescore(resume) == 70
    texts = [i["text"] for i in prescore_issues(resume)]
    assert texts == ["Missing contact information", "Add more relevant skills", "Expand professional summary"]


def test_labels():
    assert prescore_label(90) == "Excellent"
    assert prescore_label(70) == "Good"
    assert prescore_label(69) == "Needs Improvement"

    assert score_label(95) == "Excellent"
    assert score_label(80) == "Good"
    assert score_label(60) == "Fair"
    assert score_label(59) == "Needs Improvement"


def test_report_shape():
    report = prescore_report(ResumeData())
    assert report["score"] == 0
    assert report["label"] == "Needs Improvement"
    assert report["suggestions"] == SUGGESTIONS
    assert report["suggestions"] is not SUGGESTIONS
