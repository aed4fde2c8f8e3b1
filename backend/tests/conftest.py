import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Ensure backend package is importable
backend_root = Path(__file__).resolve().parents[1]
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))


@pytest.fixture
def resume_payload():
    """A filled-in resume in the editor's camelCase shape."""
    return {
        "personalInfo": {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "555-0100",
            "location": "Austin, TX",
            "linkedin": "linkedin.com/in/janedoe",
            "summary": "Backend engineer with six years building Python services and data pipelines on AWS.",
        },
        "experience": [
            {
                "company": "Acme",
                "position": "Senior Engineer",
                "startDate": "2021-01",
                "endDate": "",
                "current": True,
                "description": "Led the migration of twelve services to Kubernetes, cutting deploy time by 40% "
                               "and on-call pages by half across the platform team.",
            }
        ],
        "education": [
            {
                "institution": "State University",
                "degree": "BS",
                "field": "Computer Science",
                "startDate": "2013",
                "endDate": "2017",
                "gpa": "3.8",
            }
        ],
        "skills": [
            {"name": "Python", "level": "Expert", "category": "Technical"},
            {"name": "Docker", "level": "Advanced", "category": "Tools"},
        ],
        "projects": [
            {"name": "pipeline-kit", "description": "ETL helpers", "technologies": "Python, Spark", "link": None}
        ],
    }


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Provide a FastAPI TestClient with an isolated SQLite DB."""
    test_db_path = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{test_db_path}")
    monkeypatch.setenv("CORS_ORIGINS", "*")

    # Avoid accidental usage of real API keys during tests
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

    # Import DB after env is set
    from resumepro import db
    # Ensure models are registered on Base before create_all
    import resumepro.models  # noqa: F401

    engine = create_engine(
        f"sqlite:///{test_db_path}", connect_args={"check_same_thread": False}
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Ensure the app uses this engine when main.py imports it
    db.engine = engine

    # Create schema on the test engine
    db.Base.metadata.create_all(bind=engine)

    # Dependency override to use the test DB session
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    from resumepro.main import app

    app.dependency_overrides[db.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class FakeAnalyzer:
    """Stands in for ATSAnalyzer; records calls and returns a fixed payload."""

    model = "fake-model"

    def __init__(self, raw=None, error=None):
        self.raw = raw if raw is not None else {"overallScore": 84, "keywordScore": 80, "strengths": ["Clear"]}
        self.error = error
        self.calls = []

    async def analyze_resume(self, resume, job_description=None):
        from resumepro.ats_analyzer import normalize_analysis

        self.calls.append((resume, job_description))
        if self.error:
            raise self.error
        return normalize_analysis(self.raw)


@pytest.fixture
def fake_analyzer():
    return FakeAnalyzer
