import os
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

from .db import Base, engine
from . import models  # noqa: F401  registers tables on Base
from .api.routes_analysis import router as analysis_router
from .api.routes_resumes import router as resumes_router
from .api.routes_templates import router as templates_router
from .api.routes_contact import router as contact_router
from .api.routes_jobs import router as jobs_router

app = FastAPI(title="ResumePro Backend")

origins_env = os.getenv("CORS_ORIGINS")
origins = [o.strip() for o in (origins_env or "").split(",") if o.strip()]
if not origins:
    # Local dev front ends (Vite 5173, Next.js 3000)
    origins = ["http://localhost:5173", "http://localhost:3000"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

@app.get("/api/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

app.include_router(analysis_router)
app.include_router(resumes_router)
app.include_router(templates_router)
app.include_router(contact_router)
app.include_router(jobs_router)
