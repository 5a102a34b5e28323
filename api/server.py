"""server.py
Server to launch a FastAPI / Swagger UI instance backing the career studio
browser front end.
"""
from typing import List, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from career_studio.exceptions import (
    AIServiceError,
    EmptyInterviewTurnError,
    InterviewNotActiveError,
    InterviewTurnInProgressError,
    InvalidJobApplicationError,
    JobNotFoundError,
    MissingCredentialError,
    MissingJobDescriptionError,
    ResumeEntryNotFoundError,
    SchemaViolationError,
)
from career_studio.models import (
    AnalysisResult,
    Education,
    Experience,
    JobApplication,
    JobStatus,
    ResumeData,
    TranscriptTurn,
)
from career_studio.state.app_store import AppStore
from career_studio.state.job_board import JobField, count_by_status, group_by_status
from career_studio.state.resume_editor import EducationField, ExperienceField, ResumeField


app = FastAPI(title="Career Studio API", version="1.0")

# Single in-memory store for the running process
app_store = AppStore()

def get_app_store() -> AppStore:
    return app_store


# --------------------------------------------------------------
# REQUEST / RESPONSE MODELS
# --------------------------------------------------------------
class FieldValueInput(BaseModel):
    value: str

class SkillsInput(BaseModel):
    skills: str

class CurrentInput(BaseModel):
    current: bool

class ExperienceFieldInput(BaseModel):
    field: ExperienceField
    value: str

class EducationFieldInput(BaseModel):
    field: EducationField
    value: str

class NewJobInput(BaseModel):
    company: str
    position: str
    status: JobStatus = JobStatus.WISHLIST
    job_description: str = ""
    salary: Optional[str] = None
    notes: Optional[str] = None

class JobStatusInput(BaseModel):
    status: JobStatus

class JobFieldInput(BaseModel):
    field: JobField
    value: Optional[str] = None

class StartInterviewInput(BaseModel):
    job_id: str

class InterviewMessageInput(BaseModel):
    text: str

class BoardColumn(BaseModel):
    status: JobStatus
    count: int
    jobs: List[JobApplication]

class BoardView(BaseModel):
    columns: List[BoardColumn]
    total: int
    selected_job_id: Optional[str] = None
    analyzing_job_id: Optional[str] = None

class SelectedJobView(BaseModel):
    job: Optional[JobApplication] = None
    analysis: Optional[AnalysisResult] = None
    is_analyzing: bool = False

class InterviewView(BaseModel):
    state: str
    selected_job_id: Optional[str] = None
    job: Optional[JobApplication] = None
    transcript: List[TranscriptTurn]
    is_busy: bool = False
    warning: Optional[str] = None


# --------------------------------------------------------------
# ERROR HANDLING
# --------------------------------------------------------------
ERROR_STATUS_CODES = {
    ResumeEntryNotFoundError: 404,
    JobNotFoundError: 404,
    InvalidJobApplicationError: 422,
    MissingJobDescriptionError: 422,
    EmptyInterviewTurnError: 422,
    InterviewNotActiveError: 409,
    InterviewTurnInProgressError: 409,
    MissingCredentialError: 503,
    AIServiceError: 502,
    SchemaViolationError: 502,
}

async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Translate domain exceptions to JSON error responses."""
    return JSONResponse(
        status_code=ERROR_STATUS_CODES[type(exc)],
        content={"error": type(exc).__name__, "detail": str(exc)},
    )

for error_class in ERROR_STATUS_CODES:
    app.add_exception_handler(error_class, handle_domain_error)


# --------------------------------------------------------------
# VIEW HELPERS
# --------------------------------------------------------------
def build_board_view(store: AppStore) -> BoardView:
    columns = group_by_status(store.board)
    counts = count_by_status(store.board)
    return BoardView(
        columns=[
            BoardColumn(status=status, count=counts[status], jobs=jobs)
            for status, jobs in columns.items()
        ],
        total=len(store.board.jobs),
        selected_job_id=store.board.selected_job_id,
        analyzing_job_id=store.analyzing_job_id,
    )

def build_selected_job_view(store: AppStore) -> SelectedJobView:
    board = store.board
    job = board.selected_job
    analysis = board.analysis if job is not None and board.analysis_job_id == job.id else None
    return SelectedJobView(
        job=job,
        analysis=analysis,
        is_analyzing=job is not None and store.analyzing_job_id == job.id,
    )

def build_interview_view(store: AppStore, warning: Optional[str] = None) -> InterviewView:
    manager = store.interview
    session = manager.session
    job = session.job if session else None
    if job is None and manager.selected_job_id in store.board:
        job = store.board.get(manager.selected_job_id)
    return InterviewView(
        state=manager.state,
        selected_job_id=manager.selected_job_id,
        job=job,
        transcript=manager.transcript,
        is_busy=bool(session and session.is_busy) or manager.state == "starting",
        warning=warning,
    )


# --------------------------------------------------------------
# RESUME
# --------------------------------------------------------------
@app.get("/resume", response_model=ResumeData, summary="Get the resume being edited")
async def get_resume(store: AppStore = Depends(get_app_store)) -> ResumeData:
    return store.resume

@app.put("/resume/fields/{field}", response_model=ResumeData, summary="Update a top-level resume field")
async def update_resume_field(
    field: ResumeField,
    body: FieldValueInput,
    store: AppStore = Depends(get_app_store),
) -> ResumeData:
    return store.update_resume_field(field, body.value)

@app.put(
    "/resume/skills",
    response_model=ResumeData,
    summary="Replace the skill list",
    description="Takes the raw comma-separated skills input; entries are trimmed and blanks dropped.",
)
async def update_skills(body: SkillsInput, store: AppStore = Depends(get_app_store)) -> ResumeData:
    return store.update_skills(body.skills)

@app.post("/resume/reset", response_model=ResumeData, summary="Reset the resume to blank")
async def reset_resume(store: AppStore = Depends(get_app_store)) -> ResumeData:
    return store.reset_resume()

@app.post("/resume/summary/generate", response_model=ResumeData, summary="Generate the summary with AI")
async def generate_summary(store: AppStore = Depends(get_app_store)) -> ResumeData:
    return await store.generate_summary()

@app.post("/resume/experience", response_model=Experience, status_code=201, summary="Add an experience entry")
async def add_experience(store: AppStore = Depends(get_app_store)) -> Experience:
    return store.add_experience()

@app.patch("/resume/experience/{experience_id}", response_model=ResumeData, summary="Update an experience field")
async def update_experience(
    experience_id: str,
    body: ExperienceFieldInput,
    store: AppStore = Depends(get_app_store),
) -> ResumeData:
    return store.update_experience_field(experience_id, body.field, body.value)

@app.put("/resume/experience/{experience_id}/current", response_model=ResumeData, summary="Toggle current position")
async def set_experience_current(
    experience_id: str,
    body: CurrentInput,
    store: AppStore = Depends(get_app_store),
) -> ResumeData:
    return store.set_experience_current(experience_id, body.current)

@app.delete("/resume/experience/{experience_id}", response_model=ResumeData, summary="Remove an experience entry")
async def remove_experience(experience_id: str, store: AppStore = Depends(get_app_store)) -> ResumeData:
    return store.remove_experience(experience_id)

@app.post(
    "/resume/experience/{experience_id}/enhance",
    response_model=ResumeData,
    summary="Rewrite an experience description with AI",
)
async def enhance_experience(experience_id: str, store: AppStore = Depends(get_app_store)) -> ResumeData:
    return await store.enhance_experience(experience_id)

@app.post("/resume/education", response_model=Education, status_code=201, summary="Add an education entry")
async def add_education(store: AppStore = Depends(get_app_store)) -> Education:
    return store.add_education()

@app.patch("/resume/education/{education_id}", response_model=ResumeData, summary="Update an education field")
async def update_education(
    education_id: str,
    body: EducationFieldInput,
    store: AppStore = Depends(get_app_store),
) -> ResumeData:
    return store.update_education_field(education_id, body.field, body.value)

@app.delete("/resume/education/{education_id}", response_model=ResumeData, summary="Remove an education entry")
async def remove_education(education_id: str, store: AppStore = Depends(get_app_store)) -> ResumeData:
    return store.remove_education(education_id)


# --------------------------------------------------------------
# JOB BOARD
# --------------------------------------------------------------
@app.get("/jobs", response_model=BoardView, summary="Get the job board grouped by status")
async def get_board(store: AppStore = Depends(get_app_store)) -> BoardView:
    return build_board_view(store)

@app.post("/jobs", response_model=JobApplication, status_code=201, summary="Add a job application")
async def add_job(body: NewJobInput, store: AppStore = Depends(get_app_store)) -> JobApplication:
    return store.add_job(
        company=body.company,
        position=body.position,
        status=body.status,
        job_description=body.job_description,
        salary=body.salary,
        notes=body.notes,
    )

@app.get("/jobs/selected", response_model=SelectedJobView, summary="Get the job detail panel")
async def get_selected_job(store: AppStore = Depends(get_app_store)) -> SelectedJobView:
    return build_selected_job_view(store)

@app.put("/jobs/{job_id}/status", response_model=JobApplication, summary="Move a job to another column")
async def update_job_status(
    job_id: str,
    body: JobStatusInput,
    store: AppStore = Depends(get_app_store),
) -> JobApplication:
    return store.update_job_status(job_id, body.status)

@app.patch("/jobs/{job_id}", response_model=JobApplication, summary="Update a job field")
async def update_job_field(
    job_id: str,
    body: JobFieldInput,
    store: AppStore = Depends(get_app_store),
) -> JobApplication:
    return store.update_job_field(job_id, body.field, body.value)

@app.delete("/jobs/{job_id}", status_code=204, summary="Delete a job application")
async def delete_job(job_id: str, store: AppStore = Depends(get_app_store)) -> Response:
    store.delete_job(job_id)
    return Response(status_code=204)

@app.post("/jobs/{job_id}/select", response_model=SelectedJobView, summary="Open the job detail panel")
async def select_job(job_id: str, store: AppStore = Depends(get_app_store)) -> SelectedJobView:
    store.select_job(job_id)
    return build_selected_job_view(store)

@app.post(
    "/jobs/{job_id}/analyze",
    response_model=AnalysisResult,
    summary="Analyze how well the resume matches the job",
    description="Runs a schema-validated AI analysis. Errors are returned instead of partial results.",
)
async def analyze_job(job_id: str, store: AppStore = Depends(get_app_store)) -> AnalysisResult:
    return await store.analyze_job(job_id)


# --------------------------------------------------------------
# INTERVIEW
# --------------------------------------------------------------
@app.get("/interview", response_model=InterviewView, summary="Get the interview session state")
async def get_interview(store: AppStore = Depends(get_app_store)) -> InterviewView:
    return build_interview_view(store)

@app.get("/interview/jobs", response_model=List[JobApplication], summary="Jobs that can be interviewed for")
async def get_interview_jobs(store: AppStore = Depends(get_app_store)) -> List[JobApplication]:
    return store.interview_ready_jobs()

@app.post("/interview/select", response_model=InterviewView, summary="Select the job to interview for")
async def select_interview_job(
    body: StartInterviewInput,
    store: AppStore = Depends(get_app_store),
) -> InterviewView:
    warning = store.select_interview_job(body.job_id)
    return build_interview_view(store, warning=warning)

@app.post("/interview/start", response_model=InterviewView, summary="Start an interview session")
async def start_interview(
    body: StartInterviewInput,
    store: AppStore = Depends(get_app_store),
) -> InterviewView:
    await store.start_interview(body.job_id)
    return build_interview_view(store)

@app.post("/interview/messages", response_model=InterviewView, summary="Answer the interviewer")
async def send_interview_message(
    body: InterviewMessageInput,
    store: AppStore = Depends(get_app_store),
) -> InterviewView:
    await store.submit_interview_answer(body.text)
    return build_interview_view(store)

@app.delete("/interview", response_model=InterviewView, summary="End the interview session")
async def end_interview(store: AppStore = Depends(get_app_store)) -> InterviewView:
    store.end_interview()
    return build_interview_view(store)
