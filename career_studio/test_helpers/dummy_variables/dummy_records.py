"""dummy_records.py
Dummy resumes and job applications to use for testing.
"""

from career_studio.models import Education, Experience, JobApplication, JobStatus, ResumeData

# ---------------------------------------------------------------------------
# Setup dummy examples for testing
# ---------------------------------------------------------------------------

MOCK_EXPERIENCE_0 = Experience(
    id="exp-0",
    company="Comcast",
    role="Frontend Engineer",
    start_date="Jan 2021",
    end_date="",
    current=True,
    description="Built the checkout page in React.",
)

MOCK_EXPERIENCE_1 = Experience(
    id="exp-1",
    company="Initech",
    role="Software Developer",
    start_date="Jun 2018",
    end_date="Dec 2020",
    current=False,
    description="Maintained internal reporting tools written in Go.",
)

MOCK_EDUCATION_0 = Education(
    id="edu-0",
    school="State University",
    degree="B.S. Computer Science",
    graduation_date="May 2018",
)

MOCK_RESUME_0 = ResumeData(
    full_name="John Doe",
    email="john.doe@example.com",
    phone="123-456-7890",
    location="New York, NY",
    website="linkedin.com/in/john_doe23",
    summary="",
    experience=[MOCK_EXPERIENCE_0, MOCK_EXPERIENCE_1],
    education=[MOCK_EDUCATION_0],
    skills=["React", "TypeScript", "Go"],
)

MOCK_JOB_DESCRIPTION = (
    "We are hiring a Senior Frontend Engineer to build our customer dashboard. "
    "You will work with React, TypeScript and Kubernetes-based deployments, "
    "own features end to end, and report on product metrics. " * 20
)

MOCK_JOB_WITH_DESCRIPTION = JobApplication(
    id="job-0",
    company="Acme",
    position="Senior Frontend Engineer",
    status=JobStatus.APPLIED,
    date_applied="2025-01-15",
    job_description=MOCK_JOB_DESCRIPTION,
)

MOCK_JOB_WITHOUT_DESCRIPTION = JobApplication(
    id="job-1",
    company="Globex",
    position="Platform Engineer",
    status=JobStatus.WISHLIST,
    date_applied="2025-01-16",
    job_description="",
)

MOCK_ANALYSIS_RESPONSE = {
    "score": 82,
    "missingKeywords": ["Kubernetes"],
    "suggestions": ["Add metrics"],
    "summary": "Good fit",
}
