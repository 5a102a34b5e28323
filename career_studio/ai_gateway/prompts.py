"""prompts.py
Prompt builders for every AIGateway operation.
"""
import json
from dataclasses import asdict

from career_studio.config import APP_DEFAULTS
from career_studio.models import AnalysisResult, ResumeData

INTERVIEW_OPENING_MESSAGE = "I am ready to start the interview. Please ask the first question."


def build_summary_prompt(resume: ResumeData) -> str:
    """Prompt asking for a 3-4 sentence professional summary from experience and skills."""
    experience_lines = "\n".join(
        f"{exp.role} at {exp.company}: {exp.description}" for exp in resume.experience
    )
    return (
        "Based on the following professional experience and skills, write a compelling, "
        "professional summary (3-4 sentences) for a resume.\n\n"
        f"Experience: {experience_lines}\n"
        f"Skills: {', '.join(resume.skills)}\n\n"
        "Keep it impactful, ATS-friendly, and professional. "
        "Return only the summary text."
    )


def build_enhance_bullet_prompt(text: str) -> str:
    """Prompt asking for a stronger rewrite of a single resume bullet."""
    return (
        "Rewrite the following resume bullet point to be more professional, action-oriented, "
        "and impactful. Use strong action verbs and quantify results if implied. Keep it concise. "
        "Return only the rewritten text.\n\n"
        f'Original: "{text}"'
    )


def serialize_resume(resume: ResumeData) -> str:
    """Structured JSON form of the resume embedded in analysis prompts."""
    return json.dumps(asdict(resume), ensure_ascii=False)


def build_analysis_system_prompt() -> str:
    """
    System prompt declaring the required output contract. The JSON schema is
    generated from AnalysisResult so the prompt and the validator never drift.
    """
    schema = AnalysisResult.model_json_schema(by_alias=True)
    return (
        "You are an expert technical recruiter and ATS specialist. "
        "Respond ONLY with a single JSON object matching this JSON schema, "
        "with no markdown and no extra keys:\n"
        f"{json.dumps(schema, indent=2)}"
    )


def build_analysis_prompt(resume: ResumeData, job_description: str) -> str:
    return (
        "Analyze the compatibility between this resume and the job description.\n\n"
        f"Resume: {serialize_resume(resume)}\n\n"
        f"Job Description: {job_description}\n\n"
        "Provide a compatibility score, missing keywords, and specific suggestions."
    )


def build_interviewer_persona(
    job_description: str,
    char_limit: int = APP_DEFAULTS.INTERVIEW_JD_CHAR_LIMIT,
) -> str:
    """
    System instruction for the interview chat. Only the first `char_limit`
    characters of the job description are embedded.
    """
    return (
        "You are a professional hiring manager interviewing a candidate for a job with the "
        f'following description: "{job_description[:char_limit]}...".\n'
        "Start by asking a relevant question. Wait for the user's response.\n"
        "After the user responds, briefly evaluate their answer (constructive feedback), "
        "then ask the next question.\n"
        "Keep the tone professional but encouraging."
    )
