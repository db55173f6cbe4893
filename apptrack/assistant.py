"""AI writing helpers for a tracked application: cover letters, interview prep, resume tips."""
from __future__ import annotations

from apptrack.llm import GenerationClient
from apptrack.log import get_logger
from apptrack.models import Draft
from apptrack.settings import Settings

log = get_logger(__name__)

EMPTY_RESPONSE = "Sorry, I couldn't generate content. The response was empty."


def cover_letter_context(settings: Settings, app: Draft | None) -> str:
    base = f"Profile: {settings.profile_summary}\n" if settings.profile_summary else ""
    job = f"Job: {app.job_title} at {app.company_name}. Link: {app.link or ''}." if app else ""
    return f"{base}{job}".strip()


def resume_bullets_context(settings: Settings, app: Draft | None) -> str:
    profile = f"Profile: {settings.profile_summary}\n" if settings.profile_summary else ""
    tech = f"Tech Stack: {settings.tech_stack}\n" if settings.tech_stack else ""
    jd = f"Job Description: {app.job_description}" if app and app.job_description else ""
    return f"{profile}{tech}{jd}".strip()


def resume_tuner_context(settings: Settings, job_description: str) -> str:
    resume = f"Resume:\n{settings.resume_text}\n\n" if settings.resume_text else ""
    return f"{resume}Job Description:\n{job_description}".strip()


def _generate(client: GenerationClient, prompt: str, label: str) -> str:
    result = client.generate(prompt)
    if not result:
        log.warning("%s: empty response", label)
        return EMPTY_RESPONSE
    log.info("%s generated (%d chars)", label, len(result))
    return result


def generate_cover_letter(client: GenerationClient, context: str) -> str:
    prompt = (
        "Write a concise, professional cover letter in 200-300 words. "
        f"Use an enthusiastic but grounded tone. Base it on: {context}"
    )
    return _generate(client, prompt, "Cover letter")


def generate_interview_questions(client: GenerationClient, app: Draft) -> str:
    prompt = (
        "Provide a list of common interview questions and tips for a "
        f"{app.job_title} position at {app.company_name}. The output should be a "
        "clear, concise list of questions followed by a few helpful tips for the interview."
    )
    return _generate(client, prompt, "Interview questions")


def generate_resume_tips(client: GenerationClient, context: str) -> str:
    prompt = (
        "Analyze this job description and provide actionable suggestions for "
        f"tailoring a resume to it: {context}"
    )
    return _generate(client, prompt, "Resume tips")


def generate_resume_bullets(client: GenerationClient, context: str) -> str:
    prompt = (
        "Generate 6 resume bullet points (STAR-style when possible), each <= 22 words, "
        f"action-verb first, quantify impact, tailored to this context: {context}"
    )
    return _generate(client, prompt, "Resume bullets")
