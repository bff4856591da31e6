# ai_client.py
"""Thin wrapper around the OpenAI chat completions API for the three prep tasks.

One completion per call, JSON mode, no retries and no caching. Provider failures
are raised as ``AIGenerationError`` subclasses so the caller can fall back; a
reply that is not usable JSON is replaced with the task's default document
instead of raising.
"""
import json
import logging
from typing import Any, Dict, Optional

import openai
from openai import OpenAI
from pydantic import ValidationError

from schemas.content import (
    PREP,
    QUESTIONS,
    RESEARCH,
    CompanyResearch,
    InterviewQuestions,
    PersonalizedPrep,
    load_document,
)
from services import fallback

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class AIGenerationError(Exception):
    """Base for every failure the AI client lets escape."""


class NoContentError(AIGenerationError):
    pass


class QuotaExceededError(AIGenerationError):
    pass


class InvalidCredentialsError(AIGenerationError):
    pass


class ProviderUnavailableError(AIGenerationError):
    pass


def classify_provider_error(status_code: Optional[int], failure_message: str) -> AIGenerationError:
    if status_code == 429:
        return QuotaExceededError("OpenAI API quota exceeded. Please check your billing settings.")
    if status_code == 401:
        return InvalidCredentialsError("OpenAI API key is invalid. Please check your configuration.")
    if status_code is not None and status_code >= 500:
        return ProviderUnavailableError("OpenAI service is temporarily unavailable. Please try again later.")
    return AIGenerationError(failure_message)


QUESTIONS_SYSTEM_PROMPT = (
    "You are a senior hiring manager and interview specialist who has conducted 500+ interviews at top "
    "tech companies. You understand each company's interview style, what they actually look for, and the "
    "real questions they ask. Generate questions that feel authentic to each company's interview process, "
    "not generic template questions. Always respond with valid JSON format."
)

RESEARCH_SYSTEM_PROMPT = (
    "You are a senior career strategist and company research specialist. Provide detailed, accurate "
    "insights about companies that will help job candidates prepare effectively for interviews. Always "
    "respond with valid JSON only - no other text."
)

PREP_SYSTEM_PROMPT = (
    "You are an executive interview coach with expertise in helping professionals craft compelling, "
    "authentic responses. Create personalized content that feels natural and genuine, not generic or "
    "templated. Use storytelling principles and the STAR method where appropriate. Focus on actionable "
    "advice. Always respond with valid JSON only."
)


def questions_prompt(company: str, position: str, job_description: Optional[str] = None,
                     job_type: Optional[str] = None) -> str:
    role = f"{position} role" + (f" ({job_type})" if job_type else "")
    requirements = f". Job requirements: {job_description}" if job_description else "."
    return f"""I'm preparing for an interview at {company} for a {role}{requirements}

Generate interview questions that reflect {company}'s actual interview style and this specific role:

Behavioral Questions (5-6): use {company}'s known values in scenarios, situations specific to {position}
responsibilities, and the follow-up probes interviewers actually ask.

Technical Interview Prep Focus: the technical areas {company} emphasizes, topics to study, the interview
format it uses, what it values in technical interviews, and concrete preparation recommendations.

Role-Specific Questions (5-6): scenarios this {position} would encounter, collaboration with other
teams, prioritization, and growth in the role.

Company-Specific Questions (4-5): products, mission and values, why {company} over competitors, business
model and culture.

Return ONLY a JSON object with exactly these keys: behavioral, technical, roleSpecific, company.

Example format:
{{
  "behavioral": ["Question 1", "Question 2"],
  "technical": {{
    "focus_areas": ["algorithms", "system design"],
    "key_topics": ["trees and graphs", "distributed systems"],
    "interview_style": ["whiteboard coding", "pair programming"],
    "company_values": ["clean code", "problem-solving approach"],
    "prep_recommendations": ["Practice LeetCode medium", "Study system design"]
  }},
  "roleSpecific": ["Question 1", "Question 2"],
  "company": ["Question 1", "Question 2"]
}}"""


def research_prompt(company: str, position: Optional[str] = None) -> str:
    role = f" for {position} role" if position else ""
    return f"""Research {company}{role}.

RESPOND WITH ONLY VALID JSON - NO OTHER TEXT:

{{
  "industry": "Technology",
  "size": "500-1000 employees",
  "founded": "2010",
  "headquarters": "San Francisco, CA",
  "description": "Brief 1-2 sentence company description",
  "values": ["Innovation", "Teamwork", "Excellence"],
  "work_culture": "Single sentence about work environment",
  "interview_rounds": ["Phone Screen", "Technical", "Final Round"],
  "interview_timeline": "2-3 weeks",
  "recent_news": ["Recent development 1", "Recent development 2", "Recent development 3"],
  "employee_pros": ["Good benefit 1", "Good benefit 2", "Good benefit 3"],
  "employee_cons": ["Challenge 1", "Challenge 2"]
}}

Keep responses concise. Return valid JSON only."""


def prep_prompt(company: str, position: str, user_background: Optional[str] = None,
                job_description: Optional[str] = None) -> str:
    background = f". Background: {user_background}" if user_background else ""
    job = f". Job: {job_description}" if job_description else ""
    return f"""Interview prep tips for {company} {position} role{background}{job}.

RESPOND WITH ONLY VALID JSON - NO OTHER TEXT:

{{
  "tell_me_about_yourself_tips": ["Key talking point 1", "Key talking point 2", "Key talking point 3"],
  "why_this_company_tips": ["Research point to mention", "Company value that resonates", "Specific reason for interest"],
  "strength_tips": ["Relevant strength for role", "How to demonstrate it", "Example situation to mention"],
  "weakness_tips": ["Honest weakness to share", "How you're improving it", "Progress you've made"],
  "questions_to_ask": ["Thoughtful question 1", "Thoughtful question 2", "Thoughtful question 3"],
  "salary_negotiation_tips": ["Research tip", "Timing tip", "Negotiation approach"]
}}

Focus on actionable talking points and strategic tips, not scripted answers."""


def extract_json_object(content: str) -> str:
    """Trim anything before the first '{' and after the last '}'."""
    text = content.strip()
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        return text[start:end + 1]
    return text


def _parse_object(content: str) -> Dict[str, Any]:
    parsed = json.loads(content)
    if not isinstance(parsed, dict):
        raise ValueError("expected a JSON object")
    return parsed


class AIContentClient:
    def __init__(self, api_key: Optional[str], model: str = DEFAULT_MODEL, client: Optional[Any] = None):
        self.model = model
        if client is not None:
            self._client = client
        elif api_key:
            self._client = OpenAI(api_key=api_key)
        else:
            self._client = None

    @property
    def available(self) -> bool:
        return self._client is not None

    def _complete(self, system: str, prompt: str, *, temperature: float, max_tokens: int,
                  failure_message: str) -> str:
        if self._client is None:
            raise InvalidCredentialsError("OpenAI API key is not configured.")
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
            )
        except openai.APIStatusError as e:
            logger.error(f"{failure_message}: provider returned {e.status_code}")
            raise classify_provider_error(e.status_code, failure_message) from e
        except openai.OpenAIError as e:
            logger.error(f"{failure_message}: {e}")
            raise AIGenerationError(failure_message) from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise NoContentError("No content generated")
        logger.debug(f"OpenAI raw response: {content}")
        return content

    # ---------- interview questions ----------
    def generate_interview_questions(self, company: str, position: str,
                                     job_description: Optional[str] = None,
                                     job_type: Optional[str] = None) -> InterviewQuestions:
        content = self._complete(
            QUESTIONS_SYSTEM_PROMPT,
            questions_prompt(company, position, job_description, job_type),
            temperature=0.7,
            max_tokens=2500,
            failure_message="Failed to generate interview questions",
        )
        try:
            parsed = _parse_object(content)
            defaults = fallback.parse_failure_questions(company, position)
            return load_document(QUESTIONS, {
                "behavioral": parsed.get("behavioral") or defaults.behavioral,
                "technical": parsed.get("technical") or fallback.default_technical_focus().model_dump(),
                "roleSpecific": parsed.get("roleSpecific") or parsed.get("role_specific") or defaults.role_specific,
                "company": parsed.get("company") or defaults.company,
            })
        except (ValueError, ValidationError) as e:
            logger.warning(f"Interview questions JSON parsing failed, using default questions: {e}")
            return fallback.parse_failure_questions(company, position)

    # ---------- company research ----------
    def generate_company_research(self, company: str, position: Optional[str] = None) -> CompanyResearch:
        content = self._complete(
            RESEARCH_SYSTEM_PROMPT,
            research_prompt(company, position),
            temperature=0.6,
            max_tokens=1000,
            failure_message="Failed to generate company research",
        )
        clean = extract_json_object(content)
        try:
            parsed = _parse_object(clean)
            overview = fallback.default_overview(company)
            for key in overview:
                if parsed.get(key):
                    overview[key] = str(parsed[key])
            return load_document(RESEARCH, {
                "overview": overview,
                "culture": {
                    "values": parsed.get("values") or fallback.DEFAULT_VALUES,
                    "workEnvironment": parsed.get("work_culture") or fallback.DEFAULT_WORK_ENVIRONMENT,
                },
                "interviewProcess": {
                    "rounds": parsed.get("interview_rounds") or fallback.DEFAULT_ROUNDS,
                    "timeline": parsed.get("interview_timeline") or fallback.DEFAULT_TIMELINE,
                },
                "recentNews": parsed.get("recent_news") or fallback.default_recent_news(company),
                "glassdoorInsights": {
                    "pros": parsed.get("employee_pros") or fallback.DEFAULT_PROS,
                    "cons": parsed.get("employee_cons") or fallback.DEFAULT_CONS,
                },
            })
        except (ValueError, ValidationError) as e:
            logger.warning(f"Company research JSON parsing failed: {e}; content starts {clean[:200]!r}")
            return fallback.parse_failure_research(company)

    # ---------- personalized prep ----------
    def generate_personalized_prep(self, company: str, position: str,
                                   user_background: Optional[str] = None,
                                   job_description: Optional[str] = None) -> PersonalizedPrep:
        content = self._complete(
            PREP_SYSTEM_PROMPT,
            prep_prompt(company, position, user_background, job_description),
            temperature=0.7,
            max_tokens=1500,
            failure_message="Failed to generate personalized preparation",
        )
        try:
            parsed = _parse_object(content)
            defaults = fallback.DEFAULT_PREP_SECTIONS
            return load_document(PREP, {
                "tellMeAboutYourself": parsed.get("tell_me_about_yourself_tips") or defaults["tell_me_about_yourself"],
                "whyThisCompany": parsed.get("why_this_company_tips") or defaults["why_this_company"],
                "strength": parsed.get("strength_tips") or defaults["strength"],
                "weakness": parsed.get("weakness_tips") or defaults["weakness"],
                "questionsToAsk": parsed.get("questions_to_ask") or defaults["questions_to_ask"],
                "salaryNegotiation": parsed.get("salary_negotiation_tips") or defaults["salary_negotiation"],
            })
        except (ValueError, ValidationError) as e:
            logger.warning(f"Personalized prep JSON parsing failed, using default tips: {e}")
            return fallback.parse_failure_prep(company, position)
