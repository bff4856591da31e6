# content.py (schemas)
"""Canonical shapes for the generated interview-prep documents.

Every document carries a ``kind`` tag and a ``schemaVersion`` so stored JSON can
be told apart and upgraded on read. Payloads written before the tags existed
(untagged dicts, ``technical`` as a bare list, prep sections as paragraphs) are
accepted and normalized by the ``before`` validators.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = 2

QUESTIONS = "questions"
RESEARCH = "research"
PREP = "prep"

_doc_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


# ---------- interview questions ----------
class TechnicalFocus(BaseModel):
    format: Literal["focus"] = "focus"
    focus_areas: List[str] = []
    key_topics: List[str] = []
    interview_style: List[str] = []
    company_values: List[str] = []
    prep_recommendations: List[str] = []


class TechnicalQuestions(BaseModel):
    format: Literal["questions"] = "questions"
    questions: List[str] = []


Technical = Annotated[Union[TechnicalFocus, TechnicalQuestions], Field(discriminator="format")]


class InterviewQuestions(BaseModel):
    kind: Literal["questions"] = QUESTIONS
    schema_version: int = SCHEMA_VERSION
    behavioral: List[str] = []
    technical: Technical
    role_specific: List[str] = []
    company: List[str] = []
    model_config = _doc_config

    @model_validator(mode="before")
    @classmethod
    def upgrade_legacy(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        technical = data.get("technical")
        if isinstance(technical, list):
            data["technical"] = {"format": "questions", "questions": technical}
        elif isinstance(technical, dict) and "format" not in technical:
            data["technical"] = {"format": "focus", **technical}
        elif technical is None:
            data["technical"] = {"format": "focus"}
        if "role_specific" in data and "roleSpecific" not in data:
            data["roleSpecific"] = data.pop("role_specific")
        return data


# ---------- company research ----------
class CompanyOverview(BaseModel):
    industry: str
    size: str
    founded: str
    headquarters: str
    description: str


class CompanyCulture(BaseModel):
    values: List[str] = []
    work_environment: str = ""
    benefits: List[str] = []
    model_config = _doc_config


class InterviewProcess(BaseModel):
    rounds: List[str] = []
    timeline: str = ""
    tips: List[str] = []


class ReviewInsights(BaseModel):
    rating: Optional[str] = None
    pros: List[str] = []
    cons: List[str] = []


class CompanyResearch(BaseModel):
    kind: Literal["research"] = RESEARCH
    schema_version: int = SCHEMA_VERSION
    overview: CompanyOverview
    culture: CompanyCulture
    interview_process: InterviewProcess
    recent_news: List[str] = []
    glassdoor_insights: ReviewInsights
    model_config = _doc_config

    @model_validator(mode="before")
    @classmethod
    def coerce_rating(cls, data: Any) -> Any:
        if isinstance(data, dict):
            insights = data.get("glassdoorInsights")
            if isinstance(insights, dict) and isinstance(insights.get("rating"), (int, float)):
                data = dict(data)
                data["glassdoorInsights"] = {**insights, "rating": f"{insights['rating']:.1f}"}
        return data


# ---------- personalized prep ----------
class PersonalizedPrep(BaseModel):
    kind: Literal["prep"] = PREP
    schema_version: int = SCHEMA_VERSION
    tell_me_about_yourself: List[str] = []
    why_this_company: List[str] = []
    strength: List[str] = []
    weakness: List[str] = []
    questions_to_ask: List[str] = []
    salary_negotiation: List[str] = []
    model_config = _doc_config

    @model_validator(mode="before")
    @classmethod
    def paragraphs_to_lists(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name in cls.model_fields:
            for key in (name, to_camel(name)):
                if key in data and key not in ("kind", "schemaVersion", "schema_version"):
                    data[key] = _as_list(data[key])
        return data


ContentDocument = Union[InterviewQuestions, CompanyResearch, PersonalizedPrep]

DOCUMENT_MODELS = {
    QUESTIONS: InterviewQuestions,
    RESEARCH: CompanyResearch,
    PREP: PersonalizedPrep,
}


def load_document(kind: str, payload: Dict[str, Any]) -> ContentDocument:
    """Validate a stored or freshly generated payload into its canonical model."""
    return DOCUMENT_MODELS[kind].model_validate(payload)


def dump_document(doc: ContentDocument) -> Dict[str, Any]:
    return doc.model_dump(by_alias=True, mode="json")
