# heuristics.py
"""Keyword classification of a company/position pair.

These flags pick between the phrase variants of the fallback generator. They
are plain substring tests on lower-cased input.
"""
from dataclasses import dataclass
from typing import Optional


def _contains_any(text: Optional[str], words) -> bool:
    lowered = (text or "").lower()
    return any(w in lowered for w in words)


def is_startup(company: str) -> bool:
    return _contains_any(company, ("labs", "ai", "io")) or len(company or "") < 10


def is_technical_role(position: str) -> bool:
    return _contains_any(position, ("engineer", "developer", "architect", "data"))


def is_senior(position: str) -> bool:
    return _contains_any(position, ("senior", "lead"))


def is_manager(position: str) -> bool:
    return _contains_any(position, ("manager", "director"))


def is_design_role(position: str) -> bool:
    return _contains_any(position, ("design", "ux", "ui"))


def is_remote(job_type: Optional[str], location: Optional[str]) -> bool:
    return job_type == "Remote" or _contains_any(location, ("remote",))


@dataclass(frozen=True)
class RoleProfile:
    company: str
    position: str
    location: Optional[str]
    job_type: Optional[str]
    startup: bool
    technical: bool
    senior: bool
    manager: bool
    design: bool
    remote: bool

    @classmethod
    def build(cls, company: str, position: str, location: Optional[str] = None,
              job_type: Optional[str] = None) -> "RoleProfile":
        return cls(
            company=company,
            position=position,
            location=location,
            job_type=job_type,
            startup=is_startup(company),
            technical=is_technical_role(position),
            senior=is_senior(position),
            manager=is_manager(position),
            design=is_design_role(position),
            remote=is_remote(job_type, location),
        )

    @property
    def company_size(self) -> str:
        if self.startup:
            return "50-200 employees"
        if len(self.company) > 15:
            return "5000+ employees"
        if " " in self.company:
            return "1000-5000 employees"
        return "200-1000 employees"

    @property
    def industry(self) -> str:
        if self.technical:
            return "Technology"
        pos = self.position.lower()
        for word, label in (
            ("sales", "Sales & Business Development"),
            ("marketing", "Marketing & Advertising"),
            ("finance", "Financial Services"),
            ("healthcare", "Healthcare"),
        ):
            if word in pos:
                return label
        return "Professional Services"

    @property
    def skill_area(self) -> str:
        if self.technical:
            return "software development"
        pos = self.position.lower()
        if "design" in pos:
            return "design"
        if "sales" in pos:
            return "sales"
        if "marketing" in pos:
            return "marketing"
        return "your field"

    @property
    def experience(self) -> str:
        return "5+ years" if self.senior else "3-5 years"
