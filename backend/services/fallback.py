# fallback.py
"""Deterministic interview-prep content.

Used whenever the language model is unavailable or fails. Output has exactly the
same shape as the AI documents (see ``schemas/content.py``) and is selected by
the keyword flags in ``services/heuristics.py``. The only randomness is cosmetic
(founded year, funding round, growth figure, review rating) and comes from the
injected ``random.Random`` so tests can pin it.

This module is also the single home of the defaults the AI client uses when the
model returns unparseable JSON or leaves a section out.
"""
import random
from datetime import datetime, timezone
from typing import List, Optional

from schemas.content import (
    CompanyCulture,
    CompanyOverview,
    CompanyResearch,
    InterviewProcess,
    InterviewQuestions,
    PersonalizedPrep,
    ReviewInsights,
    TechnicalFocus,
)
from services.heuristics import RoleProfile

# ---------- per-field defaults shared with the AI client ----------

DEFAULT_QUESTIONS_TO_ASK = [
    "What does success look like in this role?",
    "Can you tell me about the team I'd be working with?",
    "What are the biggest challenges facing the team right now?",
    "How does this role contribute to the company's goals?",
    "What opportunities are there for professional development?",
]


def default_technical_focus() -> TechnicalFocus:
    return TechnicalFocus(
        focus_areas=["algorithms", "problem solving"],
        key_topics=["data structures", "coding fundamentals"],
        interview_style=["whiteboard coding", "behavioral discussion"],
        company_values=["clean code", "clear communication"],
        prep_recommendations=["Practice coding problems", "Review CS fundamentals"],
    )


def default_overview(company: str) -> dict:
    return {
        "industry": "Technology",
        "size": "Unknown",
        "founded": "Unknown",
        "headquarters": "Unknown",
        "description": f"{company} is a company in the industry.",
    }


def default_recent_news(company: str) -> List[str]:
    return [
        f"{company} continues to grow in the market",
        "Recent strategic initiatives show strong performance",
        "Company maintains competitive position in industry",
    ]


DEFAULT_VALUES = ["Innovation", "Excellence", "Collaboration"]
DEFAULT_WORK_ENVIRONMENT = "Professional work environment focused on results."
DEFAULT_ROUNDS = ["Phone Screen", "Technical Interview", "Final Round"]
DEFAULT_TIMELINE = "2-4 weeks"
DEFAULT_PROS = ["Good compensation", "Interesting work", "Professional growth"]
DEFAULT_CONS = ["Fast-paced environment", "High expectations"]

DEFAULT_PREP_SECTIONS = {
    "tell_me_about_yourself": ["Highlight relevant experience", "Connect background to role",
                               "Show enthusiasm for opportunity"],
    "why_this_company": ["Mention specific company research", "Align with company values",
                         "Explain role fit"],
    "strength": ["Choose role-relevant strength", "Provide concrete example", "Show measurable impact"],
    "weakness": ["Share honest weakness", "Explain improvement plan", "Demonstrate growth mindset"],
    "questions_to_ask": DEFAULT_QUESTIONS_TO_ASK,
    "salary_negotiation": ["Research market rates", "Wait for appropriate timing",
                           "Focus on total compensation package"],
}


# ---------- parse-failure documents ----------

def parse_failure_questions(company: str, position: str) -> InterviewQuestions:
    return InterviewQuestions(
        behavioral=[
            f"Tell me about a time you had to work with a difficult team member while working on a {position} project.",
            f"Describe a situation where you had to meet a tight deadline in your {position} role.",
            "How do you prioritize tasks when everything seems urgent?",
            "Give me an example of when you had to learn something completely new for your job.",
            "Tell me about a time you had to adapt to a significant change at work.",
        ],
        technical=TechnicalFocus(
            focus_areas=["General technical skills", "Problem solving", "System understanding"],
            key_topics=[f"Technologies relevant to {position}", "Debugging and troubleshooting",
                        "Best practices and methodologies"],
            interview_style=["Technical discussion", "Problem-solving scenarios", "Experience-based questions"],
            company_values=["Technical competency", "Learning mindset", "Problem-solving approach"],
            prep_recommendations=[f"Review {position} core technologies", "Practice explaining technical concepts",
                                  "Prepare examples of problem-solving"],
        ),
        role_specific=[
            f"What specifically interests you about the {position} role at {company}?",
            "How does this position align with your career goals?",
            f"What unique value would you bring to our {position} team?",
            f"What do you think will be the biggest challenges in this {position} role?",
            "How would you approach your first 90 days in this position?",
        ],
        company=[
            f"What attracts you to {company} specifically?",
            f"Why {company} over other companies in the same industry?",
            f"What do you know about {company}'s culture and values?",
            f"How do you see {company} evolving in the next few years?",
            f"What questions do you have about {company}'s products or services?",
        ],
    )


def parse_failure_research(company: str) -> CompanyResearch:
    return CompanyResearch(
        overview=CompanyOverview(
            industry="Technology",
            size="Mid-size company",
            founded="2000s",
            headquarters="United States",
            description=f"{company} is a growing company known for innovation and quality products/services.",
        ),
        culture=CompanyCulture(
            values=["Innovation", "Excellence", "Customer Focus"],
            work_environment="Collaborative environment that values professional growth and work-life balance.",
        ),
        interview_process=InterviewProcess(
            rounds=["Initial Screen", "Technical/Behavioral Interview", "Final Round"],
            timeline="2-3 weeks typical process",
        ),
        recent_news=[
            f"{company} continues expansion and growth",
            "Strong market performance in recent quarters",
            "Investment in new technologies and talent",
        ],
        glassdoor_insights=ReviewInsights(
            pros=["Competitive compensation", "Growth opportunities", "Good team culture"],
            cons=["Fast-paced environment", "High performance expectations"],
        ),
    )


def parse_failure_prep(company: str, position: str) -> PersonalizedPrep:
    return PersonalizedPrep(
        tell_me_about_yourself=[f"Highlight your {position} experience",
                                "Connect your background to this specific role",
                                f"Show genuine interest in {company}"],
        why_this_company=[f"Research {company}'s recent achievements",
                          "Mention specific company values that resonate",
                          "Explain why this role fits your career goals"],
        strength=["Choose a strength directly relevant to this position",
                  "Prepare a specific STAR method example",
                  "Quantify your impact where possible"],
        weakness=["Select a real weakness you're actively improving",
                  "Explain the steps you're taking to address it",
                  "Show progress you've already made"],
        questions_to_ask=list(DEFAULT_QUESTIONS_TO_ASK),
        salary_negotiation=["Research market rates for this position and location",
                            "Wait for them to bring up compensation first",
                            "Be prepared to discuss your value proposition"],
    )


class FallbackGenerator:
    """Templated stand-in for the AI client. Never raises, never touches the network."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    # ---------- interview questions ----------
    def interview_questions(self, company: str, position: str, location: Optional[str] = None,
                            job_type: Optional[str] = None) -> InterviewQuestions:
        p = RoleProfile.build(company, position, location, job_type)

        behavioral = [
            f"Tell me about a time you had to work with a difficult team member on a {position} project.",
            "Describe a situation where you had to meet a tight deadline. What did you cut and why?",
            "How do you prioritize tasks when everything seems urgent?",
        ]
        if p.startup:
            behavioral.append("Tell me about a time you delivered results with limited resources and unclear requirements.")
        else:
            behavioral.append("Describe how you got a decision made across several teams with competing priorities.")
        if p.manager:
            behavioral.append("Tell me about a time you had to deliver difficult feedback to someone on your team.")
        elif p.senior:
            behavioral.append("Describe a time you mentored a less experienced colleague. What changed for them?")
        else:
            behavioral.append("Give me an example of when you had to learn something completely new for your job.")
        if p.remote:
            behavioral.append("How do you keep a distributed team aligned when most communication is asynchronous?")

        return InterviewQuestions(
            behavioral=behavioral,
            technical=self._technical_focus(p),
            role_specific=self._role_questions(p),
            company=[
                f"What attracts you to {company} specifically?",
                f"Why {company} over other companies in the same space?",
                (f"How would you handle priorities shifting quickly as {company} grows?" if p.startup
                 else f"How would you make an impact inside an organization the size of {company}?"),
                f"Which of {company}'s products or services would you most like to work on, and why?",
            ],
        )

    def _technical_focus(self, p: RoleProfile) -> TechnicalFocus:
        if p.technical:
            focus = ["algorithms and data structures", "system design", "code quality"]
            topics = ["trees, graphs and hashing", "API and data model design", "testing and debugging"]
            if p.senior:
                focus.append("architecture trade-offs")
                topics.append("scaling and reliability of distributed systems")
            recommendations = ["Practice medium-difficulty coding problems out loud",
                               "Walk through one system you built end to end",
                               "Prepare a story about a production incident you resolved"]
        elif p.design:
            focus = ["portfolio review", "design process", "user research"]
            topics = ["interaction patterns", "accessibility", "design systems"]
            recommendations = ["Pick two portfolio projects and rehearse the problem-to-outcome story",
                               "Be ready for a live design critique",
                               "Bring metrics that show the impact of your designs"]
        elif p.manager:
            focus = ["people leadership", "planning and execution", "stakeholder management"]
            topics = ["hiring and performance management", "roadmapping", "cross-team communication"]
            recommendations = ["Prepare examples of growing and retaining team members",
                               "Explain how you set and track team goals",
                               "Describe how you handle underperformance"]
        else:
            focus = ["role fundamentals", "problem solving", "communication"]
            topics = [f"tools and methods used by a {p.position}", "case-style problems", "working with data"]
            recommendations = [f"Review the core skills listed for the {p.position} role",
                               "Practice structuring answers to open-ended problems",
                               "Prepare examples with measurable results"]

        if p.startup:
            style = ["take-home assignment", "pair session with the team", "founder conversation"]
            values = ["ownership", "speed of execution", "pragmatism"]
        else:
            style = ["structured interview loop", "panel interview", "case or whiteboard exercise"]
            values = ["clear communication", "collaboration", "consistent quality"]
        if p.remote:
            style.append("video interviews with shared documents or editor")

        return TechnicalFocus(
            focus_areas=focus,
            key_topics=topics,
            interview_style=style,
            company_values=values,
            prep_recommendations=recommendations,
        )

    def _role_questions(self, p: RoleProfile) -> List[str]:
        questions = [
            f"Why are you interested in the {p.position} role?",
            f"What will be the biggest challenges in this {p.position} role, and how would you approach them?",
            "How would you approach your first 90 days in this position?",
        ]
        if p.technical:
            questions.append("Walk me through a technical decision you made that you would make differently today.")
        elif p.design:
            questions.append("How do you handle feedback from stakeholders that conflicts with user research?")
        if p.manager:
            questions.append("How do you decide what your team should not work on?")
        elif p.senior:
            questions.append("How do you raise the bar for the people around you without becoming a bottleneck?")
        else:
            questions.append("How do you collaborate with people in other roles to ship your work?")
        return questions

    # ---------- company research ----------
    def company_research(self, company: str, position: str, location: Optional[str] = None,
                         job_type: Optional[str] = None) -> CompanyResearch:
        p = RoleProfile.build(company, position, location, job_type)
        where = location or "Multiple locations"
        rng = self.rng

        founded = f"20{18 + rng.randrange(6)}" if p.startup else str(1990 + rng.randrange(20))
        industry = p.industry

        description = (
            f"{company} is a {'fast-growing startup' if p.startup else 'well-established company'} "
            f"in the {industry.lower()} space, known for "
            f"{'innovative solutions and rapid growth' if p.startup else 'market leadership and stability'}. "
            f"The company focuses on "
            f"{'cutting-edge technology solutions' if p.technical else 'delivering exceptional value to clients'} "
            f"and has built a reputation for "
            f"{'disrupting traditional approaches' if p.startup else 'consistent excellence and reliability'}."
        )
        environment = (
            f"{company} offers a {'dynamic, fast-paced' if p.startup else 'structured yet flexible'} work "
            f"environment where "
            f"{'creativity and initiative are highly valued' if p.startup else 'professional growth and work-life balance are prioritized'}. "
            f"The culture emphasizes "
            f"{'rapid iteration, bold ideas, and personal ownership' if p.startup else 'teamwork, strategic thinking, and sustainable growth'}. "
        )
        if p.remote:
            environment += "With a remote-first approach, the company has built strong virtual collaboration practices."
        else:
            environment += f"The {where} office features modern amenities and collaborative spaces."

        if p.startup:
            values = ["Innovation First", "Move Fast", "Own Your Impact", "Radical Transparency", "Customer Obsession"]
            benefits = ["Competitive equity packages", "Unlimited PTO policy",
                        "Top-tier health, dental, and vision insurance", "$1,500 annual learning budget",
                        "Remote work flexibility", "Latest tech equipment", "Monthly wellness stipend"]
        else:
            values = ["Integrity", "Excellence", "Collaboration", "Customer Success", "Continuous Learning"]
            benefits = ["Comprehensive health benefits", "401(k) with 6% match", "20 days PTO + holidays",
                        "Professional development programs", "Tuition reimbursement",
                        "Employee stock purchase plan", "Wellness programs"]

        if p.technical:
            rounds = [
                "Initial recruiter screen (30 min) - Culture fit and basic qualifications",
                "Technical phone screen (45 min) - Coding or system design basics",
                "Take-home assignment (2-4 hours) - Real-world problem solving",
                f"On-site/Virtual loop (4-5 hours) - Technical deep dive with the {position} team, "
                "system design with senior engineers, behavioral interview with the hiring manager",
                f"Final interview with {'founder/CTO' if p.startup else 'department head'} (30 min)",
            ]
        else:
            rounds = [
                f"HR phone screen (30 min) - Background and interest in {company}",
                "Hiring manager interview (45 min) - Role-specific discussion",
                "Team interviews (2-3 hours) - Meet potential colleagues",
                "Case study or presentation (if applicable)",
                "Final round with leadership (30-45 min)",
            ]

        tips = [
            f"Research {company}'s recent "
            f"{'funding rounds and product launches' if p.startup else 'quarterly reports and strategic initiatives'}",
            f"Prepare specific examples that demonstrate "
            f"{'technical problem-solving and system thinking' if p.technical else 'business impact and leadership'}",
            f"Show genuine interest in {company}'s "
            f"{'mission to disrupt the industry' if p.startup else 'long-term vision and values'}",
            f"Ask thoughtful questions about "
            f"{'growth trajectory and technical challenges' if p.startup else 'team dynamics and career development'}",
            f"Be ready to discuss why {company} specifically, not just the role",
        ]

        if p.startup:
            headline = (f"{company} raises ${20 + rng.randrange(80)}M in Series "
                        f"{rng.choice(['A', 'B', 'C'])} funding to accelerate growth")
            expansion = (f"{company} expands team by 50% and opens new "
                         f"{'engineering hub' if where != 'Multiple locations' else 'office in ' + where}")
        else:
            headline = f"{company} reports strong Q4 results with {10 + rng.randrange(20)}% year-over-year growth"
            expansion = f"{company} recognized as a 'Best Place to Work' in {datetime.now(timezone.utc).year}"
        news = [
            headline,
            f"{company} launches new {'AI-powered platform' if p.technical else 'strategic initiative'} to enhance "
            f"{'developer productivity' if p.technical else 'customer experience'}",
            expansion,
            f"{company} partners with {'major enterprise clients' if p.startup else 'innovative startups'} "
            "to expand market reach",
        ]

        if p.startup:
            rating = 3.8 + rng.random() * 0.6
            pros = ["Cutting-edge technology and interesting problems", "Smart, passionate colleagues",
                    "High growth potential and learning opportunities", "Flexible work arrangements",
                    "Strong equity compensation"]
            cons = ["Fast-paced environment can be stressful", "Priorities can shift quickly",
                    "Work-life balance during crunch times", "Growing pains as company scales"]
        else:
            rating = 3.9 + rng.random() * 0.8
            pros = ["Stable company with good work-life balance", "Excellent benefits and compensation",
                    "Professional development opportunities", "Collaborative team environment",
                    "Clear career progression paths"]
            cons = ["Can be slow to adopt new technologies", "Large company bureaucracy",
                    "Limited remote work options in some teams", "Promotion process can be lengthy"]

        return CompanyResearch(
            overview=CompanyOverview(
                industry=industry,
                size=p.company_size,
                founded=founded,
                headquarters=where,
                description=description,
            ),
            culture=CompanyCulture(values=values, work_environment=environment, benefits=benefits),
            interview_process=InterviewProcess(
                rounds=rounds,
                timeline=f"{'1-2 weeks' if p.startup else '2-4 weeks'} from initial contact to offer. "
                         f"{company} aims to move quickly while ensuring thorough evaluation.",
                tips=tips,
            ),
            recent_news=news,
            glassdoor_insights=ReviewInsights(rating=f"{rating:.1f}", pros=pros, cons=cons),
        )

    # ---------- personalized prep ----------
    def personalized_prep(self, company: str, position: str, location: Optional[str] = None,
                          job_type: Optional[str] = None,
                          salary_range: Optional[str] = None) -> PersonalizedPrep:
        p = RoleProfile.build(company, position, location, job_type)
        tech = p.technical

        tell_me = [
            f"I'm a {position} with {p.experience} of experience specializing in {p.skill_area}.",
            "Currently, I'm focusing on "
            + ("building scalable solutions and mentoring junior developers." if tech
               else "driving results and collaborating with cross-functional teams."),
            "In my recent role, I "
            + ("led the development of a key feature that improved system performance by 40%." if tech
               else "spearheaded a project that increased team productivity by 30%."),
            f"I'm excited about the opportunity at {company} because "
            + ("I thrive in fast-paced environments where I can make a direct impact." if p.startup
               else "I want to contribute to a company with such a strong reputation for innovation and excellence."),
        ]
        if p.manager:
            tell_me.append("Most of my recent impact has come through the people I lead and the processes we built together.")

        why_company = [
            f"Your work in {'cutting-edge technology' if tech else 'industry leadership'} aligns with my "
            f"experience in {p.skill_area}.",
            "I'm particularly impressed by "
            + ("your rapid growth and innovative approach to solving real-world problems." if p.startup
               else "your commitment to excellence and your track record of successful projects."),
            "Your culture of "
            + ("innovation, agility, and ownership" if p.startup else "collaboration, integrity, and continuous learning")
            + " resonates strongly with my professional values.",
            f"This {position} role offers the opportunity to "
            + ("lead strategic initiatives and mentor the next generation of talent." if p.senior
               else "grow my skills while making meaningful contributions to impactful projects."),
        ]

        if tech:
            strength = [
                "My greatest strength is architecting solutions that balance technical excellence with business needs.",
                "In my last role, I designed a microservices architecture that reduced deployment time by 60% "
                "while improving system reliability.",
                "I worked closely with product managers so the solution met both technical requirements "
                "and business objectives.",
            ]
            weakness = [
                "I've been working on balancing perfectionism with delivery speed.",
                "I've implemented time-boxing and regular code reviews to keep quality high while maintaining velocity.",
                "This has helped me ship features faster while maintaining high standards.",
            ]
        else:
            strength = [
                "My greatest strength is building relationships and driving results through effective collaboration.",
                "I recently led a cross-functional project that required aligning multiple stakeholders "
                "with competing priorities.",
                "By establishing clear communication channels and focusing on shared goals, we delivered "
                "the project 20% ahead of schedule.",
            ]
            weakness = [
                "I've been working on delegating more effectively.",
                "I now use a structured approach to delegation, with clear specifications and regular check-ins.",
                "This has helped me build stronger team capacity while ensuring quality outcomes.",
            ]
        strength.append(
            f"This would be valuable at {company} because "
            + ("in a fast-growing company, the ability to balance multiple priorities and think systemically is crucial."
               if p.startup else
               "success in complex organizations requires both technical competence and strong collaborative skills.")
        )

        questions = [
            f"What does success look like in this {position} role in the first 90 days?",
            "What are the biggest challenges facing the team right now?",
            "Can you tell me about the team I'd be working with and how this role fits into the broader organization?",
            f"What opportunities for professional growth and learning does {company} offer?",
            f"How does {company} approach "
            + ("code quality and technical debt?" if tech else "performance management and career development?"),
            f"What do you enjoy most about working at {company}?",
        ]
        if p.remote:
            questions.append("How does the team collaborate across time zones?")
        else:
            questions.append("How has the company culture evolved as you've grown?")

        salary = [
            f"Based on market rates for {position} roles in {location or 'this area'} and my {p.experience} "
            f"of experience, I'm looking for a total compensation package in the {salary_range or '$80k-$120k'} range.",
            "I'm particularly interested in "
            + ("the equity opportunity and the chance to grow with the company." if p.startup
               else "the comprehensive benefits package and long-term career growth potential."),
            "I'm open to discussing the full compensation structure to find a package that works for both of us.",
        ]

        return PersonalizedPrep(
            tell_me_about_yourself=tell_me,
            why_this_company=why_company,
            strength=strength,
            weakness=weakness,
            questions_to_ask=questions,
            salary_negotiation=salary,
        )
