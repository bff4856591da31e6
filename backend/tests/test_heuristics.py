import pytest

from services.heuristics import (
    RoleProfile,
    is_design_role,
    is_manager,
    is_remote,
    is_senior,
    is_startup,
    is_technical_role,
)


@pytest.mark.parametrize(
    "company,expected",
    [
        ("AI Labs", True),                       # keyword and short
        ("Global Enterprises Corp", False),
        ("Stripe", True),                        # shorter than 10 characters
        ("Bloomberg LP", False),
        ("Brainstorm Studios", True),            # "ai" inside "Brainstorm"
        ("Enterprise Solutions", True),          # "io" inside "Solutions"
        ("Johnson & Johnson", False),
        ("Northwind Traders", False),
        ("NORTHWIND LABS", True),
    ],
)
def test_is_startup(company, expected):
    assert is_startup(company) is expected


def test_is_startup_length_boundary():
    assert is_startup("Abcdefghj") is True       # 9 characters
    assert is_startup("Abcdefghjk") is False     # 10 characters


@pytest.mark.parametrize(
    "position,expected",
    [
        ("Software Engineer", True),
        ("Frontend Developer", True),
        ("Solutions Architect", True),
        ("Data Analyst", True),
        ("Account Executive", False),
        ("Product Manager", False),
    ],
)
def test_is_technical_role(position, expected):
    assert is_technical_role(position) is expected


def test_seniority_and_management():
    assert is_senior("Senior Designer")
    assert is_senior("Tech Lead")
    assert not is_senior("Junior Analyst")
    assert is_manager("Engineering Manager")
    assert is_manager("Director of Sales")
    assert not is_manager("Staff Engineer")


def test_design_role_matches_ux_and_ui():
    assert is_design_role("Product Designer")
    assert is_design_role("UX Researcher")
    assert is_design_role("UI Engineer")
    assert not is_design_role("Account Executive")


@pytest.mark.parametrize(
    "job_type,location,expected",
    [
        ("Remote", None, True),
        ("remote", None, False),                 # job type must match exactly
        ("Full-time", "Remote - US", True),
        (None, "Berlin (remote friendly)", True),
        ("Full-time", "Austin, TX", False),
        (None, None, False),
    ],
)
def test_is_remote(job_type, location, expected):
    assert is_remote(job_type, location) is expected


def test_role_profile_derived_values():
    big = RoleProfile.build("Global Enterprises Corp", "Senior Marketing Lead")
    assert big.startup is False
    assert big.company_size == "5000+ employees"
    assert big.industry == "Marketing & Advertising"
    assert big.skill_area == "marketing"
    assert big.experience == "5+ years"

    small = RoleProfile.build("Acme Labs", "Data Engineer", location="Remote")
    assert small.company_size == "50-200 employees"
    assert small.industry == "Technology"
    assert small.skill_area == "software development"
    assert small.remote is True

    assert RoleProfile.build("Wayne Corp", "Nurse").company_size == "1000-5000 employees"
    assert RoleProfile.build("Wonderland", "Nurse").company_size == "200-1000 employees"
