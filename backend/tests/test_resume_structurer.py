"""Tests for the resume structuring engine."""

from models.schemas.resume_record import PartialResumeRecord, ResumeRecord
from services.resume_structurer import (
    extract_education,
    extract_experience,
    extract_skills,
    structure,
)
from services.section_parser import PRESENT, clean_lines, current_year


SAMPLE_RESUME = """John Doe
john.doe@email.com | (555) 123-4567
linkedin.com/in/johndoe | github.com/johndoe

Summary
Experienced software engineer building web applications.

Experience
Senior Software Engineer | TechCorp | 2021 - Present
• Built REST APIs serving 1M requests/day
• Led team of 5 engineers

Software Engineer at StartupXYZ, 2019 - 2021
• Developed React frontend components
• Implemented CI/CD pipelines

Education
B.S. Computer Science | State University | 2019

Skills
Python, JavaScript, React, Docker, AWS, PostgreSQL, Git
"""


class TestStructureText:
    def test_contact(self):
        record = structure(SAMPLE_RESUME)
        assert record.contact.name == "John Doe"
        assert record.contact.email == "john.doe@email.com"
        assert record.contact.phone == "(555) 123-4567"
        assert "github.com/johndoe" in record.contact.links

    def test_skills_are_canonical_and_unique(self):
        record = structure(SAMPLE_RESUME)
        assert {"python", "javascript", "react", "docker", "aws", "postgresql", "git", "cicd"} <= set(
            record.skills
        )
        assert len(record.skills) == len(set(record.skills))

    def test_experience_inline_headers(self):
        record = structure(SAMPLE_RESUME)
        assert len(record.experience) == 2

        first, second = record.experience
        assert first.title == "Senior Software Engineer"
        assert first.company == "TechCorp"
        assert first.period_start == "2021"
        assert first.period_end == PRESENT
        assert first.duration_years == current_year() - 2021

        assert second.title == "Software Engineer"
        assert second.company == "StartupXYZ"
        assert second.duration_years == 2

    def test_education(self):
        record = structure(SAMPLE_RESUME)
        assert len(record.education) == 1
        edu = record.education[0]
        assert edu.degree == "B.S. Computer Science"
        assert edu.institution == "State University"
        assert edu.year == "2019"
        assert edu.level == 1


def test_structure_empty_text_defaults():
    record = structure("")
    assert record == ResumeRecord()
    assert record.contact.name == "Unknown"
    assert record.contact.email == "N/A"
    assert record.contact.phone == "N/A"
    assert record.skills == []
    assert record.experience == []
    assert record.education == []


def test_structure_none_and_blank_text():
    assert structure(None) == ResumeRecord()
    assert structure("   \n\n  ") == ResumeRecord()


def test_structure_no_contact_patterns():
    record = structure("Curriculum Vitae\nSkills\nPython, Django")
    assert record.contact.name == "Unknown"
    assert record.contact.email == "N/A"
    assert record.contact.phone == "N/A"
    assert record.skills == ["python", "django"]


def test_experience_date_first_layout():
    lines = clean_lines("""Work History
2018 - 2020
Data Analyst, Acme Corp
- Built dashboards
2020 - present
Data Scientist, Beta Inc
""")
    entries = extract_experience(lines)
    assert [(e.title, e.company) for e in entries] == [
        ("Data Analyst", "Acme Corp"),
        ("Data Scientist", "Beta Inc"),
    ]
    assert entries[0].duration_years == 2
    assert entries[1].period_end == PRESENT


def test_experience_header_before_dates():
    lines = clean_lines("""Experience
Backend Engineer at X
2019 - 2023
Frontend Developer at Y
2016 – 2019
""")
    entries = extract_experience(lines)
    assert [(e.title, e.company, e.duration_years) for e in entries] == [
        ("Backend Engineer", "X", 4),
        ("Frontend Developer", "Y", 3),
    ]


def test_experience_stops_at_education():
    lines = clean_lines("""Experience
Engineer at X, 2019-2020
Education
B.S. Physics, 2015-2019
""")
    entries = extract_experience(lines)
    assert len(entries) == 1


def test_education_year_on_following_line():
    lines = clean_lines("""Education
Master of Science in Computer Science
Stanford University, 2017
""")
    entries = extract_education(lines)
    assert len(entries) == 1
    assert entries[0].degree == "Master of Science in Computer Science"
    assert entries[0].institution == "Stanford University"
    assert entries[0].year == "2017"
    assert entries[0].level == 2


def test_education_doctorate_level():
    entries = extract_education(clean_lines("Education\nPh.D. Physics, MIT, 2020"))
    assert entries[0].level == 3
    assert entries[0].institution == "MIT"


def test_extract_skills_ignores_ambiguous_words_in_prose():
    skills = extract_skills(["We will go over the next steps to rest and express our swift thanks today"])
    assert skills == []


def test_extract_skills_accepts_ambiguous_words_in_lists():
    skills = extract_skills(["Go, Rust, C, Node.js"])
    assert skills == ["nodejs", "go", "rust", "c"]


def test_extract_skills_symbol_variants():
    skills = extract_skills(["Worked with C# and .NET, C++ and ci/cd in production systems daily"])
    assert "csharp" in skills
    assert "cpp" in skills
    assert "cicd" in skills


class TestPreStructured:
    def test_pass_through_with_defaults(self):
        payload = {
            "contact": {"email": "a@b.co"},
            "skills": ["Python", "python", " React ", ""],
            "experience": [{"title": "Dev", "company": "X", "years": "2019 - 2023"}],
            "education": [{"degree": "M.S. Computer Science", "school": "MIT", "year": "2020"}],
        }
        record = structure("ignored text with Java", payload)

        assert record.skills == ["Python", "React"]
        assert record.contact.name == "Unknown"
        assert record.contact.email == "a@b.co"
        assert record.contact.phone == "N/A"

        exp = record.experience[0]
        assert (exp.period_start, exp.period_end, exp.duration_years) == ("2019", "2023", 4)

        edu = record.education[0]
        assert edu.institution == "MIT"
        assert edu.level == 2

    def test_partial_model_accepted(self):
        record = structure(None, PartialResumeRecord(skills=["Go"]))
        assert record.skills == ["Go"]
        assert record.experience == []
        assert record.education == []

    def test_duration_derived_not_taken_from_input(self):
        payload = {
            "skills": ["Go"],
            "experience": [{"title": "Dev", "years": "Jan 2020 - Present", "duration": 99}],
        }
        exp = structure(None, payload).experience[0]
        assert exp.period_end == PRESENT
        assert exp.duration_years == current_year() - 2020
        assert exp.company == "Unknown"

    def test_missing_period(self):
        exp = structure(None, {"skills": ["Go"], "experience": [{"title": "Dev"}]}).experience[0]
        assert exp.period_start == "N/A"
        assert exp.duration_years == 0

    def test_empty_skills_falls_back_to_text(self):
        record = structure("Skills\nPython, Docker", {"skills": [], "contact": {"name": "X"}})
        assert record.skills == ["python", "docker"]

    def test_malformed_payload_returns_default_record(self):
        assert structure("Python developer", {"skills": 42}) == ResumeRecord()
