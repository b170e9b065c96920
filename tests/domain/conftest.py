"""Pytest configuration for domain package tests."""

import pytest

from resume_ats.domain.schemas import ResumeDocument

SAMPLE_RESUME_TEXT = (
    "Jane Doe\nSenior Software Engineer\njane@example.com\n\n"
    "Experience\nAcme Corp - Software Engineer (2019 - 2023)\n"
    "- Built data pipelines in Python processing millions of events per day.\n"
    "- Led migration of a monolith to services on Kubernetes.\n\n"
    "Education\nState University - BSc Computer Science, 2018\n\n"
    "Skills\nPython, SQL, Docker, Kubernetes, AWS\n"
)


@pytest.fixture
def resume_text() -> str:
    assert len(SAMPLE_RESUME_TEXT) >= 200
    return SAMPLE_RESUME_TEXT


@pytest.fixture
def sample_document() -> ResumeDocument:
    return ResumeDocument.model_validate({
        "header": {
            "name": "Jane Doe",
            "title": "Senior Software Engineer",
            "location": "Berlin, Germany",
            "phone": "+49 123 456",
            "email": "jane@example.com",
            "linkedin": "linkedin.com/in/janedoe",
            "links": ["github.com/janedoe"],
        },
        "summary": "Backend engineer with eight years of experience building data platforms.",
        "skills": [
            {"group": "Languages", "items": ["Python", "SQL", "Go"]},
            {"group": "Infrastructure", "items": ["Docker", "Kubernetes", "AWS"]},
        ],
        "experience": [
            {
                "company": "Acme Corp",
                "role": "Software Engineer",
                "start": "2019",
                "end": "2023",
                "bullets": [
                    "Built event pipelines processing 40M records per day",
                    "Cut deployment time by 60% with a CI rewrite",
                ],
                "tech": ["Python", "Kafka"],
            }
        ],
        "projects": [
            {
                "name": "Ledger",
                "description": "Open-source double-entry accounting library.",
                "bullets": ["Reached 1k GitHub stars"],
                "tech": ["Rust"],
            }
        ],
        "education": [
            {"school": "State University", "degree": "BSc Computer Science", "year": "2018", "cgpa": "3.8"}
        ],
        "certifications": ["AWS Certified Solutions Architect"],
    })
