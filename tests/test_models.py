"""Tests for the data models."""

import pytest
from pydantic import ValidationError

from smartmatcher.models import (
    Availability,
    ConsultantProfile,
    JobDescription,
    JobDescriptionInput,
    LoginCredentials,
    Match,
    UserRole,
    WorkflowStatus,
    humanize_step,
    summary_label,
)


class TestJobDescription:
    def test_backend_nulls_coerced(self):
        job = JobDescription.model_validate(
            {"id": 1, "title": "QA", "department": None, "skills": None}
        )
        assert job.department == ""
        assert job.skills == []

    def test_comma_separated_skills(self):
        job = JobDescription(title="QA", skills="Python, Selenium ,")
        assert job.skills == ["Python", "Selenium"]

    def test_pending_and_created_date(self, sample_job):
        assert sample_job.is_pending
        assert sample_job.created_date == "2024-03-01"
        assert JobDescription(title="x").created_date == ""

    def test_input_payload(self):
        payload = JobDescriptionInput(
            title="T",
            department="D",
            location="L",
            description="Long enough text",
            skills=["Go"],
            experience="2 years",
        ).to_payload()
        assert payload["skills"] == ["Go"]
        assert "id" not in payload


class TestWorkflow:
    @pytest.mark.parametrize(
        "steps, label",
        [
            (None, "Pending"),
            ({}, "Pending"),
            ({"jd_parsed": True}, "In Progress"),
            ({"jd_parsed": True, "profiles_ranked": True}, "Matches Found"),
            ({"notification_sent": True}, "Completed"),
            ({"jd_parsed": False, "profiles_compared": False}, "Pending"),
        ],
    )
    def test_summary_label(self, steps, label):
        assert summary_label(steps) == label

    def test_humanize_step(self):
        assert humanize_step("jd_parsed") == "Jd parsed"
        assert humanize_step("notification_sent") == "Notification sent"

    def test_flat_steps_collected(self):
        status = WorkflowStatus.model_validate(
            {
                "id": 1,
                "job_description_id": 7,
                "profiles_ranked": True,
                "jd_parsed": True,
                "unrelated": "x",
            }
        )
        assert status.steps == {"profiles_ranked": True, "jd_parsed": True}
        assert status.ordered_steps() == [("jd_parsed", True), ("profiles_ranked", True)]
        assert status.belongs_to("7")
        assert status.label == "Matches Found"

    def test_extra_steps_after_known_ones(self):
        status = WorkflowStatus(steps={"custom": False, "notification_sent": True})
        assert status.ordered_steps() == [("notification_sent", True), ("custom", False)]


class TestConsultantProfile:
    def test_payload_omits_empty_and_backend_fields(self, sample_consultant):
        payload = sample_consultant.model_copy(update={"phone": None}).to_payload()
        assert "id" not in payload
        assert "created_at" not in payload
        assert "phone" not in payload
        assert payload["availability"] == "available"

    def test_negative_experience_rejected(self):
        with pytest.raises(ValidationError):
            ConsultantProfile(name="A", email="a@b.co", experience=-1)

    def test_initials(self, sample_consultant):
        assert sample_consultant.initials == "AL"

    def test_availability_str(self):
        assert str(Availability.BUSY) == "busy"


class TestMatch:
    def test_consultant_alias(self):
        match = Match.model_validate(
            {"similarity_score": 0.91, "consultant": {"name": "Grace", "skills": ["COBOL"]}}
        )
        assert match.profile.name == "Grace"

    @pytest.mark.parametrize(
        "score, percent, tier",
        [(0.95, 95, "high"), (0.9, 90, "high"), (0.8, 80, "good"), (0.75, 75, "good"), (0.5, 50, "fair")],
    )
    def test_score_tiers(self, score, percent, tier):
        match = Match(similarity_score=score)
        assert match.score_percent == percent
        assert match.score_tier == tier

    def test_score_out_of_range(self):
        with pytest.raises(ValidationError):
            Match(similarity_score=1.5)


def test_login_form_fields():
    creds = LoginCredentials(email="r@x.io", password="pw")
    assert creds.to_form() == {"username": "r@x.io", "password": "pw"}


def test_user_roles():
    assert UserRole(1) is UserRole.RECRUITER
    assert UserRole(2) is UserRole.AR
