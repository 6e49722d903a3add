"""Tests for profile records and HealthProfileSummary."""

import pytest
from pydantic import ValidationError

from nutriscan_api.models.profile import HealthProfileSummary, ProfileRecord


def test_none_profile_is_empty():
    summary = HealthProfileSummary.from_profile(None, 2025)

    assert summary.is_empty
    assert summary.to_text() == ""


def test_record_without_facts_is_empty():
    record = ProfileRecord(id="u1", full_name="Budi", health_condition="  ", health_conditions=[])

    summary = HealthProfileSummary.from_profile(record, 2025)

    assert summary.is_empty
    assert summary.to_text() == ""


def test_conditions_merge_list_and_legacy_field():
    record = ProfileRecord(
        id="u1",
        health_conditions=["Diabetes", "Hipertensi"],
        health_condition="Hipertensi, Asam urat ,,",
    )

    assert record.all_health_conditions() == ["Diabetes", "Hipertensi", "Asam urat"]


def test_legacy_field_alone():
    record = ProfileRecord(id="u1", health_condition="Maag")

    summary = HealthProfileSummary.from_profile(record, 2025)

    assert summary.conditions == ("Maag",)
    assert not summary.is_empty


def test_age_and_gender(diabetic_profile):
    summary = HealthProfileSummary.from_profile(diabetic_profile, 2025)

    assert summary.age == 35
    assert summary.gender == "Perempuan"


def test_implausible_birth_year_is_ignored():
    record = ProfileRecord(id="u1", birth_year=2090, health_conditions=["Diabetes"])

    assert HealthProfileSummary.from_profile(record, 2025).age is None


def test_unknown_gender_code():
    record = ProfileRecord(id="u1", gender="other")

    assert HealthProfileSummary.from_profile(record, 2025).gender == "Lainnya"


def test_to_text_one_fact_per_line(diabetic_profile):
    text = HealthProfileSummary.from_profile(diabetic_profile, 2025).to_text()

    assert text.splitlines() == [
        "Riwayat penyakit: Diabetes",
        "Alergi makanan: Kacang",
        "Usia: 35 tahun",
        "Jenis kelamin: Perempuan",
    ]


def test_summary_is_immutable(diabetic_profile):
    summary = HealthProfileSummary.from_profile(diabetic_profile, 2025)

    with pytest.raises(ValidationError):
        summary.conditions = ("Lain",)
