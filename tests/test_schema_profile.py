import pytest
from pydantic import ValidationError

from schema_profile import Education, MediaFile, UserProfile, WorkExperience


def test_date_ranges():
    job = WorkExperience(position="Dev", company="X", start_month="03", start_year="2019",
                         end_month="12", end_year="2021", bullets=["a"])
    assert job.date_range() == "03/2019 - 12/2021"

    ongoing = WorkExperience(position="Dev", company="X", start_month="03", start_year="2019",
                             end_month="12", end_year="2021", is_present=True, bullets=["a"])
    assert ongoing.end_month is None
    assert ongoing.date_range() == "03/2019 - Present"

    legacy = Education(school="MIT", degree="BSc", duration="2014 - 2018", start_year="")
    assert legacy.date_range() == "2014 - 2018"


def test_blank_bullets_are_rejected():
    with pytest.raises(ValidationError):
        WorkExperience(position="Dev", company="X", bullets=["  ", ""])


def test_profile_requires_name():
    with pytest.raises(ValidationError):
        UserProfile(name="   ")


def test_skills_deduplicated_in_order():
    p = UserProfile(name="A", skills=["Go", " python ", "go", "Python", ""])
    assert p.skills == ["Go", "python"]


def test_education_count():
    assert UserProfile(name="A").education_count == 0
    assert UserProfile(name="A", education="BSc").education_count == 1
    assert UserProfile(name="A", education=[{"school": "MIT", "degree": "BSc"}]).education_count == 1


def test_profile_is_frozen(profile):
    with pytest.raises(ValidationError):
        profile.name = "Other"


def test_media_filename_is_reduced_to_a_bare_name():
    assert MediaFile(filename="../../etc/passwd").filename == "passwd"
    assert MediaFile(filename="me.png").asset_path == "assets/me.png"
    with pytest.raises(ValidationError):
        MediaFile(filename="..")
