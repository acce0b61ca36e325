"""
Per-step validation rules for the form wizard.

Each step gets its own pydantic model; ``validate_step`` runs the model for
the given step and turns pydantic's errors into short messages the wizard can
show under the form.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

STEPS = [
    {"id": 1, "title": "Basic Info", "description": "Tell us about yourself"},
    {"id": 2, "title": "Work History", "description": "Your professional experience"},
    {"id": 3, "title": "Projects", "description": "Showcase your work"},
    {"id": 4, "title": "Skills & Education", "description": "Your expertise and background"},
    {"id": 5, "title": "Media", "description": "Upload photos and videos (optional)"},
    {"id": 6, "title": "Reference Site", "description": "Inspiration for your design"},
]
TOTAL_STEPS = len(STEPS)

MONTHS = [
    ("01", "January"), ("02", "February"), ("03", "March"), ("04", "April"),
    ("05", "May"), ("06", "June"), ("07", "July"), ("08", "August"),
    ("09", "September"), ("10", "October"), ("11", "November"), ("12", "December"),
]

MAX_IMAGE_BYTES = 10 * 1024 * 1024  # "PNG, JPG, GIF up to 10MB each"

_URL = TypeAdapter(HttpUrl)


def year_options(start_year: Optional[int] = None) -> List[str]:
    """Years from five ahead of now back to `start_year` (default: 50 years ago)."""
    current = date.today().year
    start_year = current - 50 if start_year is None else start_year
    return [str(y) for y in range(current + 5, start_year - 1, -1)]


def _optional_url(v: Optional[str]) -> Optional[str]:
    v = (v or "").strip()
    if not v:
        return None
    try:
        _URL.validate_python(v)
    except ValidationError:
        raise ValueError("Must be a valid URL") from None
    return v


def _min_text(value: str, n: int, message: str) -> str:
    value = (value or "").strip()
    if len(value) < n:
        raise ValueError(message)
    return value


class BasicInfoStep(BaseModel):
    name: str
    title: str
    bio: str

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return _min_text(v, 2, "Name must be at least 2 characters")

    @field_validator("title")
    @classmethod
    def _title(cls, v):
        return _min_text(v, 2, "Title must be at least 2 characters")

    @field_validator("bio")
    @classmethod
    def _bio(cls, v):
        v = _min_text(v, 10, "Bio must be at least 10 characters")
        if len(v) > 500:
            raise ValueError("Bio must be less than 500 characters")
        return v


class _DatedStepEntry(BaseModel):
    start_month: str = ""
    start_year: str = ""
    end_month: str = ""
    end_year: str = ""
    is_present: bool = False

    @model_validator(mode="after")
    def _dates(self):
        if not (self.start_month and self.start_year):
            raise ValueError("Start month and year are required")
        if not self.is_present and not (self.end_month and self.end_year):
            raise ValueError("End month and year are required unless this is ongoing")
        if not self.is_present and (self.end_year, self.end_month) < (self.start_year, self.start_month):
            raise ValueError("End date cannot be before start date")
        return self


class WorkExperienceEntry(_DatedStepEntry):
    position: str
    company: str
    bullets: List[str] = Field(default_factory=list)

    @field_validator("position")
    @classmethod
    def _position(cls, v):
        return _min_text(v, 2, "Position is required")

    @field_validator("company")
    @classmethod
    def _company(cls, v):
        return _min_text(v, 2, "Company is required")

    @field_validator("bullets")
    @classmethod
    def _bullets(cls, v):
        if any(not b.strip() for b in v):
            raise ValueError("Bullet point cannot be empty")
        if not v:
            raise ValueError("At least one bullet point is required")
        return v


class WorkHistoryStep(BaseModel):
    work_history: List[WorkExperienceEntry]

    @field_validator("work_history")
    @classmethod
    def _at_least_one(cls, v):
        if not v:
            raise ValueError("At least one work experience is required")
        return v


class ProjectEntry(BaseModel):
    title: str
    description: str
    stack: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    github: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title(cls, v):
        return _min_text(v, 2, "Project title is required")

    @field_validator("description")
    @classmethod
    def _description(cls, v):
        return _min_text(v, 10, "Description must be at least 10 characters")

    @field_validator("stack")
    @classmethod
    def _stack(cls, v):
        if any(not s.strip() for s in v):
            raise ValueError("Technology cannot be empty")
        if not v:
            raise ValueError("At least one technology is required")
        return v

    @field_validator("url", "github", mode="before")
    @classmethod
    def _links(cls, v):
        return _optional_url(v)


class ProjectsStep(BaseModel):
    projects: List[ProjectEntry]

    @field_validator("projects")
    @classmethod
    def _at_least_one(cls, v):
        if not v:
            raise ValueError("At least one project is required")
        return v


class EducationEntry(_DatedStepEntry):
    school: str
    degree: str
    cgpa: str = ""

    @field_validator("school")
    @classmethod
    def _school(cls, v):
        return _min_text(v, 2, "School/University is required")

    @field_validator("degree")
    @classmethod
    def _degree(cls, v):
        return _min_text(v, 2, "Course/Degree is required")


class SkillsEducationStep(BaseModel):
    skills: List[str]
    education: List[EducationEntry]

    @field_validator("skills")
    @classmethod
    def _skills(cls, v):
        if any(not s.strip() for s in v):
            raise ValueError("Skill cannot be empty")
        if not v:
            raise ValueError("At least one skill is required")
        return v

    @field_validator("education")
    @classmethod
    def _education(cls, v):
        if not v:
            raise ValueError("At least one education entry is required")
        return v


class SkillsFreeTextEducationStep(SkillsEducationStep):
    """Older form revision: education typed as one block of text."""

    education: str

    @field_validator("education")
    @classmethod
    def _education(cls, v):
        return _min_text(v, 2, "Education information is required")


class MediaStep(BaseModel):
    media: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("media")
    @classmethod
    def _sizes(cls, v):
        for m in v:
            if len(m.get("data") or b"") > MAX_IMAGE_BYTES:
                raise ValueError(f"{m.get('filename', 'File')} is larger than 10MB")
        return v


class ReferenceSiteStep(BaseModel):
    reference_site: Optional[str] = None

    @field_validator("reference_site", mode="before")
    @classmethod
    def _url(cls, v):
        return _optional_url(v)


STEP_MODELS = {
    1: BasicInfoStep,
    2: WorkHistoryStep,
    3: ProjectsStep,
    4: SkillsEducationStep,
    5: MediaStep,
    6: ReferenceSiteStep,
}


def _format_error(err: Dict[str, Any]) -> str:
    msg = err["msg"]
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    where = [str(p) for p in err.get("loc", ()) if not str(p).startswith("function-")]
    # loc like ('work_history', 0, 'position') → 'Work history #1 › position'
    label = []
    for part in where:
        if part.isdigit():
            label[-1] = f"{label[-1]} #{int(part) + 1}" if label else f"#{int(part) + 1}"
        else:
            label.append(part.replace("_", " ").capitalize())
    return f"{' › '.join(label)}: {msg}" if label else msg


def validate_step(step: int, data: Dict[str, Any]) -> List[str]:
    """Run the rules for wizard `step` against `data`; empty list means valid."""
    model = STEP_MODELS[step]
    if step == 4 and isinstance(data.get("education"), str):
        model = SkillsFreeTextEducationStep
    fields = {k: data[k] for k in model.model_fields if k in data}
    try:
        model.model_validate(fields)
    except ValidationError as exc:
        return [_format_error(e) for e in exc.errors()]
    return []
