"""
Profile and artifact records passed through the generation pipeline.

The wizard accumulates a UserProfile step by step; once submitted it is
frozen and handed (by value) to the generator, which returns a fresh
GeneratedArtifact on every call.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _clean_list(values: List[str]) -> List[str]:
    return [v.strip() for v in values if v and v.strip()]


class DatedEntry(BaseModel):
    """Shared month/year range; `is_present` suppresses the end fields."""

    model_config = ConfigDict(frozen=True)

    duration: Optional[str] = None
    start_month: Optional[str] = None
    start_year: Optional[str] = None
    end_month: Optional[str] = None
    end_year: Optional[str] = None
    is_present: bool = False

    @field_validator("duration", "start_month", "start_year", "end_month", "end_year", mode="before")
    @classmethod
    def _normalise_blanks(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="before")
    @classmethod
    def _drop_end_when_present(cls, data):
        if isinstance(data, dict) and data.get("is_present"):
            data = {**data, "end_month": None, "end_year": None}
        return data

    def date_range(self) -> str:
        """'01/2020 - Present', '01/2020 - 06/2022', or the free-text duration."""
        start = _month_year(self.start_month, self.start_year)
        if not start:
            if self.duration:
                return self.duration
            return "Present" if self.is_present else ""
        end = "Present" if self.is_present else _month_year(self.end_month, self.end_year)
        return f"{start} - {end}" if end else start


def _month_year(month: Optional[str], year: Optional[str]) -> str:
    if month and year:
        return f"{month}/{year}"
    return year or ""


class WorkExperience(DatedEntry):
    position: str
    company: str
    bullets: List[str] = Field(min_length=1)

    @field_validator("bullets")
    @classmethod
    def _bullets_not_blank(cls, v: List[str]) -> List[str]:
        v = _clean_list(v)
        if not v:
            raise ValueError("At least one achievement bullet is required")
        return v


class Education(DatedEntry):
    school: str
    degree: str
    cgpa: Optional[str] = None

    @field_validator("cgpa", mode="before")
    @classmethod
    def _normalise_cgpa(cls, v):
        return _blank_to_none(v)


class Project(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    stack: List[str] = Field(min_length=1)
    url: Optional[str] = None
    github: Optional[str] = None

    @field_validator("url", "github", mode="before")
    @classmethod
    def _normalise_links(cls, v):
        return _blank_to_none(v)

    @field_validator("stack")
    @classmethod
    def _stack_not_blank(cls, v: List[str]) -> List[str]:
        v = _clean_list(v)
        if not v:
            raise ValueError("At least one technology is required")
        return v


class MediaFile(BaseModel):
    """An uploaded image (raw bytes) or a linked video (url)."""

    model_config = ConfigDict(frozen=True)

    filename: str
    kind: Literal["image", "video"] = "image"
    mime_type: str = ""
    data: bytes = Field(default=b"", repr=False)
    url: Optional[str] = None

    @field_validator("filename")
    @classmethod
    def _bare_filename(cls, v: str) -> str:
        v = v.replace("\\", "/").rsplit("/", 1)[-1].strip()
        if not v or v in (".", ".."):
            raise ValueError("A file name is required")
        return v

    @property
    def asset_path(self) -> str:
        return f"assets/{self.filename}"


class UserProfile(BaseModel):
    """Complete résumé record collected by the wizard."""

    model_config = ConfigDict(frozen=True)

    name: str
    title: str = ""
    bio: Optional[str] = None
    work_history: List[WorkExperience] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    education: Union[List[Education], str] = Field(default_factory=list)
    media: List[MediaFile] = Field(default_factory=list)
    reference_site: Optional[str] = None

    @field_validator("bio", "reference_site", mode="before")
    @classmethod
    def _normalise_optional(cls, v):
        return _blank_to_none(v)

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        return v.strip()

    @field_validator("skills")
    @classmethod
    def _unique_skills(cls, v: List[str]) -> List[str]:
        seen, out = set(), []
        for skill in _clean_list(v):
            if skill.lower() not in seen:
                seen.add(skill.lower())
                out.append(skill)
        return out

    @property
    def education_count(self) -> int:
        if isinstance(self.education, str):
            return 1 if self.education.strip() else 0
        return len(self.education)


class GeneratedArtifact(BaseModel):
    """HTML/CSS/JS bundle produced by (or substituted for) one generation call."""

    model_config = ConfigDict(frozen=True)

    html: str
    css: str
    js: str
    preview: str
