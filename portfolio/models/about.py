"""About-section content entity."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from portfolio.models.common import BaseEntity, NonEmptyStr

SkillCategory = Literal["technical", "soft", "language", "design", "management", "communication", "other"]
SkillProficiency = Literal["beginner", "intermediate", "advanced", "expert"]


class Skill(BaseModel):
    name: NonEmptyStr
    category: Optional[SkillCategory] = None
    proficiency: SkillProficiency = "intermediate"
    years_of_experience: Optional[float] = Field(default=None, ge=0)
    featured: bool = False


class Experience(BaseModel):
    title: NonEmptyStr
    company: NonEmptyStr
    location: str = ""
    type: Literal["work", "freelance", "internship", "volunteer", "project", "education"] = "work"
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    current: bool = False
    description: str = ""
    technologies: List[str] = Field(default_factory=list)


class Education(BaseModel):
    institution: NonEmptyStr
    degree: NonEmptyStr
    field: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    graduation_date: Optional[datetime] = None
    current: bool = False


class TimelineEvent(BaseModel):
    year: NonEmptyStr
    title: NonEmptyStr
    description: str = ""
    icon: Optional[str] = None


class AboutData(BaseModel):
    """Fields a caller supplies when creating about content."""

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    title: str = ""
    bio: NonEmptyStr
    content: str = ""
    skills: List[Skill] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    timeline: List[TimelineEvent] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)
    current_focus: List[str] = Field(default_factory=list)
    visible: bool = True


class AboutContent(BaseEntity, AboutData):
    model_config = ConfigDict(extra="ignore", frozen=True)
