"""Project entity and its create schema."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from portfolio.models.common import BaseEntity, NonEmptyStr


ProjectStatus = Literal["planning", "active", "completed", "on-hold", "archived"]
ProjectCategory = Literal["web", "mobile", "desktop", "api", "library", "other"]
ProjectLinkType = Literal["github", "demo", "docs", "website", "download", "video"]


class ProjectLink(BaseModel):
    url: NonEmptyStr
    label: NonEmptyStr
    type: ProjectLinkType
    primary: bool = False


class ProjectImage(BaseModel):
    url: NonEmptyStr
    alt: NonEmptyStr
    type: Literal["preview", "screenshot", "diagram", "logo"] = "screenshot"
    featured: bool = False
    order: Optional[int] = Field(default=None, ge=0)


class ProjectFeature(BaseModel):
    id: NonEmptyStr
    title: NonEmptyStr
    description: NonEmptyStr
    implemented: bool = True
    priority: Optional[Literal["low", "medium", "high"]] = None


class ProjectTimelineEvent(BaseModel):
    date: datetime
    title: NonEmptyStr
    description: NonEmptyStr
    milestone: bool = False


class ProjectData(BaseModel):
    """Fields a caller supplies when creating a project."""

    model_config = ConfigDict(extra="forbid")

    title: NonEmptyStr = Field(max_length=100)
    description: NonEmptyStr = Field(max_length=500)
    short_description: Optional[str] = Field(default=None, max_length=200)
    category: ProjectCategory = "web"
    status: ProjectStatus = "completed"
    content: str = ""
    features: List[ProjectFeature] = Field(default_factory=list)
    images: List[ProjectImage] = Field(default_factory=list)
    technologies: List[NonEmptyStr] = Field(default_factory=list)
    links: List[ProjectLink] = Field(default_factory=list)
    timeline: List[ProjectTimelineEvent] = Field(default_factory=list)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    featured: bool = False
    priority: Optional[int] = Field(default=None, ge=0)
    order: Optional[int] = Field(default=None, ge=0)
    tags: List[NonEmptyStr] = Field(default_factory=list)
    visible: bool = True

    @model_validator(mode="after")
    def check_dates(self) -> "ProjectData":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("Start date must be before or equal to end date")
        return self


class Project(BaseEntity, ProjectData):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def preview_image(self) -> Optional[ProjectImage]:
        for image in self.images:
            if image.type == "preview" or image.featured:
                return image
        return self.images[0] if self.images else None
