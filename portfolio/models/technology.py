"""Technology entity and its create schema."""

from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from portfolio.models.common import BaseEntity, NonEmptyStr

TechnologyCategory = Literal[
    "frontend",
    "backend",
    "database",
    "mobile",
    "desktop",
    "devops",
    "cloud",
    "testing",
    "design",
    "language",
    "framework",
    "library",
    "tool",
    "other",
]
TechnologyProficiency = Literal["beginner", "intermediate", "advanced", "expert"]
TechnologyLearningStatus = Literal["learning", "comfortable", "proficient", "expert"]

HexColor = Annotated[str, StringConstraints(pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$")]


class TechnologyIcon(BaseModel):
    name: NonEmptyStr
    type: Literal["icon", "image", "svg"] = "icon"
    source: Optional[str] = None
    color: Optional[HexColor] = None


class TechnologyData(BaseModel):
    """Fields a caller supplies when creating a technology."""

    model_config = ConfigDict(extra="forbid")

    name: NonEmptyStr = Field(max_length=50)
    display_name: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=300)
    category: TechnologyCategory = "other"
    icon: Optional[TechnologyIcon] = None
    color: Optional[HexColor] = None
    proficiency: TechnologyProficiency = "intermediate"
    learning_status: TechnologyLearningStatus = "comfortable"
    version: Optional[str] = None
    official_website: Optional[str] = None
    featured: bool = False
    order: Optional[int] = Field(default=None, ge=0)
    visible: bool = True
    tags: List[NonEmptyStr] = Field(default_factory=list)


class Technology(BaseEntity, TechnologyData):
    model_config = ConfigDict(extra="ignore", frozen=True)
