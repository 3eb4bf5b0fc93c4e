"""Contact information entity."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portfolio.models.common import BaseEntity, NonEmptyStr

ContactPreference = Literal["preferred", "acceptable", "emergency-only", "not-preferred"]
AvailabilityStatus = Literal["available", "busy", "away", "unavailable"]


class EmailContact(BaseModel):
    address: NonEmptyStr
    label: str = "Email"
    type: Literal["primary", "secondary", "work", "personal"] = "primary"
    preference: ContactPreference = "preferred"

    @field_validator("address")
    @classmethod
    def check_address(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("Email must be a valid email address")
        return value


class PhoneContact(BaseModel):
    number: NonEmptyStr
    label: str = "Phone"
    type: Literal["mobile", "home", "work", "fax"] = "mobile"
    preference: ContactPreference = "acceptable"


class SocialLink(BaseModel):
    platform: NonEmptyStr
    url: NonEmptyStr
    label: NonEmptyStr
    username: Optional[str] = None
    preference: ContactPreference = "acceptable"


class LocationInfo(BaseModel):
    address: str = ""
    city: str = ""
    country: str = ""
    timezone: Optional[str] = None
    map_url: Optional[str] = None


class ContactData(BaseModel):
    """Fields a caller supplies when creating contact information."""

    model_config = ConfigDict(extra="forbid")

    name: NonEmptyStr
    title: str = ""
    bio: Optional[str] = None
    emails: List[EmailContact] = Field(default_factory=list)
    phones: List[PhoneContact] = Field(default_factory=list)
    social_links: List[SocialLink] = Field(default_factory=list)
    location: LocationInfo = Field(default_factory=LocationInfo)
    availability: AvailabilityStatus = "available"
    for_hire: bool = False
    website: Optional[str] = None
    visible: bool = True
    order: Optional[int] = Field(default=None, ge=0)


class ContactInfo(BaseEntity, ContactData):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def primary_email(self) -> Optional[EmailContact]:
        for email in self.emails:
            if email.type == "primary":
                return email
        return self.emails[0] if self.emails else None
