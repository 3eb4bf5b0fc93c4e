"""Validators for each content entity type."""

from portfolio.models.about import AboutContent, AboutData
from portfolio.models.contact import ContactData, ContactInfo
from portfolio.models.project import Project, ProjectData
from portfolio.models.technology import Technology, TechnologyData
from portfolio.validation.schema_validator import SchemaValidator


class ProjectValidator(SchemaValidator[Project]):
    def __init__(self):
        super().__init__(ProjectData, Project)


class TechnologyValidator(SchemaValidator[Technology]):
    def __init__(self):
        super().__init__(TechnologyData, Technology)


class ContactValidator(SchemaValidator[ContactInfo]):
    def __init__(self):
        super().__init__(ContactData, ContactInfo)


class AboutValidator(SchemaValidator[AboutContent]):
    def __init__(self):
        super().__init__(AboutData, AboutContent)
