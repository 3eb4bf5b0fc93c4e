"""Repository for contact information."""

from typing import Optional

from portfolio.config.repository_config import RepositoryConfig
from portfolio.interfaces.store import IStore
from portfolio.interfaces.validator import IValidator
from portfolio.models.contact import ContactInfo
from portfolio.repositories.fields import FieldMap, attribute_accessors
from portfolio.repositories.primary import PrimaryContentRepository
from portfolio.validation.entity_validators import ContactValidator

CONTACT_FIELDS: FieldMap = {
    **attribute_accessors(
        "id",
        "name",
        "title",
        "bio",
        "availability",
        "for_hire",
        "website",
        "visible",
        "order",
        "created_at",
        "updated_at",
    ),
    "city": lambda contact: contact.location.city,
    "country": lambda contact: contact.location.country,
    "platforms": lambda contact: [link.platform for link in contact.social_links],
}


class ContactRepository(PrimaryContentRepository[ContactInfo]):
    entity_type = "contact"

    def __init__(
        self,
        store: IStore[ContactInfo],
        validator: Optional[IValidator[ContactInfo]] = None,
        config: Optional[RepositoryConfig] = None,
        **kwargs,
    ):
        super().__init__(
            ContactInfo,
            store,
            validator=validator if validator is not None else ContactValidator(),
            config=config,
            field_map=CONTACT_FIELDS,
            search_fields=("name", "title"),
            **kwargs,
        )
