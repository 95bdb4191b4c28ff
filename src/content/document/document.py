"""The site content document.

A single versioned aggregate holds every editable section of the storefront:
hero, about, site settings, the dessert catalog, serving ideas and
testimonials. Sections are stored as JSON and replaced whole; each
replacement bumps ``version``. The pydantic models below describe and
validate the shape of each section.
"""

from datetime import UTC, datetime
from typing import Literal
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import DateTime, Dict, Integer, List
from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from content.domain import content
from shared.logging import get_logger

logger = get_logger(__name__)

DOCUMENT_ID = "default"


def _now():
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------
class Dessert(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    description: str
    price: float = Field(ge=0)
    image: str = ""
    featured: bool = False
    prep_time: str | None = None
    serves: str | None = None
    category: Literal["traditional", "seasonal", "frozen", "custom"] | None = None
    is_popular: bool = False
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int | None = Field(None, ge=0)
    allergens: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class ServingIdea(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    subtitle: str | None = None
    description: str
    image: str = ""
    occasion: str | None = None
    occasions: list[str] = Field(default_factory=list)
    icon: str | None = None
    color: str | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class Testimonial(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    review: str
    rating: int = Field(5, ge=1, le=5)
    occasion: str | None = None
    image: str | None = None


class Hero(BaseModel):
    title: str
    subtitle: str = ""
    cta_text: str = ""
    background_image: str = ""


class About(BaseModel):
    title: str
    description: str = ""
    chef_name: str = ""
    chef_image: str = ""
    experience: str = ""
    certification: str = ""
    specialties: list[str] = Field(default_factory=list)


class OpeningHours(BaseModel):
    open: str
    close: str


class SocialMedia(BaseModel):
    facebook: str = ""
    instagram: str = ""
    whatsapp: str = ""


class SiteSettings(BaseModel):
    business_name: str
    phone: str = ""
    whatsapp: str | None = None
    email: str = ""
    address: str = ""
    delivery_area: str | None = None
    delivery_radius: str | None = None
    delivery_info: str = ""
    advance_notice_hours: int | None = Field(None, ge=0)
    business_hours: dict[str, OpeningHours] = Field(default_factory=dict)
    social_media: SocialMedia = Field(default_factory=SocialMedia)


SECTION_ADAPTERS = {
    "hero": TypeAdapter(Hero),
    "about": TypeAdapter(About),
    "site_settings": TypeAdapter(SiteSettings),
    "desserts": TypeAdapter(list[Dessert]),
    "serving_ideas": TypeAdapter(list[ServingIdea]),
    "testimonials": TypeAdapter(list[Testimonial]),
}


def _plain(value):
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _field_errors(exc: PydanticValidationError, prefix: str | None = None) -> dict[str, list[str]]:
    """Flatten a pydantic error into ``{"a.b": ["message"]}``."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error["loc"]]
        if prefix and (not location or location[0] != prefix):
            location.insert(0, prefix)
        errors.setdefault(".".join(location) or "__root__", []).append(error["msg"])
    return errors


def validate_model(model, data, field=None):
    """Build ``model`` from ``data``, reporting pydantic errors as a domain ``ValidationError``."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc, prefix=field)) from None


def validate_section(name, value):
    """Validate ``value`` as section ``name`` and return its JSON-ready form."""
    if name not in SECTION_ADAPTERS:
        allowed = ", ".join(SECTION_ADAPTERS)
        raise ValidationError({"section": [f"Unknown section {name!r}; expected one of {allowed}"]})

    adapter = SECTION_ADAPTERS[name]
    try:
        validated = adapter.validate_python(_plain(value))
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc, prefix=name)) from None
    return adapter.dump_python(validated, mode="json")


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@content.aggregate(schema_name="site_content")
class SiteContent:
    hero = Dict()
    about = Dict()
    site_settings = Dict()
    desserts = List()
    serving_ideas = List()
    testimonials = List()
    version = Integer(default=1)
    updated_at = DateTime()

    @classmethod
    def seed(cls, **sections):
        """Build the singleton document from complete section values."""
        return cls(
            id=DOCUMENT_ID,
            **{name: validate_section(name, value) for name, value in sections.items()},
            version=1,
            updated_at=_now(),
        )

    def section(self, name):
        """Return section ``name`` as its pydantic model (or list of models)."""
        return SECTION_ADAPTERS[name].validate_python(getattr(self, name))

    @property
    def dessert_models(self) -> list[Dessert]:
        return self.section("desserts")

    @property
    def serving_idea_models(self) -> list[ServingIdea]:
        return self.section("serving_ideas")

    @property
    def settings(self) -> SiteSettings:
        return self.section("site_settings")

    def replace_section(self, name, value):
        """Overwrite one section with a complete new value.

        ``value`` may be a model instance or plain data; it is validated
        against the section's model. There is no field-level merge.
        """
        setattr(self, name, validate_section(name, value))
        self.version += 1
        self.updated_at = _now()

    def find_dessert(self, dessert_id) -> Dessert | None:
        return next((dessert for dessert in self.dessert_models if dessert.id == str(dessert_id)), None)

    def find_serving_idea(self, idea_id) -> ServingIdea | None:
        return next((idea for idea in self.serving_idea_models if idea.id == str(idea_id)), None)


@content.repository(part_of=SiteContent)
class SiteContentRepository:
    def load(self) -> SiteContent:
        """Return the content document, seeding the default one on first access."""
        # Imported here: the seed data module builds on the section models above
        from content.document.defaults import default_content

        document = self.get_or_none(DOCUMENT_ID)
        if document is None:
            document = default_content()
            self.add(document)
            logger.info("Seeded default content document")
        return document
