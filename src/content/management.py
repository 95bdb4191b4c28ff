"""Content management: commands editing the site content document, and reads.

Every edit follows the same shape: load the document, compute the new value
of one section, replace that section, persist the whole document.
"""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Dict, String
from protean.utils.globals import current_domain

from content.document.defaults import default_catalog, default_serving_ideas
from content.document.document import Dessert, ServingIdea, SiteContent, SiteSettings, validate_model
from content.domain import content
from shared.logging import get_logger

logger = get_logger(__name__)

# Fields callers may never overwrite through a partial update
_PROTECTED_FIELDS = {"id", "created_at", "updated_at"}


def _require(data: dict, *fields: str) -> None:
    errors = {
        field: [f"{field.replace('_', ' ').capitalize()} is required"]
        for field in fields
        if not str(data.get(field) or "").strip()
    }
    if errors:
        raise ValidationError(errors)


def _editable(data: dict) -> dict:
    return {key: value for key, value in (data or {}).items() if key not in _PROTECTED_FIELDS}


def _merge(record, changes: dict) -> dict:
    merged = record.model_dump()
    merged.update(_editable(changes))
    merged["updated_at"] = datetime.now(UTC)
    return merged


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@content.command(part_of="SiteContent")
class ReplaceSection:
    """Overwrite one whole section of the document."""

    section: String(required=True, max_length=50)
    value: Dict()


@content.command(part_of="SiteContent")
class CreateDessert:
    data: Dict()


@content.command(part_of="SiteContent")
class UpdateDessert:
    dessert_id: String(required=True, max_length=64)
    changes: Dict()


@content.command(part_of="SiteContent")
class DeleteDessert:
    dessert_id: String(required=True, max_length=64)


@content.command(part_of="SiteContent")
class CreateServingIdea:
    data: Dict()


@content.command(part_of="SiteContent")
class UpdateServingIdea:
    idea_id: String(required=True, max_length=64)
    changes: Dict()


@content.command(part_of="SiteContent")
class DeleteServingIdea:
    idea_id: String(required=True, max_length=64)


@content.command(part_of="SiteContent")
class UpdateSiteSettings:
    changes: Dict()


@content.command(part_of="SiteContent")
class InitializeContent:
    """Seed the starter catalog and serving ideas when the catalog is empty."""


# ---------------------------------------------------------------------------
# Command Handler
# ---------------------------------------------------------------------------
@content.command_handler(part_of=SiteContent)
class ManageContentHandler:
    def _save(self, document: SiteContent) -> SiteContent:
        current_domain.repository_for(SiteContent).add(document)
        logger.debug("Content document saved", version=document.version)
        return document

    @handle(ReplaceSection)
    def replace_section(self, command):
        document = load()
        document.replace_section(command.section, command.value)
        logger.info("Content section replaced", section=command.section)
        return self._save(document)

    # -------------------------------------------------------------------
    # Desserts
    # -------------------------------------------------------------------
    @handle(CreateDessert)
    def create_dessert(self, command):
        data = command.data or {}
        _require(data, "name", "description")
        dessert = validate_model(Dessert, _editable(data))

        document = load()
        document.replace_section("desserts", [*document.dessert_models, dessert])
        self._save(document)
        logger.info("Product created", product_id=dessert.id)
        return dessert

    @handle(UpdateDessert)
    def update_dessert(self, command):
        document = load()
        existing = document.find_dessert(command.dessert_id)
        if existing is None:
            raise ObjectNotFoundError("Product not found")

        merged = _merge(existing, command.changes)
        _require(merged, "name", "description")
        updated = validate_model(Dessert, merged)
        document.replace_section(
            "desserts", [updated if dessert.id == existing.id else dessert for dessert in document.dessert_models]
        )
        self._save(document)
        logger.info("Product updated", product_id=existing.id)
        return updated

    @handle(DeleteDessert)
    def delete_dessert(self, command):
        document = load()
        desserts = document.dessert_models
        remaining = [dessert for dessert in desserts if dessert.id != command.dessert_id]
        if len(remaining) == len(desserts):
            return
        document.replace_section("desserts", remaining)
        self._save(document)
        logger.info("Product deleted", product_id=command.dessert_id)

    # -------------------------------------------------------------------
    # Serving ideas
    # -------------------------------------------------------------------
    @handle(CreateServingIdea)
    def create_serving_idea(self, command):
        data = command.data or {}
        _require(data, "title", "description")
        idea = validate_model(ServingIdea, _editable(data))

        document = load()
        document.replace_section("serving_ideas", [*document.serving_idea_models, idea])
        self._save(document)
        logger.info("Serving idea created", serving_idea_id=idea.id)
        return idea

    @handle(UpdateServingIdea)
    def update_serving_idea(self, command):
        document = load()
        existing = document.find_serving_idea(command.idea_id)
        if existing is None:
            raise ObjectNotFoundError("Serving idea not found")

        merged = _merge(existing, command.changes)
        _require(merged, "title", "description")
        updated = validate_model(ServingIdea, merged)
        document.replace_section(
            "serving_ideas", [updated if idea.id == existing.id else idea for idea in document.serving_idea_models]
        )
        self._save(document)
        logger.info("Serving idea updated", serving_idea_id=existing.id)
        return updated

    @handle(DeleteServingIdea)
    def delete_serving_idea(self, command):
        document = load()
        ideas = document.serving_idea_models
        remaining = [idea for idea in ideas if idea.id != command.idea_id]
        if len(remaining) == len(ideas):
            return
        document.replace_section("serving_ideas", remaining)
        self._save(document)
        logger.info("Serving idea deleted", serving_idea_id=command.idea_id)

    # -------------------------------------------------------------------
    # Site settings
    # -------------------------------------------------------------------
    @handle(UpdateSiteSettings)
    def update_site_settings(self, command):
        """Merge the changes into the current settings, then replace the section."""
        changes = command.changes or {}
        document = load()
        document.replace_section("site_settings", {**document.site_settings, **changes})
        self._save(document)
        logger.info("Site settings updated", fields=sorted(changes))
        return document.settings

    # -------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------
    @handle(InitializeContent)
    def initialize(self, command):
        """Returns True when anything was seeded."""
        document = load()
        if document.desserts:
            return False

        document.replace_section("desserts", default_catalog())
        if not document.serving_ideas:
            document.replace_section("serving_ideas", default_serving_ideas())
        self._save(document)
        logger.info("Default catalog initialized", products=len(document.desserts))
        return True


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def load() -> SiteContent:
    return current_domain.repository_for(SiteContent).load()


def list_desserts() -> list[Dessert]:
    return load().dessert_models


def active_desserts() -> list[Dessert]:
    return [dessert for dessert in list_desserts() if dessert.is_active]


def get_dessert(dessert_id) -> Dessert:
    dessert = load().find_dessert(dessert_id)
    if dessert is None:
        raise ObjectNotFoundError("Product not found")
    return dessert


def list_serving_ideas() -> list[ServingIdea]:
    return load().serving_idea_models


def active_serving_ideas() -> list[ServingIdea]:
    return [idea for idea in list_serving_ideas() if idea.is_active]


def site_settings() -> SiteSettings:
    return load().settings
