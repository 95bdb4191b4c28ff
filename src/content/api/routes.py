"""FastAPI routes for the Content domain: admin editing and public reads."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from protean.utils.globals import current_domain

from content import management
from content.api.schemas import (
    CreateProductRequest,
    CreateServingIdeaRequest,
    GatewayResponse,
    MessageResponse,
    SiteContentResponse,
    SuccessResponse,
    UpdateGatewayRequest,
    UpdateProductRequest,
    UpdateServingIdeaRequest,
)
from content.document.document import Dessert, ServingIdea, SiteContent, SiteSettings
from content.gateways import configuration
from content.gateways.configuration import ConfigurePaymentGateway
from content.gateways.gateway import PaymentGateway
from content.management import (
    CreateDessert,
    CreateServingIdea,
    DeleteDessert,
    DeleteServingIdea,
    InitializeContent,
    ReplaceSection,
    UpdateDessert,
    UpdateServingIdea,
    UpdateSiteSettings,
)
from shared.api import require_admin


def _gateway_response(gateway: PaymentGateway) -> GatewayResponse:
    return GatewayResponse(
        id=gateway.id,
        name=gateway.name,
        enabled=gateway.enabled,
        test_mode=gateway.test_mode,
        is_configured=gateway.is_configured,
        credentials=gateway.masked_credentials(),
    )


def _content_response(document: SiteContent, active_only: bool = False) -> SiteContentResponse:
    desserts = document.dessert_models
    ideas = document.serving_idea_models
    if active_only:
        desserts = [dessert for dessert in desserts if dessert.is_active]
        ideas = [idea for idea in ideas if idea.is_active]
    return SiteContentResponse(
        id=document.id,
        hero=document.hero,
        about=document.about,
        site_settings=document.site_settings,
        desserts=desserts,
        serving_ideas=ideas,
        testimonials=document.testimonials,
        version=document.version,
        updated_at=document.updated_at,
    )


def _process(command):
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@admin_router.get("/products", response_model=list[Dessert])
async def list_products():
    return management.list_desserts()


@admin_router.post("/products", status_code=201, response_model=Dessert)
async def create_product(body: CreateProductRequest) -> Dessert:
    return _process(CreateDessert(data=body.model_dump()))


@admin_router.put("/products/{product_id}", response_model=Dessert)
async def update_product(product_id: str, body: UpdateProductRequest) -> Dessert:
    return _process(UpdateDessert(dessert_id=product_id, changes=body.model_dump(exclude_unset=True)))


@admin_router.delete("/products/{product_id}", response_model=SuccessResponse)
async def delete_product(product_id: str) -> SuccessResponse:
    _process(DeleteDessert(dessert_id=product_id))
    return SuccessResponse()


@admin_router.get("/serving-ideas", response_model=list[ServingIdea])
async def list_serving_ideas():
    return management.list_serving_ideas()


@admin_router.post("/serving-ideas", status_code=201, response_model=ServingIdea)
async def create_serving_idea(body: CreateServingIdeaRequest) -> ServingIdea:
    return _process(CreateServingIdea(data=body.model_dump()))


@admin_router.put("/serving-ideas/{idea_id}", response_model=ServingIdea)
async def update_serving_idea(idea_id: str, body: UpdateServingIdeaRequest) -> ServingIdea:
    return _process(UpdateServingIdea(idea_id=idea_id, changes=body.model_dump(exclude_unset=True)))


@admin_router.delete("/serving-ideas/{idea_id}", response_model=SuccessResponse)
async def delete_serving_idea(idea_id: str) -> SuccessResponse:
    _process(DeleteServingIdea(idea_id=idea_id))
    return SuccessResponse()


@admin_router.get("/settings", response_model=SiteSettings)
async def get_site_settings() -> SiteSettings:
    return management.site_settings()


@admin_router.put("/settings", response_model=SiteSettings)
async def update_site_settings(changes: dict[str, Any] = Body(...)) -> SiteSettings:
    return _process(UpdateSiteSettings(changes=changes))


@admin_router.get("/content", response_model=SiteContentResponse)
async def get_document() -> SiteContentResponse:
    return _content_response(management.load())


@admin_router.put("/content/{section}", response_model=SiteContentResponse)
async def replace_section(
    section: str,
    value: dict[str, Any] | list[dict[str, Any]] = Body(...),
) -> SiteContentResponse:
    return _content_response(_process(ReplaceSection(section=section, value=value)))


@admin_router.get("/payment-gateways", response_model=list[GatewayResponse])
async def list_payment_gateways():
    return [_gateway_response(gateway) for gateway in configuration.list_gateways()]


@admin_router.get("/payment-gateways/{gateway_id}", response_model=GatewayResponse)
async def get_payment_gateway(gateway_id: str) -> GatewayResponse:
    return _gateway_response(configuration.get_gateway(gateway_id))


@admin_router.put("/payment-gateways/{gateway_id}", response_model=GatewayResponse)
async def update_payment_gateway(gateway_id: str, body: UpdateGatewayRequest) -> GatewayResponse:
    command = ConfigurePaymentGateway(
        gateway_id=gateway_id,
        enabled=body.enabled,
        test_mode=body.test_mode,
        credentials=body.credentials or {},
    )
    return _gateway_response(_process(command))


@admin_router.post("/initialize", response_model=MessageResponse)
async def initialize() -> MessageResponse:
    if _process(InitializeContent()):
        return MessageResponse(message="Default data initialized successfully")
    return MessageResponse(message="Data already initialized")


# ---------------------------------------------------------------------------
# Public Router
# ---------------------------------------------------------------------------
public_router = APIRouter(prefix="/content", tags=["content"])


@public_router.get("", response_model=SiteContentResponse)
async def get_public_content() -> SiteContentResponse:
    return _content_response(management.load(), active_only=True)


@public_router.get("/products", response_model=list[Dessert])
async def public_products():
    return management.active_desserts()


@public_router.get("/serving-ideas", response_model=list[ServingIdea])
async def public_serving_ideas():
    return management.active_serving_ideas()


@public_router.get("/settings", response_model=SiteSettings)
async def public_settings() -> SiteSettings:
    return management.site_settings()
