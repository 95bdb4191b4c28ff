"""Pydantic request/response schemas for the Content API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from content.document.document import About, Dessert, Hero, ServingIdea, SiteSettings, Testimonial

Category = Literal["traditional", "seasonal", "frozen", "custom"]

# --- Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Gulab Jamun",
                    "description": "Milk dumplings soaked in rose and cardamom syrup",
                    "price": 10.99,
                    "image": "https://example.com/gulab-jamun.jpg",
                    "category": "traditional",
                    "serves": "4 people",
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    description: str = Field(..., max_length=2000)
    price: float = Field(..., ge=0)
    image: str = ""
    featured: bool = False
    prep_time: str | None = None
    serves: str | None = None
    category: Category | None = None
    is_popular: bool = False
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int | None = Field(None, ge=0)
    allergens: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    is_active: bool = True


class UpdateProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 13.49, "is_active": False}]}}

    name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=2000)
    price: float | None = Field(None, ge=0)
    image: str | None = None
    featured: bool | None = None
    prep_time: str | None = None
    serves: str | None = None
    category: Category | None = None
    is_popular: bool | None = None
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int | None = Field(None, ge=0)
    allergens: list[str] | None = None
    ingredients: list[str] | None = None
    is_active: bool | None = None


class CreateServingIdeaRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Birthday Parties",
                    "description": "Colourful dessert platters for every age",
                    "occasions": ["Birthday", "Anniversary"],
                }
            ]
        }
    }

    title: str = Field(..., max_length=200)
    subtitle: str | None = None
    description: str = Field(..., max_length=2000)
    image: str = ""
    occasion: str | None = None
    occasions: list[str] = Field(default_factory=list)
    icon: str | None = None
    color: str | None = None
    is_active: bool = True


class UpdateServingIdeaRequest(BaseModel):
    title: str | None = Field(None, max_length=200)
    subtitle: str | None = None
    description: str | None = Field(None, max_length=2000)
    image: str | None = None
    occasion: str | None = None
    occasions: list[str] | None = None
    icon: str | None = None
    color: str | None = None
    is_active: bool | None = None


class UpdateGatewayRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"enabled": True, "test_mode": True, "credentials": {"publicKey": "pk_test"}}]}
    }

    enabled: bool | None = None
    test_mode: bool | None = None
    credentials: dict[str, str] | None = None


# --- Response Schemas ---


class GatewayResponse(BaseModel):
    id: str
    name: str
    enabled: bool
    test_mode: bool
    is_configured: bool
    credentials: dict[str, str]


class SiteContentResponse(BaseModel):
    id: str
    hero: Hero
    about: About
    site_settings: SiteSettings
    desserts: list[Dessert]
    serving_ideas: list[ServingIdea]
    testimonials: list[Testimonial]
    version: int
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str


class SuccessResponse(BaseModel):
    success: bool = True
