"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


# --- Product Request Schemas ---


class CreateGameRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Hollow Forge",
                    "price": 24.99,
                    "short_description": "A metroidvania set in a dwarven foundry.",
                    "developer": "Anvil Works",
                    "system_requirements": "OS: Windows 10, RAM: 8 GB",
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    short_description: str | None = Field(None, max_length=500)
    description: str | None = None
    developer: str | None = Field(None, max_length=255)
    system_requirements: str | None = None


class CreateAddonRequest(BaseModel):
    game_id: str
    title: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    short_description: str | None = Field(None, max_length=500)
    description: str | None = None
    developer: str | None = Field(None, max_length=255)


class UpdateProductDetailsRequest(BaseModel):
    title: str | None = Field(None, max_length=255)
    short_description: str | None = Field(None, max_length=500)
    description: str | None = None
    developer: str | None = Field(None, max_length=255)
    system_requirements: str | None = None


class ChangePriceRequest(BaseModel):
    new_price: float


class ClassificationRequest(BaseModel):
    ids: list[str]


# --- Product Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    product_type: str
    title: str
    short_description: str | None = None
    description: str | None = None
    developer: str | None = None
    price: float
    game_id: str | None = None
    system_requirements: str | None = None
    is_active: bool = False
    is_deleted: bool = False
    genre_ids: list[str] = []
    tag_ids: list[str] = []
    mechanic_ids: list[str] = []
    mature_content_ids: list[str] = []
    created_at: datetime | None = None


class ProductCardResponse(BaseModel):
    product_id: str
    product_type: str
    title: str
    short_description: str | None = None
    developer: str | None = None
    price: float
    game_id: str | None = None
    is_active: bool = False


class ProductCardListResponse(BaseModel):
    products: list[ProductCardResponse]


# --- Taxonomy Schemas ---


class GenreRequest(BaseModel):
    name: str = Field(..., max_length=100)


class TagRequest(BaseModel):
    title: str = Field(..., max_length=100)


class CreateMechanicRequest(BaseModel):
    name: str = Field(..., max_length=100)
    description: str | None = None
    logo_url: str | None = Field(None, max_length=500)


class UpdateMechanicRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = None
    logo_url: str | None = Field(None, max_length=500)


class CreateMatureContentRequest(BaseModel):
    name: str = Field(..., max_length=50)
    description: str | None = None
    logo_url: str | None = Field(None, max_length=500)


class UpdateMatureContentRequest(BaseModel):
    name: str | None = Field(None, max_length=50)
    description: str | None = None
    logo_url: str | None = Field(None, max_length=500)


class TermIdResponse(BaseModel):
    id: str


class TermResponse(BaseModel):
    id: str
    label: str
    description: str | None = None
    logo_url: str | None = None


class TermListResponse(BaseModel):
    items: list[TermResponse]
