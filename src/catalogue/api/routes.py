"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    ChangePriceRequest,
    ClassificationRequest,
    CreateAddonRequest,
    CreateGameRequest,
    CreateMatureContentRequest,
    CreateMechanicRequest,
    GenreRequest,
    ProductCardListResponse,
    ProductCardResponse,
    ProductIdResponse,
    ProductResponse,
    StatusResponse,
    TagRequest,
    TermIdResponse,
    TermListResponse,
    TermResponse,
    UpdateMatureContentRequest,
    UpdateMechanicRequest,
    UpdateProductDetailsRequest,
)
from catalogue.product.classification import AssignGenres, AssignMatureContents, AssignMechanics, AssignTags
from catalogue.product.creation import CreateAddon, CreateGame
from catalogue.product.details import ChangeProductPrice, UpdateProductDetails
from catalogue.product.lifecycle import (
    ActivateProduct,
    DeactivateProduct,
    DeleteProduct,
    RestoreProduct,
)
from catalogue.product.product import Product
from catalogue.projections.product_card import ProductCard
from catalogue.taxonomy.management import (
    CreateGenre,
    CreateMatureContent,
    CreateMechanic,
    CreateTag,
    DeleteGenre,
    DeleteMatureContent,
    DeleteMechanic,
    DeleteTag,
    RenameGenre,
    RenameTag,
    UpdateMatureContent,
    UpdateMechanic,
    live_terms,
)
from catalogue.taxonomy.taxonomy import LABEL_FIELDS, Genre, MatureContent, Mechanic, Tag

product_router = APIRouter(prefix="/products", tags=["products"])
genre_router = APIRouter(prefix="/genres", tags=["taxonomy"])
tag_router = APIRouter(prefix="/tags", tags=["taxonomy"])
mechanic_router = APIRouter(prefix="/mechanics", tags=["taxonomy"])
mature_content_router = APIRouter(prefix="/mature-contents", tags=["taxonomy"])


def _term_response(term) -> TermResponse:
    return TermResponse(
        id=str(term.id),
        label=getattr(term, LABEL_FIELDS[type(term)]),
        description=getattr(term, "description", None),
        logo_url=getattr(term, "logo_url", None),
    )


# --- Product endpoints ---


@product_router.post("/games", status_code=201, response_model=ProductIdResponse)
async def create_game(body: CreateGameRequest) -> ProductIdResponse:
    command = CreateGame(
        title=body.title,
        price=body.price,
        short_description=body.short_description,
        description=body.description,
        developer=body.developer,
        system_requirements=body.system_requirements,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.post("/addons", status_code=201, response_model=ProductIdResponse)
async def create_addon(body: CreateAddonRequest) -> ProductIdResponse:
    command = CreateAddon(
        game_id=body.game_id,
        title=body.title,
        price=body.price,
        short_description=body.short_description,
        description=body.description,
        developer=body.developer,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=ProductCardListResponse)
async def list_products(active_only: bool = True) -> ProductCardListResponse:
    query = current_domain.repository_for(ProductCard)._dao.query.filter(is_deleted=False)
    if active_only:
        query = query.filter(is_active=True)
    return ProductCardListResponse(
        products=[
            ProductCardResponse(
                product_id=str(card.product_id),
                product_type=card.product_type,
                title=card.title,
                short_description=card.short_description,
                developer=card.developer,
                price=card.price,
                game_id=str(card.game_id) if card.game_id else None,
                is_active=bool(card.is_active),
            )
            for card in query.limit(None).all().items
        ]
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponse(
        product_id=str(product.id),
        product_type=product.product_type,
        title=product.title,
        short_description=product.short_description,
        description=product.description,
        developer=product.developer,
        price=product.price,
        game_id=str(product.game_id) if product.game_id else None,
        system_requirements=product.system_requirements,
        is_active=bool(product.is_active),
        is_deleted=bool(product.is_deleted),
        genre_ids=product.classification_ids("genres"),
        tag_ids=product.classification_ids("tags"),
        mechanic_ids=product.classification_ids("mechanics"),
        mature_content_ids=product.classification_ids("mature_contents"),
        created_at=product.created_at,
    )


@product_router.put("/{product_id}/details", response_model=StatusResponse)
async def update_product_details(product_id: str, body: UpdateProductDetailsRequest) -> StatusResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        title=body.title,
        short_description=body.short_description,
        description=body.description,
        developer=body.developer,
        system_requirements=body.system_requirements,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def change_product_price(product_id: str, body: ChangePriceRequest) -> StatusResponse:
    current_domain.process(
        ChangeProductPrice(product_id=product_id, new_price=body.new_price),
        asynchronous=False,
    )
    return StatusResponse()


@product_router.put("/{product_id}/activate", response_model=StatusResponse)
async def activate_product(product_id: str) -> StatusResponse:
    current_domain.process(ActivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/deactivate", response_model=StatusResponse)
async def deactivate_product(product_id: str) -> StatusResponse:
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/restore", response_model=StatusResponse)
async def restore_product(product_id: str) -> StatusResponse:
    current_domain.process(RestoreProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/genres", response_model=StatusResponse)
async def assign_genres(product_id: str, body: ClassificationRequest) -> StatusResponse:
    current_domain.process(
        AssignGenres(product_id=product_id, genre_ids=json.dumps(body.ids)),
        asynchronous=False,
    )
    return StatusResponse()


@product_router.put("/{product_id}/tags", response_model=StatusResponse)
async def assign_tags(product_id: str, body: ClassificationRequest) -> StatusResponse:
    current_domain.process(
        AssignTags(product_id=product_id, tag_ids=json.dumps(body.ids)),
        asynchronous=False,
    )
    return StatusResponse()


@product_router.put("/{product_id}/mechanics", response_model=StatusResponse)
async def assign_mechanics(product_id: str, body: ClassificationRequest) -> StatusResponse:
    current_domain.process(
        AssignMechanics(product_id=product_id, mechanic_ids=json.dumps(body.ids)),
        asynchronous=False,
    )
    return StatusResponse()


@product_router.put("/{product_id}/mature-contents", response_model=StatusResponse)
async def assign_mature_contents(product_id: str, body: ClassificationRequest) -> StatusResponse:
    current_domain.process(
        AssignMatureContents(product_id=product_id, mature_content_ids=json.dumps(body.ids)),
        asynchronous=False,
    )
    return StatusResponse()


# --- Genre endpoints ---


@genre_router.post("", status_code=201, response_model=TermIdResponse)
async def create_genre(body: GenreRequest) -> TermIdResponse:
    result = current_domain.process(CreateGenre(name=body.name), asynchronous=False)
    return TermIdResponse(id=result)


@genre_router.get("", response_model=TermListResponse)
async def list_genres() -> TermListResponse:
    return TermListResponse(items=[_term_response(t) for t in live_terms(Genre)])


@genre_router.put("/{genre_id}", response_model=StatusResponse)
async def rename_genre(genre_id: str, body: GenreRequest) -> StatusResponse:
    current_domain.process(RenameGenre(genre_id=genre_id, name=body.name), asynchronous=False)
    return StatusResponse()


@genre_router.delete("/{genre_id}", response_model=StatusResponse)
async def delete_genre(genre_id: str) -> StatusResponse:
    current_domain.process(DeleteGenre(genre_id=genre_id), asynchronous=False)
    return StatusResponse()


# --- Tag endpoints ---


@tag_router.post("", status_code=201, response_model=TermIdResponse)
async def create_tag(body: TagRequest) -> TermIdResponse:
    result = current_domain.process(CreateTag(title=body.title), asynchronous=False)
    return TermIdResponse(id=result)


@tag_router.get("", response_model=TermListResponse)
async def list_tags() -> TermListResponse:
    return TermListResponse(items=[_term_response(t) for t in live_terms(Tag)])


@tag_router.put("/{tag_id}", response_model=StatusResponse)
async def rename_tag(tag_id: str, body: TagRequest) -> StatusResponse:
    current_domain.process(RenameTag(tag_id=tag_id, title=body.title), asynchronous=False)
    return StatusResponse()


@tag_router.delete("/{tag_id}", response_model=StatusResponse)
async def delete_tag(tag_id: str) -> StatusResponse:
    current_domain.process(DeleteTag(tag_id=tag_id), asynchronous=False)
    return StatusResponse()


# --- Mechanic endpoints ---


@mechanic_router.post("", status_code=201, response_model=TermIdResponse)
async def create_mechanic(body: CreateMechanicRequest) -> TermIdResponse:
    command = CreateMechanic(name=body.name, description=body.description, logo_url=body.logo_url)
    result = current_domain.process(command, asynchronous=False)
    return TermIdResponse(id=result)


@mechanic_router.get("", response_model=TermListResponse)
async def list_mechanics() -> TermListResponse:
    return TermListResponse(items=[_term_response(t) for t in live_terms(Mechanic)])


@mechanic_router.put("/{mechanic_id}", response_model=StatusResponse)
async def update_mechanic(mechanic_id: str, body: UpdateMechanicRequest) -> StatusResponse:
    command = UpdateMechanic(
        mechanic_id=mechanic_id,
        name=body.name,
        description=body.description,
        logo_url=body.logo_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@mechanic_router.delete("/{mechanic_id}", response_model=StatusResponse)
async def delete_mechanic(mechanic_id: str) -> StatusResponse:
    current_domain.process(DeleteMechanic(mechanic_id=mechanic_id), asynchronous=False)
    return StatusResponse()


# --- Mature content endpoints ---


@mature_content_router.post("", status_code=201, response_model=TermIdResponse)
async def create_mature_content(body: CreateMatureContentRequest) -> TermIdResponse:
    command = CreateMatureContent(name=body.name, description=body.description, logo_url=body.logo_url)
    result = current_domain.process(command, asynchronous=False)
    return TermIdResponse(id=result)


@mature_content_router.get("", response_model=TermListResponse)
async def list_mature_contents() -> TermListResponse:
    return TermListResponse(items=[_term_response(t) for t in live_terms(MatureContent)])


@mature_content_router.put("/{mature_content_id}", response_model=StatusResponse)
async def update_mature_content(mature_content_id: str, body: UpdateMatureContentRequest) -> StatusResponse:
    command = UpdateMatureContent(
        mature_content_id=mature_content_id,
        name=body.name,
        description=body.description,
        logo_url=body.logo_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@mature_content_router.delete("/{mature_content_id}", response_model=StatusResponse)
async def delete_mature_content(mature_content_id: str) -> StatusResponse:
    current_domain.process(DeleteMatureContent(mature_content_id=mature_content_id), asynchronous=False)
    return StatusResponse()
