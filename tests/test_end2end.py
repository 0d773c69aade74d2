import pytest
from fastapi import HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from app.routes.products import create, get, list_all, publish_route, unpublish_route, delete, update
from app.routes.categories import create as create_category_route
from app.routes.auth import login, register_user
from app.routes.storefront import shop_router
from app.routes.errors import to_http_exception
from app.core.exceptions import TransitionFailure, TransportFailure
from app.schemas.catalog import UnpublishRequest
from app.schemas.category import CategoryCreate
from app.schemas.product import ProductCreate, ProductUpdate
from app.schemas.user import UserRegister
from app.services.category_service import category_refs

pytestmark = pytest.mark.anyio


async def _categories(store):
    await create_category_route(CategoryCreate(name="Wall Art"), store=store)
    await create_category_route(CategoryCreate(name="Wallpapers"), store=store)
    return await category_refs(store)


async def _create_draft(store, categories, databases, **overrides):
    data = dict(title="Botanical Print", price=30, db="buyers", category="Wall Art", stock=4)
    data.update(overrides)
    return await create(ProductCreate(**data), store=store, categories=categories, databases=databases)


@pytest.mark.order(1)
async def test_create_draft_route(store, databases):
    categories = await _categories(store)

    created = await _create_draft(store, categories, databases)

    assert created.status.value == "Draft"
    assert created.category == "wall-art"
    assert created.category_name == "Wall Art"

    fetched = await get(created.id, store=store, categories=categories, databases=databases)
    assert fetched.title == "Botanical Print"


@pytest.mark.order(2)
async def test_publish_then_list_then_unpublish(store, databases):
    categories = await _categories(store)
    created = await _create_draft(store, categories, databases)

    result = await publish_route(created.id, store=store)
    assert result.success
    assert result.destination == f"buyers/wall-art/products/{created.id}"

    listing = await list_all(
        db=None, category=None, search=None, status=None, limit=None,
        store=store, categories=categories, databases=databases,
    )
    assert listing.total == 1
    assert listing.items[0].status.value == "Published"
    assert listing.items[0].db == "buyers"

    result = await unpublish_route(
        created.id, UnpublishRequest(db="buyers", category="wall-art"), store=store,
    )
    assert result.destination == f"drafts/{created.id}"
    assert (await get(created.id, store=store, categories=categories, databases=databases)).status.value == "Draft"


@pytest.mark.order(3)
async def test_missing_product_maps_to_404(store, databases):
    categories = await _categories(store)

    with pytest.raises(HTTPException) as excinfo:
        await publish_route("nope", store=store)
    assert excinfo.value.status_code == 404

    with pytest.raises(HTTPException) as excinfo:
        await update("nope", ProductUpdate(price=1), store=store, categories=categories, databases=databases)
    assert excinfo.value.status_code == 404


@pytest.mark.order(4)
async def test_unknown_database_maps_to_422(store, databases):
    categories = await _categories(store)

    with pytest.raises(HTTPException) as excinfo:
        await _create_draft(store, categories, databases, db="wholesale")
    assert excinfo.value.status_code == 422


@pytest.mark.order(5)
async def test_delete_route(store, databases):
    categories = await _categories(store)
    created = await _create_draft(store, categories, databases)

    response = await delete(created.id, store=store, categories=categories, databases=databases)
    assert response["paths"] == [f"drafts/{created.id}"]


@pytest.mark.order(6)
async def test_register_and_login(store):
    user = await register_user(UserRegister(username="ana", password="pw-123"), store=store)
    assert user["role"] == "Customer"
    assert "hashed_password" not in user

    tokens = await login(OAuth2PasswordRequestForm(username="ana", password="pw-123"), store=store)
    assert tokens["token_type"] == "bearer"

    with pytest.raises(HTTPException) as excinfo:
        await login(OAuth2PasswordRequestForm(username="ana", password="nope"), store=store)
    assert excinfo.value.status_code == 401


def test_error_mapping():
    failure = TransitionFailure("publish", "p1", "drafts/p1", "buyers/x/products/p1", "delete", RuntimeError("boom"))
    mapped = to_http_exception(failure)
    assert mapped.status_code == 500
    assert mapped.detail["step"] == "delete"
    assert to_http_exception(TransportFailure("down")).status_code == 503
    assert to_http_exception(ValueError("bad id")).status_code == 400


def test_shop_router_exposes_published_endpoints():
    paths = {route.path for route in shop_router.routes}
    assert paths == {"/shop/products", "/shop/products/{product_id}"}
