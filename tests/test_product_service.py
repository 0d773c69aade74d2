import pytest
from app.core.exceptions import InvalidProductLocation, ProductNotFound
from app.enums.product_status import ProductStatus
from app.schemas.product import PLACEHOLDER_IMAGE, ProductCreate, ProductUpdate
from app.services.product_service import (
    create_draft, delete_product, filter_products, list_products,
    parse_specifications, related_products, to_response, update_product,
)
from app.services.storefront_service import storefront_detail, storefront_products

pytestmark = pytest.mark.anyio


def _create_payload(**overrides):
    data = dict(
        title="Grasscloth Wallpaper",
        price=80,
        db="retailers",
        category="Wall Art",
        images=["https://img.example.com/grass.jpg"],
        specifications="Width: 90cm, Natural fibre",
    )
    data.update(overrides)
    return ProductCreate(**data)


async def test_create_draft_slugifies_category(store, databases):
    product = await create_draft(store, _create_payload(), databases)

    stored = await store.get(f"drafts/{product['id']}")
    assert stored["category"] == "wall-art"
    assert stored["status"] == ProductStatus.draft.value
    assert stored["stock_status"] == "In Stock"
    assert stored["created_at"]


async def test_create_draft_rejects_unknown_database(store, databases):
    with pytest.raises(InvalidProductLocation):
        await create_draft(store, _create_payload(db="wholesale"), databases)


async def test_update_merges_at_current_location(store, make_product, categories, databases):
    await store.set("buyers/wallpapers/products/p1", make_product(status="Published", db="buyers"))

    updated = await update_product(store, "p1", ProductUpdate(price=52.5), categories, databases)

    assert updated["price"] == 52.5
    live = await store.get("buyers/wallpapers/products/p1")
    assert live["price"] == 52.5
    assert live["title"] == "Linen Wallpaper"
    assert await store.get("drafts/p1") is None


async def test_delete_removes_every_copy(store, make_product, categories, databases):
    await store.set("drafts/p1", make_product())
    await store.set("retailers/wallpapers/products/p1", make_product(status="Published"))

    paths = await delete_product(store, "p1", categories, databases)

    assert sorted(paths) == ["drafts/p1", "retailers/wallpapers/products/p1"]
    with pytest.raises(ProductNotFound):
        await delete_product(store, "p1", categories, databases)


async def test_list_products_filters_by_search_and_status(store, make_product, categories, databases):
    await store.set("drafts/a", make_product(title="Linen Wallpaper"))
    await store.set("drafts/b", make_product(title="Velvet Cushion"))
    await store.set("retailers/wallpapers/products/c", make_product(title="Linen Mural", status="Published"))

    found = await list_products(store, categories, databases, search="LINEN")
    assert sorted(p["id"] for p in found) == ["a", "c"]

    drafts = await list_products(store, categories, databases, search="linen", status=ProductStatus.draft)
    assert [p["id"] for p in drafts] == ["a"]


def test_filter_products_without_criteria_is_identity():
    products = [{"id": "a", "title": "x"}, {"id": "b"}]
    assert filter_products(products) == products


def test_parse_specifications():
    items = parse_specifications("Roll: 10m, Finish: matte, Washable, :orphan, a:b:c")
    assert [(i.key, i.value) for i in items] == [
        ("Roll", "10m"),
        ("Finish", "matte"),
        ("Washable", ""),
        ("a:b:c", ""),
    ]
    assert parse_specifications(None) == []


def test_to_response_uses_placeholder_without_images(categories):
    response = to_response({"id": "p1", "title": "Bare", "category": "wall-art", "created_at": 0}, categories)
    assert response.image_url == PLACEHOLDER_IMAGE
    assert response.category_name == "Wall Art"
    assert response.created_at == "1970-01-01T00:00:00+00:00"


async def test_related_products_exclude_self(store, make_product, categories):
    for product_id in ["p1", "p2", "p3"]:
        await store.set(f"buyers/wallpapers/products/{product_id}", make_product(status="Published"))
    await store.set("buyers/wallpapers/products/p4", make_product(status="Draft"))

    related = await related_products(store, "buyers", "wallpapers", "p1", categories)

    assert [r["id"] for r in related] == ["p2", "p3"]
    assert related[0]["category_name"] == "Wallpapers"


async def test_related_products_capped(store, make_product):
    for n in range(9):
        await store.set(f"buyers/wallpapers/products/p{n}", make_product(status="Published"))

    related = await related_products(store, "buyers", "wallpapers", "p0")

    assert len(related) == 6
    assert "p0" not in [r["id"] for r in related]


async def test_storefront_lists_published_only(store, make_product, categories):
    await store.set("drafts/d1", make_product(db="buyers"))
    await store.set("buyers/wallpapers/products/b1", make_product(status="Published", db="buyers"))
    await store.set("retailers/wallpapers/products/r1", make_product(status="Published"))

    products = await storefront_products(store, "buyers", categories)

    assert [p["id"] for p in products] == ["b1"]


async def test_storefront_detail(store, make_product, categories):
    await store.set("buyers/wallpapers/products/b1", make_product(status="Published", db="buyers"))
    await store.set("buyers/wallpapers/products/b2", make_product(status="Published", db="buyers"))

    detail = await storefront_detail(store, "buyers", "b1", categories)

    assert detail.product.id == "b1"
    assert detail.product.category_name == "Wallpapers"
    assert [s.key for s in detail.specifications] == ["Roll", "Finish"]
    assert [r.id for r in detail.related] == ["b2"]


async def test_storefront_detail_hides_drafts(store, make_product, categories):
    await store.set("drafts/d1", make_product(db="buyers"))

    with pytest.raises(ProductNotFound):
        await storefront_detail(store, "buyers", "d1", categories)
