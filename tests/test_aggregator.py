import pytest
from app.core.exceptions import TransportFailure
from app.enums.product_status import ProductStatus
from app.services.catalog.aggregator import aggregate_products

pytestmark = pytest.mark.anyio

T1 = "2026-01-01T00:00:00+00:00"
T2 = "2026-02-01T00:00:00+00:00"
T3 = "2026-03-01T00:00:00+00:00"


@pytest.fixture()
async def seeded(store, make_product):
    await store.set("drafts/d1", make_product(title="Draft", created_at=T2))
    await store.set(
        "retailers/wallpapers/products/r1",
        make_product(title="Retail", status="Published", created_at=T1),
    )
    await store.set(
        "buyers/wall-art/products/b1",
        make_product(title="Buyer", status="Published", created_at=T3, db="buyers", category="wall-art"),
    )
    return store


async def test_sorted_newest_first(seeded, categories, databases):
    products = await aggregate_products(seeded, categories, databases)
    assert [p["id"] for p in products] == ["b1", "d1", "r1"]


async def test_limit_applies_after_sort(seeded, categories, databases):
    products = await aggregate_products(seeded, categories, databases, limit=2)
    assert [p["id"] for p in products] == ["b1", "d1"]


async def test_published_record_overrides_draft_with_same_id(store, make_product, categories, databases):
    await store.set("drafts/p1", make_product(title="Stale draft"))
    await store.set("retailers/wallpapers/products/p1", make_product(title="Live", status="Published"))

    products = await aggregate_products(store, categories, databases)

    assert len(products) == 1
    assert products[0]["title"] == "Live"
    assert products[0]["status"] == ProductStatus.published.value


async def test_live_records_take_location_from_path(seeded, categories, databases):
    products = {p["id"]: p for p in await aggregate_products(seeded, categories, databases)}
    assert (products["b1"]["db"], products["b1"]["category"]) == ("buyers", "wall-art")
    assert products["b1"]["category_name"] == "Wall Art"
    assert products["d1"]["category_name"] == "Wallpapers"


async def test_scoped_to_namespace_and_category(seeded, categories, databases):
    retail = await aggregate_products(seeded, categories, databases, db="retailers")
    assert sorted(p["id"] for p in retail) == ["d1", "r1"]

    wall_art = await aggregate_products(seeded, categories, databases, category="wall-art")
    assert [p["id"] for p in wall_art] == ["b1"]

    seeded.reads.clear()
    await aggregate_products(seeded, categories, databases, db="buyers", category="wallpapers")
    assert seeded.reads == ["drafts", "buyers/wallpapers/products"]


async def test_unreadable_live_collection_contributes_nothing(seeded, categories, databases):
    seeded.fail_reads = {"buyers/wall-art/products"}
    products = await aggregate_products(seeded, categories, databases)
    assert [p["id"] for p in products] == ["d1", "r1"]


async def test_unreadable_drafts_propagates(seeded, categories, databases):
    seeded.fail_reads = {"drafts"}
    with pytest.raises(TransportFailure):
        await aggregate_products(seeded, categories, databases)


async def test_mixed_timestamp_shapes_sort_together(store, categories, databases):
    await store.set("drafts/a", {"db": "retailers", "category": "wallpapers", "created_at": 1767225600000})
    await store.set("drafts/b", {"db": "retailers", "category": "wallpapers", "created_at": "2025-06-01T00:00:00Z"})
    await store.set("drafts/c", {"db": "retailers", "category": "wallpapers", "created_at": 1780000000})

    products = await aggregate_products(store, categories, databases)

    assert [p["id"] for p in products] == ["c", "a", "b"]
    assert products[1]["created_at"] == "2026-01-01T00:00:00+00:00"


async def test_drafts_can_be_left_out(seeded, categories, databases):
    products = await aggregate_products(seeded, categories, databases, include_drafts=False)
    assert [p["id"] for p in products] == ["b1", "r1"]
    assert "drafts" not in seeded.reads


async def test_no_categories_lists_drafts_only(seeded, databases):
    products = await aggregate_products(seeded, [], databases)
    assert [p["id"] for p in products] == ["d1"]


async def test_category_filter_accepts_display_name(seeded, make_product, categories, databases):
    await seeded.set("drafts/d2", make_product(title="Art draft", category="Wall Art"))

    products = await aggregate_products(seeded, categories, databases, category="Wall Art")

    assert sorted(p["id"] for p in products) == ["b1", "d2"]
    assert {p["category"] for p in products} == {"wall-art"}
    assert {p["category_name"] for p in products} == {"Wall Art"}
