import datetime as dt
from datetime import datetime, timezone

import pytest
from supabase import PostgrestAPIError

from app.core.constants import Collections
from app.core.errors import (
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentValidationError,
    StoreError,
)
from app.core.query import Filter, order_by_asc, order_by_desc, where_equal
from app.database import DocumentStore
from app.models.menu import MenuItem
from app.schemas.menu import MenuItemUpdate
from tests.fakes import FakeSupabase


def menu_item(name="Stout", price=5.5, category="drinks", **extra):
    return {"name": name, "price": price, "category": category, **extra}


def event(title, date, **extra):
    return {
        "title": title,
        "date": date,
        "time": "19:00",
        "description": "Good night out",
        "capacity": 40,
        "location": "Back room",
        "duration": 120,
        **extra,
    }


# -------- create / get --------


def test_create_stamps_id_and_equal_timestamps(store):
    item = store.create_document(Collections.MENU_ITEMS, menu_item())

    assert isinstance(item, MenuItem)
    assert item.id
    assert item.created_at == item.updated_at

    fetched = store.get_document(Collections.MENU_ITEMS, item.id)
    assert fetched == item


def test_create_ignores_client_supplied_timestamps_and_id(store):
    item = store.create_document(
        Collections.MENU_ITEMS,
        menu_item(id="chosen", createdAt="2000-01-01T00:00:00Z", updatedAt="2000-01-01T00:00:00Z"),
    )

    assert item.id != "chosen"
    assert item.created_at.year == 2026


def test_create_with_explicit_id_and_duplicate(store):
    store.create_document(Collections.SECTIONS, {"title": "Welcome"}, doc_id="hero")

    with pytest.raises(DocumentExistsError):
        store.create_document(Collections.SECTIONS, {"title": "Again"}, doc_id="hero")


def test_create_rejects_invalid_payload(store):
    with pytest.raises(DocumentValidationError):
        store.create_document(Collections.MENU_ITEMS, menu_item(price=-1))

    with pytest.raises(DocumentValidationError):
        store.create_document(Collections.MENU_ITEMS, menu_item(category="cocktails"))

    with pytest.raises(DocumentValidationError):
        store.create_document(Collections.MENU_ITEMS, menu_item(colour="black"))

    assert store.get_documents(Collections.MENU_ITEMS) == []


def test_unknown_collection_is_a_validation_error(store):
    with pytest.raises(DocumentValidationError):
        store.get_document("kegs", "1")


def test_get_missing_returns_none(store):
    assert store.get_document(Collections.MENU_ITEMS, "nope") is None


def test_malformed_row_is_validation_error_on_get_and_skipped_on_list(store, fake_supabase):
    good = store.create_document(Collections.MENU_ITEMS, menu_item())
    fake_supabase.tables[Collections.MENU_ITEMS].append(
        {"id": "broken", "name": "Mystery", "createdAt": "2026-01-01T00:00:00Z"}
    )

    with pytest.raises(DocumentValidationError):
        store.get_document(Collections.MENU_ITEMS, "broken")

    assert [d.id for d in store.get_documents(Collections.MENU_ITEMS)] == [good.id]


# -------- update / delete --------


def test_update_merges_and_bumps_updated_at(store):
    item = store.create_document(Collections.MENU_ITEMS, menu_item(description="Dry Irish stout"))

    updated = store.update_document(Collections.MENU_ITEMS, item.id, {"price": 6.0})

    assert updated.price == 6.0
    assert updated.name == "Stout"
    assert updated.description == "Dry Irish stout"
    assert updated.created_at == item.created_at
    assert updated.updated_at > item.updated_at
    assert store.get_document(Collections.MENU_ITEMS, item.id) == updated


def test_update_accepts_partial_schema(store):
    item = store.create_document(Collections.MENU_ITEMS, menu_item())

    updated = store.update_document(
        Collections.MENU_ITEMS, item.id, MenuItemUpdate(is_available=False)
    )

    assert updated.is_available is False
    assert updated.price == item.price


def test_update_timestamp_increases_even_if_clock_stalls(fake_supabase):
    fixed = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    store = DocumentStore(fake_supabase, clock=lambda: fixed)
    item = store.create_document(Collections.MENU_ITEMS, menu_item())

    first = store.update_document(Collections.MENU_ITEMS, item.id, {"price": 1})
    second = store.update_document(Collections.MENU_ITEMS, item.id, {"price": 2})

    assert item.updated_at < first.updated_at < second.updated_at


def test_update_missing_raises_not_found(store):
    with pytest.raises(DocumentNotFoundError):
        store.update_document(Collections.MENU_ITEMS, "ghost", {"price": 1})


def test_update_rejecting_merged_document_writes_nothing(store, fake_supabase):
    item = store.create_document(Collections.MENU_ITEMS, menu_item())
    fake_supabase.calls.clear()

    with pytest.raises(DocumentValidationError):
        store.update_document(Collections.MENU_ITEMS, item.id, {"price": -3})

    assert (Collections.MENU_ITEMS, "update") not in fake_supabase.calls


def test_delete_then_get_is_none_and_delete_is_idempotent(store):
    item = store.create_document(Collections.MENU_ITEMS, menu_item())

    store.delete_document(Collections.MENU_ITEMS, item.id)
    store.delete_document(Collections.MENU_ITEMS, item.id)

    assert store.get_document(Collections.MENU_ITEMS, item.id) is None


# -------- queries --------


def test_get_documents_filters_orders_and_limits(store):
    for name, category in [("Crisps", "snacks"), ("Ale", "drinks"), ("Cider", "drinks"), ("Bitter", "drinks")]:
        store.create_document(Collections.MENU_ITEMS, menu_item(name=name, category=category))

    drinks = store.get_documents(
        Collections.MENU_ITEMS,
        filters=[where_equal("category", "drinks")],
        order_by=[order_by_asc("name")],
    )
    assert [d.name for d in drinks] == ["Ale", "Bitter", "Cider"]

    top_two = store.get_documents(
        Collections.MENU_ITEMS,
        order_by=[order_by_desc("name")],
        limit=2,
    )
    assert [d.name for d in top_two] == ["Crisps", "Cider"]

    assert store.get_documents(Collections.MENU_ITEMS, filters=[where_equal("category", "desserts")]) == []


def test_get_documents_accepts_snake_case_field_names_and_dates(store):
    store.create_document(Collections.EVENTS, event("Quiz", "2026-05-01", isActive=False))
    store.create_document(Collections.EVENTS, event("Folk", "2026-06-01"))
    store.create_document(Collections.EVENTS, event("Jazz", "2026-07-01"))

    active_from_june = store.get_documents(
        Collections.EVENTS,
        filters=[where_equal("is_active", True), Filter("date", ">=", dt.date(2026, 6, 1))],
        order_by=[order_by_asc("date")],
    )
    assert [e.title for e in active_from_june] == ["Folk", "Jazz"]


def test_negative_limit_rejected(store):
    with pytest.raises(DocumentValidationError):
        store.get_documents(Collections.MENU_ITEMS, limit=-1)


def test_unsupported_operator_rejected():
    with pytest.raises(DocumentValidationError):
        Filter("price", "~", 3)


# -------- pagination --------


def test_pages_concatenate_to_full_ordered_scan(store):
    ids = [store.create_document(Collections.MENU_ITEMS, menu_item(name=f"Beer {i}")).id for i in range(7)]

    seen, cursor, pages = [], None, 0
    while True:
        page = store.get_page(Collections.MENU_ITEMS, page_size=3, cursor=cursor)
        pages += 1
        seen.extend(item.id for item in page.items)
        if not page.has_more:
            break
        cursor = page.next_cursor

    assert pages == 3
    assert seen == list(reversed(ids))
    assert len(set(seen)) == 7


def test_page_ties_on_order_field_are_broken_by_id(store):
    for i in range(5):
        store.create_document(Collections.MENU_ITEMS, menu_item(name=f"Pint {i}", price=4.0))

    first = store.get_page(Collections.MENU_ITEMS, order_by_field="price", direction="asc", page_size=2)
    second = store.get_page(
        Collections.MENU_ITEMS, order_by_field="price", direction="asc", page_size=2, cursor=first.next_cursor
    )
    third = store.get_page(
        Collections.MENU_ITEMS, order_by_field="price", direction="asc", page_size=2, cursor=second.next_cursor
    )

    all_ids = [i.id for i in first.items + second.items + third.items]
    assert all_ids == sorted(all_ids)
    assert third.has_more is False


def test_exact_multiple_of_page_size_has_no_extra_page(store):
    for i in range(4):
        store.create_document(Collections.MENU_ITEMS, menu_item(name=f"Wine {i}"))

    first = store.get_page(Collections.MENU_ITEMS, page_size=2)
    second = store.get_page(Collections.MENU_ITEMS, page_size=2, cursor=first.next_cursor)

    assert first.has_more is True
    assert len(second.items) == 2
    assert second.has_more is False


def test_empty_collection_page(store):
    page = store.get_page(Collections.BOOKINGS)

    assert page.items == []
    assert page.next_cursor is None
    assert page.has_more is False


def test_bad_cursor_and_page_size_rejected(store):
    with pytest.raises(DocumentValidationError):
        store.get_page(Collections.MENU_ITEMS, cursor="not-a-cursor!!")

    with pytest.raises(DocumentValidationError):
        store.get_page(Collections.MENU_ITEMS, page_size=0)


# -------- provider failures --------


def test_provider_failure_surfaces_as_store_error(store, fake_supabase):
    fake_supabase.fail(
        Collections.MENU_ITEMS,
        PostgrestAPIError({"code": "42501", "message": "permission denied for table", "hint": None, "details": None}),
    )

    with pytest.raises(StoreError) as exc_info:
        store.get_documents(Collections.MENU_ITEMS)

    assert exc_info.value.code == "42501"
    assert "permission denied" in exc_info.value.message


def test_store_uses_injected_models():
    store = DocumentStore(FakeSupabase(), models={Collections.MENU_ITEMS: MenuItem})

    with pytest.raises(DocumentValidationError):
        store.get_documents(Collections.EVENTS)
