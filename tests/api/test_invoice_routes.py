"""Invoice routes — HTTP mapping of pipeline outcomes and the cached listing.

Tests cover:
    - Successful create/update → 303 to /dashboard/invoices
    - Validation failure → 400 {errors, message}; unknown customer → 503
    - Update/delete of a missing invoice → 404 with the generic message
    - Listing is served from cache until a mutation invalidates it
    - Oversized amounts and pages are caller errors, never 500s
    - Pages past the end are served but not cached
"""

import pytest

from dashboard.core.domain_types import INVOICES_VIEW

FORM = {"customerId": "c1", "amount": "50.00", "status": "pending"}


@pytest.fixture
async def customer(add_customer):
    return await add_customer("c1", "Delba de Oliveira", "delba@oliveira.com")


async def _only_invoice_id(client) -> str:
    res = await client.get("/api/v1/invoices")
    (row,) = res.json()["invoices"]
    return row["id"]


async def test_create_redirects_to_listing(client, customer):
    res = await client.post("/api/v1/invoices", json=FORM)
    assert res.status_code == 303
    assert res.headers["location"] == INVOICES_VIEW


async def test_created_invoice_is_listed_formatted(client, customer):
    await client.post("/api/v1/invoices", json=FORM)
    body = (await client.get("/api/v1/invoices")).json()
    (row,) = body["invoices"]
    assert row["amount"] == "$50.00"
    assert row["status"] == "pending"
    assert row["name"] == "Delba de Oliveira"
    assert body["pagination"] == {"page": 1, "total_pages": 1, "pages": [1]}


async def test_create_with_bad_fields_returns_400_state(client, customer):
    res = await client.post("/api/v1/invoices", json={"customerId": "c1", "amount": "-1"})
    assert res.status_code == 400
    assert res.json() == {
        "errors": {
            "amount": ["Please enter an amount greater than $0."],
            "status": ["Please select an invoice status."],
        },
        "message": "Missing Fields. Failed to Create Invoice.",
    }


async def test_create_for_unknown_customer_returns_generic_503(client):
    res = await client.post("/api/v1/invoices", json=FORM)
    assert res.status_code == 503
    assert res.json() == {
        "errors": {}, "message": "Database Error: Failed to Create Invoice.",
    }


async def test_get_invoice_returns_dollars(client, customer):
    await client.post("/api/v1/invoices", json=FORM)
    invoice_id = await _only_invoice_id(client)
    res = await client.get(f"/api/v1/invoices/{invoice_id}")
    assert res.status_code == 200
    assert res.json() == {
        "id": invoice_id, "customer_id": "c1", "amount": 50.0, "status": "pending",
    }


async def test_get_unknown_invoice_is_404(client):
    res = await client.get("/api/v1/invoices/missing")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_update_redirects_and_changes_row(client, customer):
    await client.post("/api/v1/invoices", json=FORM)
    invoice_id = await _only_invoice_id(client)
    res = await client.put(
        f"/api/v1/invoices/{invoice_id}",
        json={**FORM, "amount": "75.25", "status": "paid"},
    )
    assert res.status_code == 303
    invoice = (await client.get(f"/api/v1/invoices/{invoice_id}")).json()
    assert invoice["amount"] == 75.25
    assert invoice["status"] == "paid"


async def test_update_missing_invoice_is_404_with_generic_message(client, customer):
    res = await client.put("/api/v1/invoices/missing", json=FORM)
    assert res.status_code == 404
    assert res.json()["message"] == "Database Error: Failed to Update Invoice."


async def test_delete_then_delete_again(client, customer):
    await client.post("/api/v1/invoices", json=FORM)
    invoice_id = await _only_invoice_id(client)

    first = await client.delete(f"/api/v1/invoices/{invoice_id}")
    assert first.status_code == 200
    assert first.json() == {"errors": {}, "message": "Deleted Invoice."}

    second = await client.delete(f"/api/v1/invoices/{invoice_id}")
    assert second.status_code == 404
    assert second.json()["message"] == "Database Error: Failed to Delete Invoice."


async def test_listing_is_cached_until_mutation(client, customer, view_cache):
    assert (await client.get("/api/v1/invoices")).json()["invoices"] == []
    assert view_cache.get(INVOICES_VIEW, ("", 1)) is not None

    await client.post("/api/v1/invoices", json=FORM)

    assert view_cache.get(INVOICES_VIEW, ("", 1)) is None
    assert len((await client.get("/api/v1/invoices")).json()["invoices"]) == 1


async def test_page_zero_is_rejected(client):
    res = await client.get("/api/v1/invoices", params={"page": 0})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PAGE"


async def test_non_numeric_page_is_a_request_validation_error(client):
    res = await client.get("/api/v1/invoices", params={"page": "two"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("amount", ["1e20", "99999999999"])
async def test_create_with_oversized_amount_is_an_amount_error(client, customer, amount):
    res = await client.post("/api/v1/invoices", json={**FORM, "amount": amount})
    assert res.status_code == 400
    assert res.json() == {
        "errors": {"amount": ["Please enter an amount greater than $0."]},
        "message": "Missing Fields. Failed to Create Invoice.",
    }


async def test_update_with_oversized_amount_is_an_amount_error(client, customer):
    await client.post("/api/v1/invoices", json=FORM)
    invoice_id = await _only_invoice_id(client)
    res = await client.put(f"/api/v1/invoices/{invoice_id}", json={**FORM, "amount": "1e20"})
    assert res.status_code == 400
    assert res.json()["message"] == "Missing Fields. Failed to Update Invoice."
    assert (await client.get(f"/api/v1/invoices/{invoice_id}")).json()["amount"] == 50.0


async def test_huge_page_is_rejected_not_a_500(client):
    res = await client.get("/api/v1/invoices", params={"page": "10000000000000000000"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PAGE"


async def test_page_past_the_end_is_not_cached(client, customer, view_cache):
    res = await client.get("/api/v1/invoices", params={"page": 5})
    assert res.status_code == 200
    assert res.json()["invoices"] == []
    assert view_cache.get(INVOICES_VIEW, ("", 5)) is None
    assert len(view_cache) == 0
