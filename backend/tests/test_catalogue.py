import uuid

API = "/api/v1"


def _new_product(category_id, name="tea 100g", price="3.00"):
    return {
        "product_name": name,
        "description": "loose leaf",
        "price": price,
        "category": str(category_id),
    }


def test_list_products(client, catalogue):
    res = client.get(f"{API}/products")
    assert res.status_code == 200
    names = [it["product_name"] for it in res.json()["data"]]
    assert set(names) == {"chips", "soda"}


def test_list_products_empty(client):
    assert client.get(f"{API}/products").status_code == 404


def test_create_get_update_delete_product(client, catalogue):
    res = client.post(f"{API}/products/", json=_new_product(catalogue["category"], name="  tea 100g "))
    assert res.status_code == 201
    created = res.json()["data"][0]
    assert created["product_name"] == "tea 100g"
    assert created["category_name"] == "snacks"
    pid = created["id"]

    dup = client.post(f"{API}/products/", json=_new_product(catalogue["category"]))
    assert dup.status_code == 409

    res = client.get(f"{API}/products/{pid}")
    assert res.status_code == 200
    assert res.json()["data"][0]["price"] == "3.00"

    res = client.put(f"{API}/products/{pid}/", json=_new_product(catalogue["category"], price="3.50"))
    assert res.status_code == 200
    assert res.json()["data"][0]["price"] == "3.50"

    assert client.delete(f"{API}/products/{pid}").status_code == 200
    assert client.get(f"{API}/products/{pid}").status_code == 404
    assert client.delete(f"{API}/products/{pid}").status_code == 404


def test_product_bad_id(client, catalogue):
    assert client.get(f"{API}/products/not-a-uuid").status_code == 400
    assert client.get(f"{API}/products/{uuid.uuid4()}").status_code == 404


def test_categories(client, catalogue):
    res = client.post(f"{API}/category/", json={"name": "  Drinks "})
    assert res.status_code == 201
    cid = res.json()["data"][0]["id"]
    assert res.json()["data"][0]["name"] == "drinks"

    assert client.post(f"{API}/category/", json={"name": "DRINKS"}).status_code == 409

    names = [c["name"] for c in client.get(f"{API}/category").json()["data"]]
    assert set(names) == {"snacks", "drinks"}

    assert client.delete(f"{API}/category/{cid}").status_code == 200
    assert client.delete(f"{API}/category/{cid}").status_code == 404
    assert client.delete(f"{API}/category/oops").status_code == 400
