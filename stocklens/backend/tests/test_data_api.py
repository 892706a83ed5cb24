from datetime import date

from app.models import DailyFact, Product
from app.utils.auth_internal import create_access_token

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _seed(client, auth_headers, rows, make_workbook):
    resp = client.post(
        "/api/upload", files={"file": ("seed.xlsx", make_workbook(rows), XLSX)}, headers=auth_headers
    )
    assert resp.status_code == 200, resp.text


def test_data_returns_products_and_ordered_facts(client, auth_headers, three_day_rows, make_workbook):
    _seed(client, auth_headers, three_day_rows, make_workbook)

    body = client.get("/api/data", headers=auth_headers).json()

    assert [p["name"] for p in body["products"]] == ["Gadget", "Widget"]
    assert len(body["data"]) == 5
    keys = [(d["date"], d["product_id"]) for d in body["data"]]
    assert keys == sorted(keys)
    widget_first = next(d for d in body["data"] if d["product_name"] == "Widget")
    assert widget_first["opening_inventory"] == 100
    assert widget_first["procurement_amount"] == 25.0
    assert widget_first["sales_amount"] == 20.0


def test_data_filters_by_product_id(client, auth_headers, three_day_rows, make_workbook, db_session):
    _seed(client, auth_headers, three_day_rows, make_workbook)
    gadget = db_session.query(Product).filter_by(product_code="P2").one()

    body = client.get(
        "/api/data", params=[("product_id", str(gadget.id)), ("product_id", "abc")], headers=auth_headers
    ).json()

    assert [p["product_code"] for p in body["products"]] == ["P2"]
    assert {d["product_id"] for d in body["data"]} == {gadget.id}


def test_data_derives_missing_amounts(client, auth_headers, user, db_session):
    product = Product(product_code="X1", name="Manual", uploaded_by=user.id)
    db_session.add(product)
    db_session.flush()
    db_session.add(DailyFact(
        product_id=product.id,
        fact_date=date(2024, 1, 1),
        opening_inventory=0,
        procurement_qty=2,
        procurement_price=3,
        procurement_amount=None,
        sales_qty=0,
        sales_price=None,
        sales_amount=None,
    ))
    db_session.commit()

    point = client.get("/api/data", headers=auth_headers).json()["data"][0]
    assert point["procurement_amount"] == 6.0
    assert point["sales_price"] == 0.0
    assert point["sales_amount"] == 0.0


def test_data_is_scoped_to_uploader(client, auth_headers, other_user, three_day_rows, make_workbook):
    _seed(client, auth_headers, three_day_rows, make_workbook)
    other_headers = {"Authorization": f"Bearer {create_access_token(other_user.id, other_user.email)}"}

    body = client.get("/api/data", headers=other_headers).json()
    assert body == {"products": [], "data": []}


def test_me_reports_import_stats(client, auth_headers, user, three_day_rows, make_workbook):
    before = client.get("/api/me", headers=auth_headers).json()
    assert before["user"]["email"] == user.email
    assert before["stats"] == {"product_count": 0, "import_count": 0, "last_import": None}

    _seed(client, auth_headers, three_day_rows, make_workbook)
    _seed(client, auth_headers, three_day_rows, make_workbook)

    stats = client.get("/api/me", headers=auth_headers).json()["stats"]
    assert stats["product_count"] == 2
    assert stats["import_count"] == 2
    assert stats["last_import"] is not None


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
