from datetime import date, timedelta

from app.models import DailyFact, ImportBatch, Product
from app.utils.auth_internal import create_access_token

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _upload(client, contents, headers=None, filename="data.xlsx"):
    return client.post("/api/upload", files={"file": (filename, contents, XLSX)}, headers=headers or {})


def test_upload_imports_facts(client, auth_headers, db_session, widget_row, make_workbook):
    resp = _upload(client, make_workbook([widget_row]), auth_headers, filename="widget.xlsx")

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["imported"] == 1
    assert body["message"] == "Imported 1 records successfully."

    batch = db_session.get(ImportBatch, body["batchId"])
    assert batch.filename == "widget.xlsx"
    fact = db_session.query(DailyFact).one()
    assert fact.fact_date == date.today()
    assert float(fact.procurement_amount) == 10.0
    assert float(fact.sales_amount) == 12.0


def test_uploading_same_file_twice_does_not_grow_facts(client, auth_headers, db_session, three_day_rows, make_workbook):
    contents = make_workbook(three_day_rows)
    first = _upload(client, contents, auth_headers).json()
    second = _upload(client, contents, auth_headers).json()

    assert first["imported"] == second["imported"] == 5
    assert second["batchId"] != first["batchId"]
    assert db_session.query(DailyFact).count() == 5
    assert db_session.query(Product).count() == 2


def test_upload_requires_authentication(client, db_session, widget_row, make_workbook):
    resp = _upload(client, make_workbook([widget_row]))
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Unauthorized"
    assert db_session.query(ImportBatch).count() == 0


def test_upload_rejects_invalid_token(client, widget_row, make_workbook):
    resp = _upload(client, make_workbook([widget_row]), {"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"


def test_upload_rejects_expired_token(client, user, widget_row, make_workbook):
    token = create_access_token(user.id, user.email, expires_delta=timedelta(minutes=-5))
    resp = _upload(client, make_workbook([widget_row]), {"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_upload_accepts_session_cookie(client, user, widget_row, make_workbook):
    client.cookies.set("auth_token", create_access_token(user.id, user.email))
    resp = _upload(client, make_workbook([widget_row]))
    assert resp.status_code == 200
    assert resp.json()["imported"] == 1


def test_upload_without_file(client, auth_headers):
    resp = client.post("/api/upload", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No file uploaded"


def test_upload_header_only_sheet(client, auth_headers, db_session, widget_row, make_workbook):
    contents = make_workbook([], columns=list(widget_row.keys()))
    resp = _upload(client, contents, auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No rows found in worksheet"
    assert db_session.query(ImportBatch).count() == 0


def test_upload_without_daily_data(client, auth_headers, db_session, make_workbook):
    rows = [{"ID": "P1", "Product Name": "Static", "Opening Inventory": 3}]
    resp = _upload(client, make_workbook(rows), auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No valid daily data found"
    assert db_session.query(ImportBatch).count() == 0
    assert db_session.query(Product).count() == 0


def test_upload_unreadable_file(client, auth_headers):
    resp = _upload(client, b"id,name\n1,widget\n", auth_headers, filename="data.csv")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Unreadable workbook"
