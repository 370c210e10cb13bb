from __future__ import annotations

import io

import pandas as pd

from tender_tracker.tenders.export import XLSX_MIMETYPE


def test_tenders_require_session(client, make_tender):
    assert client.get("/api/tenders").status_code == 401
    assert client.post("/api/tenders", json=make_tender()).status_code == 401


def test_create_and_fetch_scenario(staff_client, make_tender):
    payload = make_tender()

    created = staff_client.post("/api/tenders", json=payload)

    assert created.status_code == 201
    body = created.get_json()
    tender_id = body.pop("id")
    assert tender_id
    assert body == payload

    fetched = staff_client.get(f"/api/tenders/{tender_id}")
    assert fetched.status_code == 200
    assert fetched.get_json() == {"id": tender_id, **payload}


def test_create_validation_error_shape(staff_client, make_tender):
    payload = make_tender()
    del payload["clientName"]

    resp = staff_client.post("/api/tenders", json=payload)

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["message"] == "Validation error"
    assert body["errors"] == [{"field": "clientName", "message": "Field required"}]


def test_duplicate_tender_number_is_400(staff_client, make_tender):
    staff_client.post("/api/tenders", json=make_tender())

    resp = staff_client.post("/api/tenders", json=make_tender(clientName="Other"))

    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Tender number already exists"}
    assert len(staff_client.get("/api/tenders").get_json()) == 1


def test_missing_tender_is_404(staff_client):
    resp = staff_client.get("/api/tenders/missing")

    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Tender not found"}


def test_partial_update(staff_client, make_tender):
    tender_id = staff_client.post("/api/tenders", json=make_tender()).get_json()["id"]

    resp = staff_client.put(f"/api/tenders/{tender_id}", json={"compulsoryBriefing": False})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["compulsoryBriefing"] is False
    assert body["clientName"] == "Acme"


def test_update_missing_tender_is_404(staff_client):
    assert staff_client.put("/api/tenders/missing", json={"venue": "x"}).status_code == 404


def test_update_bad_type_is_400(staff_client, make_tender):
    tender_id = staff_client.post("/api/tenders", json=make_tender()).get_json()["id"]

    resp = staff_client.put(f"/api/tenders/{tender_id}", json={"venue": 12})

    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "venue"


def test_delete_then_get_is_404(staff_client, make_tender):
    tender_id = staff_client.post("/api/tenders", json=make_tender()).get_json()["id"]

    resp = staff_client.delete(f"/api/tenders/{tender_id}")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Tender deleted successfully", "id": tender_id}

    assert staff_client.get(f"/api/tenders/{tender_id}").status_code == 404
    # Already gone: still succeeds
    assert staff_client.delete(f"/api/tenders/{tender_id}").status_code == 200


def test_list_orders_by_submission_date(staff_client, make_tender):
    staff_client.post("/api/tenders", json=make_tender(tenderNumber="B", submissionDate="2025-04-01T00:00:00Z"))
    staff_client.post("/api/tenders", json=make_tender(tenderNumber="A", submissionDate="2025-03-05T00:00:00Z"))

    numbers = [t["tenderNumber"] for t in staff_client.get("/api/tenders").get_json()]
    assert numbers == ["A", "B"]


def test_calendar_endpoint(staff_client, make_tender):
    tender_id = staff_client.post("/api/tenders", json=make_tender()).get_json()["id"]

    resp = staff_client.get("/api/tenders/calendar?month=2025-03")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["month"] == "2025-03"
    days = {d["date"]: d for d in body["days"]}
    assert days["2025-03-10"]["tenderIds"] == [tender_id]
    assert days["2025-03-01"]["tenderIds"] == [tender_id]


def test_calendar_rejects_bad_month(staff_client):
    resp = staff_client.get("/api/tenders/calendar?month=March")

    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "month"


def test_export_endpoint(staff_client, make_tender):
    staff_client.post("/api/tenders", json=make_tender())

    resp = staff_client.get("/api/tenders/export")

    assert resp.status_code == 200
    assert resp.mimetype == XLSX_MIMETYPE
    assert "attachment" in resp.headers["Content-Disposition"]
    df = pd.read_excel(io.BytesIO(resp.data))
    assert df.iloc[0]["Tender Number"] == "TND-2025-099"


def test_summary_endpoint(client, staff_client, make_tender):
    assert client.get("/api/tenders/summary").status_code == 401

    staff_client.post("/api/tenders", json=make_tender(tenderNumber="old"))
    staff_client.post(
        "/api/tenders",
        json=make_tender(tenderNumber="later", submissionDate="2099-01-01T00:00:00Z", compulsoryBriefing=False),
    )

    resp = staff_client.get("/api/tenders/summary")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["total"] == 2
    assert body["urgent"] == 0
    assert body["compulsoryBriefings"] == 1
    assert [t["tenderNumber"] for t in body["upcoming"]] == ["later"]
    assert body["upcoming"][0]["submissionDate"] == "2099-01-01T00:00:00Z"
