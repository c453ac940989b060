from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from conftest import PNG_BYTES, FakeRecognizer
from quarion.config import Settings, get_settings
from quarion.infrastructure.database.repositories.memory import InMemoryTransactionRepository
from quarion.interfaces.dependencies import get_recognizer, get_transaction_repo
from quarion.main import create_app


class Harness:
    def __init__(self, tmp_path):
        self.repo = InMemoryTransactionRepository()
        self.recognizer = FakeRecognizer()
        self.settings = Settings(
            database_url=None,
            storage_path=tmp_path,
            quick_slip_token="secret-token",
            max_upload_bytes=1024,
        )
        self.app = create_app()
        self.app.dependency_overrides[get_transaction_repo] = lambda: self.repo
        self.app.dependency_overrides[get_recognizer] = lambda: self.recognizer
        self.app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(self.app)


@pytest.fixture
def api(tmp_path) -> Harness:
    return Harness(tmp_path)


def _upload(content=PNG_BYTES, content_type="image/png", name="slip.png"):
    return {"file": (name, content, content_type)}


AUTH = {"Authorization": "Bearer secret-token"}


# ── Health ───────────────────────────────────────────────────────────────────

def test_health_and_request_id(api):
    resp = api.client.get("/health", headers={"X-Request-ID": "abc123"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.headers["X-Request-ID"] == "abc123"


def test_request_id_generated(api):
    resp = api.client.get("/health")
    assert resp.headers["X-Request-ID"]


# ── Slips ────────────────────────────────────────────────────────────────────

def test_scan_slip(api):
    resp = api.client.post("/api/v1/slips/scan", files=_upload())
    assert resp.status_code == 200
    body = resp.json()
    assert Decimal(body["slip"]["amount"]) == Decimal("1500.50")
    assert body["slip"]["date"] == "2025-03-15"
    assert body["slip"]["time"] == "14:30"
    assert body["slip"]["bank_name"] == "K-Bank"
    assert body["slip"]["ref_number"] == "ABC1234567890"
    assert body["draft"]["transaction_type"] == "expense"
    assert body["draft"]["transaction_date"] == "2025-03-15"
    assert body["draft"]["description"] == "สลิปจาก K-Bank (Ref: ABC1234567890)"
    assert body["needs_review"] is False
    # Scanning never persists
    assert api.client.get("/api/v1/transactions").json()["total"] == 0


def test_scan_slip_unrecognisable_text(api):
    api.recognizer.text = "สวัสดีครับ"
    body = api.client.post("/api/v1/slips/scan", files=_upload()).json()
    assert body["slip"]["amount"] is None
    assert body["slip"]["raw_text"] == "สวัสดีครับ"
    assert body["needs_review"] is True


def test_scan_rejects_non_image(api):
    resp = api.client.post("/api/v1/slips/scan", files=_upload(b"hello", "text/plain", "a.txt"))
    assert resp.status_code == 422


def test_scan_rejects_large_file(api):
    resp = api.client.post("/api/v1/slips/scan", files=_upload(b"x" * 2048))
    assert resp.status_code == 413


def test_scan_ocr_failure(api):
    api.recognizer.error = RuntimeError("boom")
    resp = api.client.post("/api/v1/slips/scan", files=_upload())
    assert resp.status_code == 502


def test_quick_slip_requires_configured_token(api):
    api.settings.quick_slip_token = None
    resp = api.client.post("/api/v1/slips/quick", files=_upload(), headers=AUTH)
    assert resp.status_code == 503


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}])
def test_quick_slip_rejects_bad_token(api, headers):
    resp = api.client.post("/api/v1/slips/quick", files=_upload(), headers=headers)
    assert resp.status_code == 401
    assert api.recognizer.calls == []


def test_quick_slip_saves_transaction(api):
    resp = api.client.post("/api/v1/slips/quick", files=_upload(), headers=AUTH)
    assert resp.status_code == 201
    tx = resp.json()["transaction"]
    assert Decimal(tx["amount"]) == Decimal("1500.50")
    assert tx["created_by"] == "shortcut-user"
    assert tx["transaction_date"] == "2025-03-15"
    assert tx["slip_url"].endswith(".png")

    listed = api.client.get("/api/v1/transactions").json()
    assert listed["total"] == 1
    assert listed["items"][0]["id"] == tx["id"]


def test_quick_slip_user_id_form_field(api):
    resp = api.client.post(
        "/api/v1/slips/quick", files=_upload(), data={"user_id": "u-42"}, headers=AUTH,
    )
    assert resp.json()["transaction"]["created_by"] == "u-42"


def test_quick_slip_without_amount(api):
    api.recognizer.text = "กสิกร วันที่ 15/03/68"
    resp = api.client.post("/api/v1/slips/quick", files=_upload(), headers=AUTH)
    assert resp.status_code == 422
    assert api.client.get("/api/v1/transactions").json()["total"] == 0


# ── Transactions ─────────────────────────────────────────────────────────────

def _create(api, **overrides):
    payload = {
        "transaction_type": "income",
        "amount": "2500.00",
        "category": "ขายสินค้า",
        "description": "ขายหน้าร้าน",
        "transaction_date": "2025-03-10",
    }
    payload.update(overrides)
    return api.client.post("/api/v1/transactions", json=payload)


def test_transaction_crud(api):
    resp = _create(api)
    assert resp.status_code == 201
    tx_id = resp.json()["id"]

    resp = api.client.patch(f"/api/v1/transactions/{tx_id}", json={"amount": "2600.00"})
    assert resp.status_code == 200
    assert Decimal(resp.json()["amount"]) == Decimal("2600.00")
    assert resp.json()["category"] == "ขายสินค้า"

    assert api.client.get(f"/api/v1/transactions/{tx_id}").status_code == 200
    assert api.client.delete(f"/api/v1/transactions/{tx_id}").status_code == 204
    assert api.client.get(f"/api/v1/transactions/{tx_id}").status_code == 404


def test_transaction_validation(api):
    assert _create(api, transaction_type="transfer").status_code == 422
    assert _create(api, amount="-5").status_code == 422
    assert _create(api, amount="0").status_code == 422


def test_missing_transaction_is_404(api):
    missing = uuid4()
    assert api.client.patch(f"/api/v1/transactions/{missing}", json={"description": "x"}).status_code == 404
    assert api.client.delete(f"/api/v1/transactions/{missing}").status_code == 404


def test_list_filters(api):
    _create(api)
    _create(api, transaction_type="expense", category="ค่าเช่า", amount="800.00")
    body = api.client.get("/api/v1/transactions", params={"transaction_type": "expense"}).json()
    assert body["total"] == 1
    assert body["items"][0]["category"] == "ค่าเช่า"


def test_dashboard_endpoints(api):
    _create(api)
    _create(api, transaction_type="expense", category="ค่าเช่า", amount="800.00")

    summary = api.client.get("/api/v1/transactions/summary", params={"today": "2025-03-31"}).json()
    assert Decimal(summary["current_month_income"]) == Decimal("2500.00")
    assert Decimal(summary["net_profit"]) == Decimal("1700.00")
    assert summary["total_transactions"] == 2

    monthly = api.client.get("/api/v1/transactions/monthly", params={"today": "2025-03-31"}).json()
    assert len(monthly) == 6
    assert monthly[-1]["month"] == "มี.ค."
    assert Decimal(monthly[-1]["expense"]) == Decimal("800.00")

    categories = api.client.get("/api/v1/transactions/categories").json()
    assert categories == [{"name": "ค่าเช่า", "value": "800.00", "color": "#ef4444"}]


def test_default_categories(api):
    body = api.client.get("/api/v1/categories", params={"category_type": "expense"}).json()
    assert [c["name"] for c in body] == [
        "ค่าเช่า", "ค่าน้ำค่าไฟ", "เงินเดือน", "อุปกรณ์สำนักงาน", "การตลาด", "ค่าใช้จ่ายอื่นๆ",
    ]
