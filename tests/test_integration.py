import csv
import io
import threading
import time
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from src.tms_monitor.main import create_app
from src.tms_monitor.services.dashboard.controller import DashboardController
from src.tms_monitor.services.source.client import SourceUnavailableError

STATUSES = ("ส่งแล้ว", "ยกเลิก", "ระหว่างส่ง")


def _item(index: int) -> dict:
    return {
        "วันที่บันทึกข้อมูล": f"{index + 1}/ม.ค./2026",
        "ทะเบียนรถ": "70-1234" if index % 2 == 0 else "70-5678",
        "Customer": f"C{index}",
        "Location": "Bangna DC",
        "วันที่ต้องการส่งสินค้า": "2026-02-01T01:00:00.000Z",
        "ช่วงเวลา": "08:00-12:00" if index % 5 else "",
        "ระยะทางไปกลับ (km)": str(index * 10),
        "ค่าใช้จ่ายตาม Supplier": str(index * 100),
        "สถานะการขนส่ง": STATUSES[index % 3],
    }


PAYLOAD = {
    "items": [_item(index) for index in range(25)],
    "filters": {
        "cars": ["70-1234", "70-5678"],
        "customers": [f"C{index}" for index in range(25)],
        "statuses": list(STATUSES),
    },
}


class DummySource:
    def __init__(self, payload):
        self.payload = payload

    def fetch(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


@pytest.fixture
def controller() -> DashboardController:
    controller = DashboardController(
        client=DummySource(PAYLOAD),
        page_size=10,
        clock=lambda: datetime(2026, 1, 13, 3, 4, 5, tzinfo=timezone.utc),
    )
    controller.refresh("initial")
    return controller


@pytest.fixture
def api_client(controller: DashboardController) -> TestClient:
    return TestClient(create_app(controller, autostart=False))


def test_health_endpoint(api_client: TestClient):
    response = api_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_dashboard_returns_first_page_newest_first(api_client: TestClient):
    response = api_client.get("/api/dashboard")

    assert response.status_code == 200
    payload = response.json()
    assert payload["blocking"] is False
    assert payload["error"] is None
    assert payload["last_synced_label"] == "10:04:05"
    assert payload["page"] == 1
    assert payload["total_pages"] == 3
    assert payload["page_numbers"] == [1, 2, 3]
    assert payload["summary"] == {
        "count": 25,
        "total_distance_km": 3000.0,
        "total_cost": 30000.0,
        "delivered": 9,
        "cancelled": 8,
    }
    assert len(payload["items"]) == 10
    first = payload["items"][0]
    assert first["customer"] == "C24"
    assert first["recorded_date_display"] == "25/ม.ค./2026"
    assert first["requested_date_display"] == "1/ก.พ./2026"
    assert payload["options"]["cars"] == ["70-1234", "70-5678"]


def test_missing_time_window_gets_placeholder(api_client: TestClient):
    items = api_client.get("/api/dashboard").json()["items"]
    by_customer = {item["customer"]: item for item in items}

    assert by_customer["C20"]["time_window"] == "ไม่ระบุเวลา"
    assert by_customer["C21"]["time_window"] == "08:00-12:00"


def test_update_filters_recomputes_summary_and_clamps_page(api_client: TestClient):
    api_client.post("/api/dashboard/page", json={"page": 3})

    response = api_client.put("/api/dashboard/filters", json={"vehicle": "70-5678"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["filters"]["vehicle"] == "70-5678"
    assert payload["summary"]["count"] == 12
    assert payload["total_pages"] == 2
    assert payload["page"] == 2
    assert all(item["vehicle"] == "70-5678" for item in payload["items"])


def test_date_range_filter(api_client: TestClient):
    response = api_client.put(
        "/api/dashboard/filters",
        json={"start_date": "2026-01-03", "end_date": "2026-01-05"},
    )

    payload = response.json()
    assert payload["summary"]["count"] == 3
    assert [item["customer"] for item in payload["items"]] == ["C4", "C3", "C2"]


def test_start_date_after_all_records_is_empty(api_client: TestClient):
    payload = api_client.put("/api/dashboard/filters", json={"start_date": "2026-03-01"}).json()

    assert payload["summary"]["count"] == 0
    assert payload["total_pages"] == 1
    assert payload["items"] == []


def test_reset_filters(api_client: TestClient):
    api_client.put("/api/dashboard/filters", json={"status": "ยกเลิก"})

    payload = api_client.delete("/api/dashboard/filters").json()

    assert payload["filters"]["status"] == "all"
    assert payload["summary"]["count"] == 25


def test_page_navigation(api_client: TestClient):
    assert api_client.post("/api/dashboard/page", json={"action": "next"}).json()["page"] == 2
    assert api_client.post("/api/dashboard/page", json={"page": 99}).json()["page"] == 3

    last = api_client.get("/api/dashboard").json()
    assert [item["customer"] for item in last["items"]] == ["C4", "C3", "C2", "C1", "C0"]

    assert api_client.post("/api/dashboard/page", json={"action": "previous"}).json()["page"] == 2


@pytest.mark.parametrize("body", [{}, {"page": 0}, {"page": 2, "action": "next"}, {"action": "last"}])
def test_invalid_page_requests_are_rejected(api_client: TestClient, body):
    assert api_client.post("/api/dashboard/page", json=body).status_code == 422


def test_filter_options(api_client: TestClient):
    payload = api_client.get("/api/dashboard/options").json()

    assert payload["statuses"] == list(STATUSES)
    assert len(payload["customers"]) == 25


def test_manual_refresh_reports_outcome(api_client: TestClient):
    response = api_client.post("/api/dashboard/refresh")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "mode": "initial", "record_count": 25, "message": None}


def test_manual_refresh_failure_keeps_data_and_shows_notice(api_client: TestClient, controller: DashboardController):
    controller._client = DummySource(SourceUnavailableError("offline"))

    outcome = api_client.post("/api/dashboard/refresh").json()
    payload = api_client.get("/api/dashboard").json()

    assert outcome["status"] == "unavailable"
    assert payload["error"] == "ไม่สามารถเชื่อมต่อข้อมูลได้"
    assert payload["summary"]["count"] == 25


def test_export_filtered_records_as_csv(api_client: TestClient):
    api_client.put("/api/dashboard/filters", json={"status": "ยกเลิก"})

    response = api_client.get("/api/dashboard/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(io.StringIO(response.content.decode("utf-8-sig"))))
    assert len(rows) == 8
    assert rows[0]["customer"] == "C22"
    assert rows[0]["recorded_date"] == "23/ม.ค./2026"
    assert {row["status"] for row in rows} == {"ยกเลิก"}


def test_startup_serves_requests_while_first_load_is_in_flight():
    entered = threading.Event()
    release = threading.Event()

    class SlowSource:
        def fetch(self):
            entered.set()
            release.wait(5)
            return PAYLOAD

    controller = DashboardController(client=SlowSource(), page_size=10, refresh_interval_seconds=60)
    app = create_app(controller, autostart=True)

    started = time.monotonic()
    with TestClient(app) as client:
        try:
            assert time.monotonic() - started < 1.0
            assert client.get("/api/health").status_code == 200

            first = client.get("/api/dashboard").json()
            assert first["blocking"] is True
            assert first["polling"] is True
            assert first["items"] == []

            assert entered.wait(5)
            release.set()
            deadline = time.monotonic() + 5
            while controller.state.loading and time.monotonic() < deadline:
                time.sleep(0.01)

            loaded = client.get("/api/dashboard").json()
            assert loaded["blocking"] is False
            assert loaded["summary"]["count"] == 25
        finally:
            release.set()

    assert not controller.polling


@pytest.mark.parametrize("bound", ["", "   ", None])
def test_blank_date_bounds_mean_no_bound(api_client: TestClient, bound):
    payload = api_client.put("/api/dashboard/filters", json={"start_date": bound, "end_date": bound}).json()

    assert payload["filters"]["start_date"] is None
    assert payload["filters"]["end_date"] is None
    assert payload["summary"]["count"] == 25


def test_malformed_date_bound_is_rejected(api_client: TestClient):
    response = api_client.put("/api/dashboard/filters", json={"start_date": "13/01/2026"})

    assert response.status_code == 422
