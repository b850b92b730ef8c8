import io

from fastapi.testclient import TestClient
from openpyxl import load_workbook

from backend.api.app import app
from backend.api.deps import get_reference_table
from flowdesign import REPORT_HEADERS
from flowdesign.reference_table import ReferenceTable
from ingestion.report_writer import RESULT_SHEET

client = TestClient(app)

ROWS = [
    ["管径(mm)", "介质", "备注"],
    ["100", "自来水", "常温常压"],
    ["abc", "热水", ""],
    ["50", "饱和蒸汽", "0.5MPa"],
]


def test_healthcheck():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_compute_flow_design():
    response = client.post("/flow-design", json={"rows": ROWS})
    assert response.status_code == 200
    payload = response.json()

    assert payload["headers"] == REPORT_HEADERS
    assert payload["meta"] == {
        "total_rows": 4,
        "processed": 2,
        "skipped": 1,
        "header_skipped": True,
    }
    first = payload["data"][0]
    assert first["medium"] == "自来水"
    assert first["category"] == "水及水溶液"
    assert round(first["volume_flow_rate"], 2) == 35.34
    assert payload["data"][1]["category"] == "蒸汽系统"
    assert payload["skipped_rows"][0]["row_index"] == 2
    assert payload["skipped_rows"][0]["kind"] == "invalid diameter"


def test_compute_flow_design_rejects_bad_payload():
    response = client.post("/flow-design", json={"rows": "100,自来水"})
    assert response.status_code == 422


def test_download_report():
    response = client.post("/flow-design/report.xlsx", json={"rows": ROWS})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    sheet = load_workbook(io.BytesIO(response.content))[RESULT_SHEET]
    assert sheet.max_row == 3


def test_list_media():
    response = client.get("/media/")
    assert response.status_code == 200
    media = response.json()
    assert len(media) == 15
    assert media[0]["name"] == "自来水"
    assert media[0]["recommended_velocity"] == 1.25

    steam = client.get("/media/", params={"category": "蒸汽系统"}).json()
    assert [m["name"] for m in steam] == ["饱和蒸汽", "过热蒸汽", "冷凝水回水"]


def test_list_categories():
    response = client.get("/media/categories")
    assert response.json() == ["水及水溶液", "蒸汽系统", "气体介质", "特殊流体", "暖通专用"]


def test_resolve_medium():
    response = client.get("/media/resolve", params={"name": "蒸汽"})
    payload = response.json()
    assert payload["matched_name"] == "饱和蒸汽"
    assert payload["match_kind"] == "fuzzy"

    unknown = client.get("/media/resolve", params={"name": "未知介质X"}).json()
    assert unknown["category"] == "未知"
    assert unknown["recommended_velocity"] == 1.5


def test_reference_table_can_be_overridden():
    table = ReferenceTable.from_rows([("导热油", 1.0, 3.0, "特殊流体", "注意热膨胀")])
    app.dependency_overrides[get_reference_table] = lambda: table
    try:
        payload = client.post("/flow-design", json={"rows": [["100", "导热油", ""]]}).json()
        assert payload["data"][0]["recommended_velocity"] == 2.0
        assert client.get("/media/").json()[0]["name"] == "导热油"
    finally:
        app.dependency_overrides.clear()
