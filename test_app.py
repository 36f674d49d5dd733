"""Tests for the Flask upload service."""

import io

import pytest
from openpyxl import load_workbook

import app as app_module


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "UPLOAD_DIR", str(tmp_path))
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as client:
        yield client


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.get_json()
    assert "NM1" in data["segments"]
    assert data["options"]["data_checks"] is True


def test_decode_text(client, sample_835):
    response = client.post("/decode", data={"text": sample_835})
    assert response.status_code == 200
    doc = response.get_json()["documents"][0]
    assert doc["filename"] == "text"
    assert doc["transaction_type"] == "835"
    assert doc["transaction_name"] == "Remittance Advice"
    assert doc["separators"] == {"element": "*", "component": ":", "segment": "~", "repetition": "^"}
    assert doc["segments"][2] == {
        "code": "ST",
        "index": 3,
        "recognized": True,
        "values": {"ST01": "835", "ST02": "0001", "ST03": ""},
    }
    assert doc["segments"][3]["recognized"] is False


def test_decode_file_with_skipped_segment(client, sample_837):
    bad = sample_837.replace("N3*123 MAIN STREET", "N3*" + "A" * 56)
    response = client.post(
        "/decode",
        data={"files": (io.BytesIO(bad.encode("utf-8")), "claims.edi")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200
    doc = response.get_json()["documents"][0]
    assert doc["filename"] == "claims.edi"
    assert doc["errors"][0]["index"] == 7
    assert "N3.N301" in doc["errors"][0]["error"]


def test_decode_rejects_non_x12(client):
    response = client.post("/decode", data={"text": "MSH|^~\\&|APP"})
    assert response.status_code == 400
    assert "ISA segment not found" in response.get_json()["error"]


def test_decode_reports_bad_files_alongside_good(client, sample_835):
    response = client.post(
        "/decode",
        data={"files": [
            (io.BytesIO(sample_835.encode("utf-8")), "good.edi"),
            (io.BytesIO(b"   "), "empty.edi"),
        ]},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200
    data = response.get_json()
    assert [d["filename"] for d in data["documents"]] == ["good.edi"]
    assert data["errors"] == ["empty.edi: File is empty"]


def test_upload_returns_workbook(client, sample_835):
    response = client.post(
        "/upload",
        data={"files": (io.BytesIO(sample_835.encode("utf-8")), "remit.edi")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200
    assert "remit_segments.xlsx" in response.headers["Content-Disposition"]

    wb = load_workbook(io.BytesIO(response.get_data()))
    assert wb.sheetnames[0] == "Segments"
    assert wb["CLP"]["C2"].value == "CLM001"
    response.close()


def test_upload_control_character_document(client, control_char_edi):
    response = client.post(
        "/upload",
        data={"files": (io.BytesIO(control_char_edi.encode("utf-8")), "ctl.edi")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200
    wb = load_workbook(io.BytesIO(response.get_data()))
    assert wb["NM1"]["C2"].value == "85"
    response.close()
