"""Tests for the template, preview/confirm and history endpoints."""

from __future__ import annotations

from datetime import timedelta
from io import BytesIO

import pytest

pytest.importorskip("fastapi")
from openpyxl import load_workbook  # noqa: E402

from fleetdata.infrastructure.security import create_access_token  # noqa: E402
from fleetdata.infrastructure.workbooks import EXCEL_CONTENT_TYPE  # noqa: E402

BUDGET_HEADERS = (
    "Fiscal Year",
    "Clause ID",
    "Clause Description",
    "Aircraft Group",
    "Planned Amount",
)


def _upload(client, headers, content, import_type="budget", filename="budget.xlsx"):
    return client.post(
        "/import/upload",
        files={"file": (filename, content, EXCEL_CONTENT_TYPE)},
        data={"import_type": import_type},
        headers=headers,
    )


def test_routes_require_a_valid_token(client):
    assert client.get("/import/types").status_code == 401

    bad = client.get("/import/types", headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 401

    expired = create_access_token({"sub": "tester"}, timedelta(minutes=-5))
    response = client.get("/import/types", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401

    no_subject = create_access_token({"role": "admin"})
    response = client.get("/import/types", headers={"Authorization": f"Bearer {no_subject}"})
    assert response.status_code == 401


def test_list_import_types(client, auth_headers):
    response = client.get("/import/types", headers=auth_headers)

    assert response.status_code == 200
    types = {item["type"]: item["name"] for item in response.json()}
    assert types["daily_status"] == "Daily Status"
    assert len(types) == 8


def test_download_template(client, auth_headers):
    response = client.get("/import/template/aircraft", headers=auth_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == EXCEL_CONTENT_TYPE
    assert 'filename="aircraft_master_template.xlsx"' in response.headers["content-disposition"]
    workbook = load_workbook(BytesIO(response.content))
    assert workbook.sheetnames == ["Data", "Instructions"]

    assert client.get("/import/template/fuel", headers=auth_headers).status_code == 400


def test_preview_confirm_and_history(client, auth_headers, build_workbook):
    content = build_workbook(
        {
            "Data": [
                BUDGET_HEADERS,
                (2024, 1, "Spare Parts", "A330", 500000),
                (2024, "x", "Fuel", "A330", 1000),
            ]
        }
    )

    preview = _upload(client, auth_headers, content)

    assert preview.status_code == 200
    body = preview.json()
    assert body["import_type"] == "budget"
    assert (body["total_rows"], body["valid_count"], body["error_count"]) == (2, 1, 1)
    assert body["valid_rows"][0]["row_number"] == 2
    assert body["valid_rows"][0]["data"]["clauseDescription"] == "Spare Parts"
    assert body["errors"] == [{"row": 3, "message": "Clause ID: Invalid number: x"}]

    confirm = client.post(
        "/import/confirm", json={"session_id": body["session_id"]}, headers=auth_headers
    )
    assert confirm.status_code == 200
    result = confirm.json()
    assert result["success_count"] == 1
    assert result["error_count"] == 1

    again = client.post(
        "/import/confirm", json={"session_id": body["session_id"]}, headers=auth_headers
    )
    assert again.status_code == 404

    history = client.get("/import/history", params={"import_type": "budget"}, headers=auth_headers)
    assert history.status_code == 200
    (log,) = history.json()
    assert log["id"] == result["import_log_id"]
    assert log["imported_by"] == "tester"
    assert log["errors"] == [{"row": 3, "message": "Clause ID: Invalid number: x"}]

    detail = client.get(f"/import/logs/{log['id']}", headers=auth_headers)
    assert detail.status_code == 200
    assert detail.json()["filename"] == "budget.xlsx"


def test_upload_rejects_bad_files(client, auth_headers, build_workbook):
    assert _upload(client, auth_headers, b"not excel").status_code == 400
    assert _upload(client, auth_headers, build_workbook({"Data": [BUDGET_HEADERS]})).status_code == 400
    assert _upload(client, auth_headers, b"x", import_type="fuel").status_code == 400


def test_missing_log_and_archive(client, auth_headers):
    assert client.get("/import/logs/42", headers=auth_headers).status_code == 404
    assert client.get("/import/logs/42/file", headers=auth_headers).status_code == 404
