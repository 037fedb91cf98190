"""Tests for the vacation plan endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from fleetdata.domain.entities import WEEKS_PER_YEAR, week_headers  # noqa: E402
from fleetdata.infrastructure.workbooks import EXCEL_CONTENT_TYPE  # noqa: E402

HEADER = ("Employee", *week_headers(), "Total")


@pytest.fixture()
def plan_id(client, auth_headers, build_workbook):
    content = build_workbook(
        {
            "Engineering": [
                HEADER,
                ["Ann", 1, *([0] * (WEEKS_PER_YEAR - 1))],
                ["Bob", 2, *([0] * (WEEKS_PER_YEAR - 1))],
            ]
        }
    )
    response = client.post(
        "/vacation-plans/import",
        files={"file": ("plan.xlsx", content, EXCEL_CONTENT_TYPE)},
        data={"year": "2025"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success_count"] == 1
    return body["plans"][0]["id"]


def test_list_and_read_plans(client, auth_headers, plan_id):
    listing = client.get("/vacation-plans", params={"year": 2025}, headers=auth_headers)
    assert listing.status_code == 200
    assert [plan["team"] for plan in listing.json()] == ["Engineering"]

    plan = client.get(f"/vacation-plans/{plan_id}", headers=auth_headers).json()
    assert plan["overlaps"][0] == "Check"
    assert plan["employees"][0]["total"] == 1
    assert plan["updated_by"] == "tester"

    assert client.get("/vacation-plans/999", headers=auth_headers).status_code == 404


def test_edit_plan(client, auth_headers, plan_id):
    response = client.patch(
        f"/vacation-plans/{plan_id}/cells",
        json={"employee_name": "Bob", "week_index": 0, "value": 0},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["overlaps"][0] == "Ok"

    bad = client.patch(
        f"/vacation-plans/{plan_id}/cells",
        json={"employee_name": "Bob", "week_index": 48, "value": 1},
        headers=auth_headers,
    )
    assert bad.status_code == 400

    added = client.post(
        f"/vacation-plans/{plan_id}/employees", json={"name": "Cid"}, headers=auth_headers
    )
    assert added.status_code == 201
    assert [employee["name"] for employee in added.json()["employees"]] == ["Ann", "Bob", "Cid"]

    duplicate = client.post(
        f"/vacation-plans/{plan_id}/employees", json={"name": "Cid"}, headers=auth_headers
    )
    assert duplicate.status_code == 400

    removed = client.delete(f"/vacation-plans/{plan_id}/employees/Ann", headers=auth_headers)
    assert removed.status_code == 200
    assert [employee["name"] for employee in removed.json()["employees"]] == ["Bob", "Cid"]

    missing = client.delete(f"/vacation-plans/{plan_id}/employees/Ann", headers=auth_headers)
    assert missing.status_code == 404


def test_export_plans(client, auth_headers, plan_id):
    single = client.get(f"/vacation-plans/{plan_id}/export", headers=auth_headers)
    assert single.status_code == 200
    assert "vacation_plan_2025_Engineering.xlsx" in single.headers["content-disposition"]

    yearly = client.get("/vacation-plans/export", params={"year": 2025}, headers=auth_headers)
    assert yearly.status_code == 200
    assert "vacation_plans_2025.xlsx" in yearly.headers["content-disposition"]

    missing = client.get("/vacation-plans/export", params={"year": 2031}, headers=auth_headers)
    assert missing.status_code == 404
