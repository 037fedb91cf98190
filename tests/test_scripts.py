import importlib.util
import sys
from pathlib import Path

import pytest

from fleetdata.infrastructure.repositories import BudgetPlanRepository, ImportLogRepository
from fleetdata.infrastructure.security import decode_access_token

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _load_script(name):
    spec = importlib.util.spec_from_file_location(name, PROJECT_ROOT / "scripts" / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture()
def budget_file(tmp_path, build_workbook):
    path = tmp_path / "budget.xlsx"
    path.write_bytes(
        build_workbook(
            {
                "Data": [
                    (
                        "Fiscal Year",
                        "Clause ID",
                        "Clause Description",
                        "Aircraft Group",
                        "Planned Amount",
                        "Currency",
                    ),
                    (2024, 1, "Spare Parts", "A330", 500000, "USD"),
                    (2024, "x", "Spare Parts", "A340", 1000, "USD"),
                ]
            }
        )
    )
    return path


def test_import_workbook_dry_run_writes_nothing(db_session, budget_file, monkeypatch, capsys):
    script = _load_script("import_workbook")
    monkeypatch.setattr(sys, "argv", ["import_workbook", str(budget_file), "--type", "budget", "--dry-run"])

    script.main()

    output = capsys.readouterr().out
    assert "2 rows: 1 valid, 1 invalid" in output
    assert "row 3: Clause ID: Invalid number: x" in output
    assert list(BudgetPlanRepository(db_session).find()) == []


def test_import_workbook_confirms_valid_rows(db_session, budget_file, monkeypatch, capsys):
    script = _load_script("import_workbook")
    monkeypatch.setattr(
        sys, "argv", ["import_workbook", str(budget_file), "--type", "budget", "--actor", "ops"]
    )

    script.main()

    assert "1 written, 1 failed" in capsys.readouterr().out
    db_session.expire_all()
    assert len(BudgetPlanRepository(db_session).find()) == 1
    logs = ImportLogRepository(db_session).list()
    assert [(log.imported_by, log.success_count) for log in logs] == [("ops", 1)]


def test_import_workbook_rejects_missing_file(tmp_path, monkeypatch):
    script = _load_script("import_workbook")
    missing = tmp_path / "missing.xlsx"
    monkeypatch.setattr(sys, "argv", ["import_workbook", str(missing), "--type", "budget"])

    with pytest.raises(SystemExit, match="File not found"):
        script.main()


def test_create_access_token_prints_decodable_token(monkeypatch, capsys):
    script = _load_script("create_access_token")
    monkeypatch.setattr(sys, "argv", ["create_access_token", "planner", "--minutes", "5"])

    script.main()

    token = capsys.readouterr().out.strip()
    assert decode_access_token(token)["sub"] == "planner"
