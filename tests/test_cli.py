"""Tests for the command-line interface."""
import json

import pytest
from openpyxl import load_workbook

from officedays.cli import EXIT_INFEASIBLE, EXIT_INVALID, EXIT_OK, main


class TestCLI:
    """End-to-end runs of officedays.cli.main."""

    def test_text_summary(self, employees_json, capsys):
        code = main(["--employees", str(employees_json), "--month", "6", "--year", "2023", "--seed", "3"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "Summary:" in out
        assert " - seed: 3" in out
        assert " - valid: True" in out

    def test_json_output(self, employees_json, capsys):
        code = main([
            "--employees", str(employees_json), "--month", "6", "--year", "2023",
            "--seed", "3", "--json",
        ])
        assert code == EXIT_OK
        payload = json.loads(capsys.readouterr().out)
        assert payload["seed"] == 3
        assert payload["summary"]["assignments"] == 8 + 6 + 10
        assert 0 in payload["schedule"]["assignments"]["2023-06-05"]
        assert payload["validation"]["missing_fixed_days"] == 0
        assert payload["validation"]["quota_shortfalls"] == 0

    def test_same_seed_same_json(self, employees_json, capsys):
        argv = ["--employees", str(employees_json), "--month", "6", "--year", "2023", "--seed", "5", "--json"]
        main(argv)
        first = capsys.readouterr().out
        main(argv)
        assert capsys.readouterr().out == first

    def test_exports(self, employees_json, tmp_path, capsys):
        xlsx = tmp_path / "out.xlsx"
        csv = tmp_path / "out.csv"
        code = main([
            "--employees", str(employees_json), "--month", "6", "--year", "2023",
            "--xlsx", str(xlsx), "--csv", str(csv),
        ])
        assert code == EXIT_OK
        assert load_workbook(xlsx).sheetnames == ["Schedule", "Summary"]
        assert csv.read_text(encoding="utf-8").startswith("Name,")

    def test_infeasible_exit_code(self, tmp_path, capsys):
        path = tmp_path / "team.json"
        path.write_text(json.dumps([
            {"name": "A", "sex": "Male", "role": "HR", "required_days": 100},
        ]), encoding="utf-8")
        code = main(["--employees", str(path), "--month", "2", "--year", "2023", "--all-days", "--json"])
        assert code == EXIT_INFEASIBLE
        payload = json.loads(capsys.readouterr().out)
        assert payload == {"error": "infeasible", "shortfalls": {"0": 72}}

    def test_invalid_input_exit_code(self, tmp_path, capsys):
        path = tmp_path / "team.json"
        path.write_text(json.dumps([
            {"name": "A", "sex": "Male", "role": "HR", "required_days": 1, "fixed_days": ["2023-07-01"]},
        ]), encoding="utf-8")
        code = main(["--employees", str(path), "--month", "6", "--year", "2023"])
        assert code == EXIT_INVALID

    def test_unreadable_employee_file(self, tmp_path, capsys):
        code = main(["--employees", str(tmp_path / "missing.json"), "--month", "6", "--year", "2023"])
        assert code == EXIT_INVALID

    def test_role_min_parsing(self, employees_json, capsys):
        code = main([
            "--employees", str(employees_json), "--month", "6", "--year", "2023",
            "--role-min", "Project Manager=1", "--json",
        ])
        assert code == EXIT_OK
        payload = json.loads(capsys.readouterr().out)
        assert any("Project Manager" in w for w in payload["warnings"])

    def test_bad_role_min_is_usage_error(self, employees_json, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([
                "--employees", str(employees_json), "--month", "6", "--year", "2023",
                "--role-min", "HR=-1",
            ])
        assert exc_info.value.code == 2
