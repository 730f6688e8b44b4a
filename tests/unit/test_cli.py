from __future__ import annotations

import pytest

from rollbook.cli import main


def test_sample_run_prints_found_and_top_students(capsys):
    assert main([]) == 0

    output = capsys.readouterr().out
    assert "Found -> Roll: 102 | Name: Priya | Total: 358 | %: 89.50" in output
    top_section = output.split("Top 2 Students:")[1]
    assert top_section.index("Roll: 103") < top_section.index("Roll: 101")
    assert "Roll: 102" not in top_section


def test_missing_roll_and_leaderboard(capsys):
    assert main(["--find", "999", "--top", "0", "--leaderboard"]) == 0

    output = capsys.readouterr().out
    assert "Not found" in output
    assert "  1. Roll: 103" in output
    assert "  3. Roll: 102" in output


def test_csv_roster_and_sorted_index(tmp_path, capsys):
    csv_path = tmp_path / "roster.csv"
    csv_path.write_text("roll,name,dsa,os,dbms,cn\n" "5,Kim,70,70,70,70\n", encoding="utf-8")
    config_path = tmp_path / "config.json"
    config_path.write_text('{"index_strategy": "sorted"}', encoding="utf-8")

    assert main(["--csv", str(csv_path), "--config", str(config_path), "--find", "5"]) == 0

    output = capsys.readouterr().out
    assert "Loaded 1 students (sorted index)" in output
    assert "Found -> Roll: 5 | Name: Kim | Total: 280" in output


def test_bad_inputs_return_error_code(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
    assert main(["--csv", str(tmp_path / "missing.csv")]) == 1
    assert "error" in capsys.readouterr().err


def test_invalid_config_value_returns_error_code(tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text('{"index_strategy": "btree"}', encoding="utf-8")

    assert main(["--config", str(config_path)]) == 1

    err = capsys.readouterr().err
    assert "Config error: Invalid config" in err
    assert "index_strategy" in err


def test_unknown_log_level_is_rejected_by_parser(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--log-level", "verbose"])

    assert excinfo.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_log_level_flag_is_case_insensitive(capsys):
    assert main(["--log-level", "warning", "--top", "1"]) == 0
    assert "Top 1 Students:" in capsys.readouterr().out
