import pandas as pd
from click.testing import CliRunner

from transplantr.__main__ import _report_issues, main
from stairval.notepad import create_notepad


def _write_liver_csv(tmp_path):
    path = tmp_path / "liver.csv"
    path.write_text("INR,Bilirubin,Creatinine,Dialysis,Sodium\n2.0,54,170,0,131\n1.1,20,80,0,140\n")
    return path


def test_list_scores():
    """list-scores prints every score with its default columns."""
    runner = CliRunner()
    result = runner.invoke(main, ["list-scores"])
    assert result.exit_code == 0, result.output
    assert "meld:" in result.output
    assert "columns: inr, bili, creat, dialysis" in result.output


def test_score_writes_csv(tmp_path):
    """score -o writes one scored CSV per table."""
    runner = CliRunner()
    path = _write_liver_csv(tmp_path)
    out = tmp_path / "out"
    result = runner.invoke(main, ["score", "-i", str(path), "-s", "meld", "-s", "ukeld", "-o", str(out)])
    assert result.exit_code == 0, result.output

    scored = pd.read_csv(out / "liver_scored.csv")
    assert round(scored.loc[0, "meld"], 3) == 24.798
    assert "ukeld" in scored.columns


def test_score_summary_and_missing_columns(tmp_path):
    """Without -o a summary is printed and missing columns are reported."""
    runner = CliRunner()
    path = _write_liver_csv(tmp_path)
    result = runner.invoke(main, ["score", "-i", str(path), "-s", "meld", "-s", "peld"])
    assert result.exit_code == 0, result.output
    assert "meld: 2 scored" in result.output
    assert "peld: not scored" in result.output
    assert "Errors found in scoring" in result.output


def test_units_from_environment(tmp_path):
    """TRANSPLANTR_UNITS sets the default unit system."""
    runner = CliRunner()
    path = tmp_path / "us.csv"
    path.write_text("INR,Bilirubin,Creatinine,Dialysis,Na\n1.8,2,2,0,131\n")
    out = tmp_path / "out"
    result = runner.invoke(
        main, ["score", "-i", str(path), "-s", "meld_na", "-o", str(out)], env={"TRANSPLANTR_UNITS": "US"},
    )
    assert result.exit_code == 0, result.output
    scored = pd.read_csv(out / "us_scored.csv")
    assert round(scored.loc[0, "meld_na"], 3) == 26.257


def test_unknown_score_is_rejected(tmp_path):
    """An unregistered score name is a usage error."""
    runner = CliRunner()
    path = _write_liver_csv(tmp_path)
    result = runner.invoke(main, ["score", "-i", str(path), "-s", "nope"])
    assert result.exit_code != 0


def test_bad_column_mapping_is_rejected(tmp_path):
    """--column must be PARAM=COLUMN."""
    runner = CliRunner()
    path = _write_liver_csv(tmp_path)
    result = runner.invoke(main, ["score", "-i", str(path), "-s", "meld", "--column", "INR"])
    assert result.exit_code != 0
    assert "PARAM=COLUMN" in result.output


def test_report_issues_outputs_both_blocks(capsys):
    """
    When notepad contains both warnings and errors, the helper should print both sections.
    """
    n = create_notepad("report")
    n.add_warning("warn 1")
    n.add_error("err 1")

    _report_issues(n)
    out = capsys.readouterr().out
    assert "Warnings found in scoring" in out
    assert "warn 1" in out
    assert "Errors found in scoring" in out
    assert "err 1" in out
