import numpy as np
import pandas as pd
import pytest
from stairval.notepad import create_notepad

from transplantr.scorer import SCORES, TableScorer, score_table


@pytest.fixture
def donors() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "age": [52, 40],
            "height": [183, 170],
            "weight": [81, 80],
            "eth": ["non-black", "non-black"],
            "htn": [1, 0],
            "dm": [0, 0],
            "cva": [1, 0],
            "creat": [1.7, 120 / 88.4],
            "hcv": [0, 0],
            "dcd": [1, 0],
        }
    )


def test_every_registered_score_names_its_columns():
    """Every registry entry is keyed by its name and has required columns."""
    for name, spec in SCORES.items():
        assert spec.name == name
        assert spec.required, name
        assert set(spec.columns) >= set(spec.categorical)


def test_score_table_appends_column(donors):
    """Scoring returns a copy with one new column and no issues."""
    notepad = create_notepad("scores")
    scored = score_table(donors, "uskdri", notepad, units="US", scaling=1.250609)
    assert not notepad.has_errors(include_subsections=True)
    assert not notepad.has_warnings(include_subsections=True)
    assert "uskdri" not in donors.columns
    assert scored["uskdri"].round(2).tolist() == [1.42, 0.87]


def test_missing_columns_are_errors(donors):
    """A missing required column is a notepad error naming it."""
    notepad = create_notepad("scores")
    result = score_table(donors.drop(columns=["hcv"]), "uskdri", notepad)
    assert notepad.has_errors(include_subsections=True)
    assert "uskdri" not in result.columns
    assert any("hcv" in str(e) for e in notepad.errors())


def test_unrecognised_labels_are_warnings(donors):
    """Unknown labels are warnings and the rows still score."""
    donors.loc[1, "eth"] = "martian"
    notepad = create_notepad("scores")
    scored = score_table(donors, "uskdri", notepad, units="US")
    assert notepad.has_warnings(include_subsections=True)
    assert not notepad.has_errors(include_subsections=True)
    assert not np.isnan(scored["uskdri"]).any()


def test_column_mapping_and_optional_parameters():
    """Columns may be mapped and optional ones left out."""
    df = pd.DataFrame({"AST": [38, 160], "platelets": [150, 75]})
    notepad = create_notepad("scores")
    scored = score_table(df, "apri", notepad, columns={"ast": "AST", "plt": "platelets"})
    assert scored["apri"].round(2).tolist() == [0.63, 5.33]


def test_options_not_taken_by_a_score_are_ignored():
    """Options a score does not take are dropped."""
    df = pd.DataFrame({"ast": [38], "plt": [150]})
    notepad = create_notepad("scores")
    scored = score_table(df, "apri", notepad, units="US", scaling=2.0)
    assert scored["apri"].round(2).tolist() == [0.63]


def test_later_scores_read_earlier_ones():
    """A quartile can be scored from an index added in the same run."""
    tables = {"uk": pd.DataFrame({"age": [50], "height": [170], "htn": [1], "sex": ["F"], "cmv": [0], "gfr": [90], "hdays": [2]})}
    notepad = create_notepad("scores")
    scored = TableScorer().score_tables(tables, ["ukkdri", "ukkdri_q"], notepad, prefix=True)
    assert scored["uk"]["ukkdri_q"].tolist() == ["D2"]


def test_parse_errors_become_notepad_errors():
    """A malformed value is a notepad error and the column is not added."""
    df = pd.DataFrame({"hla_mm": ["1:0:1", "bad"]})
    notepad = create_notepad("scores")
    result = score_table(df, "hla_mm_level_str", notepad)
    assert notepad.has_errors(include_subsections=True)
    assert "hla_mm_level_str" not in result.columns


def test_unknown_score():
    """Looking up an unregistered score is a ValueError."""
    with pytest.raises(ValueError):
        TableScorer().get("not-a-score")


def test_missing_hla_strings_still_score_the_column():
    """Blank mismatch cells give NaN rows instead of dropping the whole column."""
    df = pd.DataFrame({"hla_mm": ["1:0:1", None, "2:1:1"]})
    notepad = create_notepad("scores")
    result = score_table(df, "hla_mm_level_str", notepad)
    assert not notepad.has_errors(include_subsections=True)
    assert result["hla_mm_level_str"][0] == 2
    assert np.isnan(result["hla_mm_level_str"][1])
    assert result["hla_mm_level_str"][2] == 3


def test_missing_pressor_dose_gives_nan_row():
    """A blank vasopressor cell gives a NaN P-PASS for that donor only."""
    df = pd.DataFrame(
        {
            "age": [25, 25], "bmi": [19, 19], "icu": [0, 0], "c_arr": [0, 0], "na": [135, 135],
            "amylase": [101, 101], "lipase": [120, 120], "norad": [0, np.nan], "dopam": [0, 0],
        }
    )
    notepad = create_notepad("scores")
    result = score_table(df, "p_pass", notepad)
    assert result["p_pass"][0] == 9
    assert np.isnan(result["p_pass"][1])
