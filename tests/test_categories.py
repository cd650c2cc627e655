import logging

import numpy as np
import pandas as pd
import pytest

from transplantr.categories import (
    CauseOfDeath,
    Ethnicity,
    PancreasIntent,
    Sex,
    ShareType,
    is_member,
    parse_labels,
    unrecognised,
)


def test_sex_from_label():
    """Known labels map to the correct enum regardless of case."""
    assert Sex.from_label("F") == Sex.FEMALE
    assert Sex.from_label(" male ") == Sex.MALE


@pytest.mark.parametrize(
    "vocabulary, label, expected",
    [
        (Ethnicity, "Non-Black", Ethnicity.NON_BLACK),
        (Ethnicity, "non_black", Ethnicity.NON_BLACK),
        (CauseOfDeath, "Stroke", CauseOfDeath.CVA),
        (ShareType, "REGIONAL", ShareType.REGIONAL),
        (PancreasIntent, "pak", PancreasIntent.PAK),
    ],
)
def test_label_normalisation(vocabulary, label, expected):
    """Spacing, case, underscores and synonyms all resolve to one member."""
    assert vocabulary.from_label(label) is expected


def test_invalid_label_raises():
    """Unknown labels must trigger a ValueError."""
    with pytest.raises(ValueError):
        Sex.from_label("unknown")


def test_parse_labels_marks_unrecognised_as_none_and_warns(caplog):
    """Unknown and missing labels become None with one logged warning."""
    with caplog.at_level(logging.WARNING, logger="transplantr.categories"):
        parsed = parse_labels(["F", "female ", "X", None], Sex)
    assert parsed.tolist() == [Sex.FEMALE, Sex.FEMALE, None, None]
    assert "2 Sex value(s) not recognised" in caplog.text


def test_is_member_gives_boolean_mask():
    """Membership of parsed labels is a plain boolean array."""
    parsed = parse_labels(pd.Series(["black", "white", "other"]), Ethnicity)
    mask = is_member(parsed, Ethnicity.BLACK)
    assert mask.dtype == bool
    assert mask.tolist() == [True, False, False]


def test_unrecognised_lists_distinct_raw_values():
    """Each bad raw value is listed once."""
    assert unrecognised(["local", "nationwide", "nationwide", "Local"], ShareType) == ["nationwide"]
    assert unrecognised(np.array(["M", "F"]), Sex) == []
