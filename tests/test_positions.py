# tests/test_positions.py
import pytest

from app.grouping.models import Category
from app.grouping.positions import classify_position

# -------------------------------
# Table matches
# -------------------------------


@pytest.mark.parametrize(
    "label, expected",
    [
        ("GK", Category.GOALKEEPER),
        ("gk", Category.GOALKEEPER),
        ("LB", Category.DEFENDER),
        ("RCB", Category.DEFENDER),
        ("CDM", Category.MIDFIELDER),
        ("CAM", Category.MIDFIELDER),
        (" cm ", Category.MIDFIELDER),
        ("ST", Category.FORWARD),
        ("LW", Category.FORWARD),
        ("RM", Category.FORWARD),
    ],
)
def test_known_abbreviations(label, expected):
    assert classify_position(label) == expected


@pytest.mark.parametrize("label", ["Striker", "Winger", "wing", "Left Winger", "Striker / CAM"])
def test_spelled_out_forward_roles(label):
    assert classify_position(label) == Category.FORWARD


def test_compound_label_uses_first_known_token():
    assert classify_position("CB/RB") == Category.DEFENDER
    assert classify_position("ST, LW") == Category.FORWARD
    assert classify_position("XX / CAM") == Category.MIDFIELDER


# -------------------------------
# Fallbacks
# -------------------------------


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Defender", Category.DEFENDER),
        ("midfield", Category.MIDFIELDER),
        ("Forward", Category.FORWARD),
        ("Attacker", Category.FORWARD),
    ],
)
def test_first_letter_fallback(label, expected):
    assert classify_position(label) == expected


@pytest.mark.parametrize("label", ["", None, "Unknown", "Sweeper", "123"])
def test_unresolved_labels_default_to_midfielder(label):
    assert classify_position(label) == Category.MIDFIELDER
