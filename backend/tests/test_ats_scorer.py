import pytest

from services.ats_scorer import ats_score, word_count

SECTIONS = "experience education skills "


def test_clean_resume_scores_100():
    text = SECTIONS + "word " * 250
    assert ats_score(text) == 100


def test_empty_resume():
    # Three missing sections (-45) and too short (-25)
    assert ats_score("") == 30


@pytest.mark.parametrize(
    "text, expected",
    [
        (SECTIONS + "word " * 250 + "�", 80),
        (SECTIONS + "word " * 250 + "ï¿½", 80),
        ("experience skills " + "word " * 250, 85),
        (SECTIONS + "word " * 50, 75),
        (SECTIONS + "word " * 1200, 90),
    ],
)
def test_deductions(text, expected):
    assert ats_score(text) == expected


def test_score_never_negative():
    assert ats_score("�") >= 0


def test_word_count_counts_alphabetic_words():
    assert word_count("o'neil co-founded 3 startups in 2020!") == 4
