import pytest

from voxfront.text.pinyin import Syllable, parse_tone, split_syllable


@pytest.mark.parametrize(
    ("pinyin", "expected"),
    [
        ("xue2", Syllable("x", "ve", 2)),
        ("huan5", Syllable("h", "uan", 5)),
        ("zhi1", Syllable("zh", "ir", 1)),
        ("si4", Syllable("s", "i0", 4)),
        ("yu2", Syllable("y", "v", 2)),
        ("yue4", Syllable("y", "ve", 4)),
        ("ye4", Syllable("y", "E", 4)),
        ("yan4", Syllable("y", "En", 4)),
        ("wo3", Syllable("w", "o", 3)),
        ("ai4", Syllable("AA", "ai", 4)),
        ("er2", Syllable("EE", "er", 2)),
        ("lve4", Syllable("l", "ve", 4)),
        ("nüe4", Syllable("n", "ve", 4)),
        ("qu4", Syllable("q", "v", 4)),
        ("jiou3", Syllable("j", "iu", 3)),
    ],
)
def test_split_syllable(pinyin: str, expected: Syllable) -> None:
    assert split_syllable(pinyin) == expected


def test_parse_tone_defaults_to_neutral() -> None:
    assert parse_tone("ma") == ("ma", 5)
    assert parse_tone("Lü4") == ("lv", 4)


def test_tone_override() -> None:
    assert split_syllable("yi1", tone=2) == Syllable("y", "i", 2)


def test_syllable_symbols_carry_tone() -> None:
    initial, final = split_syllable("xi3").symbols()

    assert (initial.text, initial.tone) == ("x", None)
    assert (final.text, final.tone) == ("i3", 3)


@pytest.mark.parametrize("bad", ["", "q", "xyz9", "zhx1"])
def test_invalid_syllables(bad: str) -> None:
    with pytest.raises(ValueError):
        split_syllable(bad)
