import pytest

from voxfront.text.g2p_en import VOWEL_PHONES, letters_to_phones


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("cat", ("K", "AE1", "T")),
        ("make", ("M", "EY1", "K")),
        ("ship", ("SH", "IH1", "P")),
        ("happy", ("HH", "AE1", "P", "IY0")),
        ("city", ("S", "IH1", "T", "IY0")),
        ("zorp", ("Z", "AO1", "R", "P")),
    ],
)
def test_letter_rules(word: str, expected: tuple[str, ...]) -> None:
    assert letters_to_phones(word) == expected


def test_only_first_vowel_is_stressed() -> None:
    phones = letters_to_phones("banana")
    stresses = [phone[-1] for phone in phones if phone[:-1] in VOWEL_PHONES]

    assert stresses == ["1", "0", "0"]


def test_words_without_letters() -> None:
    assert letters_to_phones("") == ()
    assert letters_to_phones("123") == ()
