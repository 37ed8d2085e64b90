import pytest

from voxfront.text.sentences import split_sentences


def test_splits_on_sentence_punctuation() -> None:
    text = "今天天气很好，我们一起去公园散步吧。你觉得怎么样？我觉得非常好！"

    assert split_sentences(text, max_chars=20) == [
        "今天天气很好，我们一起去公园散步吧。",
        "你觉得怎么样？我觉得非常好！",
    ]


def test_overlong_sentences_split_on_clauses() -> None:
    text = "first clause here, second clause here, third clause here."

    pieces = split_sentences(text, max_chars=25)

    assert pieces == ["first clause here,", "second clause here,", "third clause here."]


def test_short_tail_is_merged() -> None:
    assert split_sentences("This is a sentence. Ok.", max_chars=19) == ["This is a sentence. Ok."]


def test_empty_and_invalid() -> None:
    assert split_sentences("   ") == []
    with pytest.raises(ValueError):
        split_sentences("hello", max_chars=0)
