from voxfront.text.tone_sandhi import apply_tone_sandhi, three_sandhi


def test_bu_before_fourth_tone() -> None:
    assert apply_tone_sandhi("不要", [4, 4]) == [2, 4]
    assert apply_tone_sandhi("不好", [4, 3]) == [4, 3]
    assert apply_tone_sandhi("好不好", [3, 4, 3]) == [3, 5, 3]


def test_yi_sandhi() -> None:
    assert apply_tone_sandhi("一样", [1, 4]) == [2, 4]
    assert apply_tone_sandhi("一起", [1, 3]) == [4, 3]
    assert apply_tone_sandhi("看一看", [4, 1, 4]) == [4, 5, 4]
    assert apply_tone_sandhi("第一", [4, 1]) == [4, 1]
    assert apply_tone_sandhi("一一", [1, 1]) == [1, 1]


def test_neutral_tone_words() -> None:
    assert apply_tone_sandhi("风筝", [1, 1]) == [1, 5]
    assert apply_tone_sandhi("我们", [3, 2]) == [3, 5]
    assert apply_tone_sandhi("妈妈", [1, 1]) == [1, 5]
    assert apply_tone_sandhi("三个", [1, 4]) == [1, 5]
    assert apply_tone_sandhi("电子", [4, 3]) == [4, 3]


def test_third_tone_chain() -> None:
    assert apply_tone_sandhi("你好", [3, 3]) == [2, 3]
    assert apply_tone_sandhi("展览馆", [3, 3, 3]) == [2, 2, 3]
    assert three_sandhi("好好学习", [3, 3, 3, 3]) == [2, 3, 2, 3]


def test_mismatched_lengths_are_left_alone() -> None:
    assert apply_tone_sandhi("你好", [3]) == [3]
    assert apply_tone_sandhi("", []) == []
