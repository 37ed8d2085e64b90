from voxfront.text.segment import MaxMatchSegmenter, Segment


def test_forward_max_match_keeps_unknown_characters_single() -> None:
    segmenter = MaxMatchSegmenter({"中国", "人民", "共和国"})

    assert segmenter.cut("中华人民共和国") == ["中", "华", "人民", "共和国"]


def test_segment_merges_unknown_runs() -> None:
    segmenter = MaxMatchSegmenter({"中国", "人民", "共和国"})

    assert segmenter.segment("中华人民共和国") == [
        Segment("中华", in_dictionary=False),
        Segment("人民", in_dictionary=True),
        Segment("共和国", in_dictionary=True),
    ]


def test_longest_word_wins() -> None:
    segmenter = MaxMatchSegmenter({"怎么", "怎么样"})

    assert segmenter.cut("怎么样") == ["怎么样"]
    assert "怎么" in segmenter


def test_empty_inputs() -> None:
    assert MaxMatchSegmenter([]).cut("你好") == ["你", "好"]
    assert MaxMatchSegmenter({"你好"}).segment("") == []
