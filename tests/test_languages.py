import logging

from voxfront.encoding import encode
from voxfront.languages import (
    canonical_language,
    is_supported,
    normalize,
    phonemize,
    resolve_language_pack,
    supported_languages,
)
from voxfront.resources import load
from voxfront.symbols import texts


def _phonemize(text: str, language: str, resources) -> list[str]:
    pack = resolve_language_pack(language)
    normalized = pack.normalize(text, resources).normalized
    return texts(pack.phonemize(normalized, resources))


def test_language_pack_resolution() -> None:
    assert resolve_language_pack("en").code == "en"
    assert resolve_language_pack("EN_us").code == "en"
    assert resolve_language_pack("zh-Hans").code == "zh"
    assert resolve_language_pack("cmn").code == "zh"
    assert resolve_language_pack("ko").code == "ko"
    assert resolve_language_pack("fr").code == "fr"
    assert resolve_language_pack("unknown-lang").code == "und"


def test_registry_helpers() -> None:
    assert canonical_language(" zh_CN ") == "zh"
    assert canonical_language("auto") == "und"
    assert is_supported("en-GB")
    assert not is_supported("tlh")
    assert {"en", "zh", "und", "ja", "ko"} <= set(supported_languages())


def test_english_lexicon_words(resources) -> None:
    assert _phonemize("Hello world.", "en", resources) == [
        "HH", "AH0", "L", "OW1", "|",
        "W", "ER1", "L", "D", "|",
        ".",
    ]  # fmt: skip


def test_english_numbers_are_phonemized_after_normalization(resources) -> None:
    assert _phonemize("I have 3 cats", "en", resources) == [
        "AY1", "|",
        "HH", "AE1", "V", "|",
        "TH", "R", "IY1", "|",
        "K", "AE1", "T", "S", "|",
    ]  # fmt: skip


def test_english_miss_uses_letter_rules(resources, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="voxfront")

    assert _phonemize("zorp", "en", resources) == ["Z", "AO1", "R", "P", "|"]
    kinds = [getattr(record, "recoverable_kind", None) for record in caplog.records]
    assert "PhonemizationMiss" in kinds


def test_english_non_letters_fall_back_to_graphemes(resources) -> None:
    pack = resolve_language_pack("en")
    symbols = pack.phonemize("é", resources)

    assert [(symbol.text, symbol.kind) for symbol in symbols] == [("é", "grapheme"), ("|", "boundary")]


def test_chinese_phrases_and_characters(resources) -> None:
    assert _phonemize("我喜欢学习", "zh", resources) == [
        "w", "o3", "|",
        "x", "i3", "h", "uan5", "|",
        "x", "ve2", "x", "i2", "|",
    ]  # fmt: skip


def test_chinese_out_of_dictionary_run_reads_characters(resources) -> None:
    assert _phonemize("中华人民共和国", "zh", resources) == [
        "zh", "ong1", "h", "ua2", "|",
        "r", "en2", "m", "in2", "|",
        "g", "ong4", "h", "e2", "g", "uo2", "|",
    ]  # fmt: skip


def test_chinese_sandhi_spans_merged_prefix(resources) -> None:
    # A lone 不 joins the following dictionary word so its sandhi sees the next tone.
    assert _phonemize("不认识", "zh", resources) == ["b", "u2", "r", "en4", "sh", "ir5", "|"]


def test_chinese_unknown_character_becomes_grapheme(resources) -> None:
    pack = resolve_language_pack("zh")
    symbols = pack.phonemize("龘", resources)

    assert [(symbol.text, symbol.kind) for symbol in symbols] == [("龘", "grapheme"), ("|", "boundary")]


def test_chinese_format_characters_add_no_boundary(resources) -> None:
    symbols = resolve_language_pack("zh").phonemize("你好\u200b", resources)

    assert texts(symbols) == ["n", "i2", "h", "ao3", "|"]


def test_chinese_with_embedded_english(resources) -> None:
    assert _phonemize("你好hello!", "zh", resources) == [
        "n", "i2", "h", "ao3", "|",
        "HH", "AH0", "L", "OW1", "|",
        "!",
    ]  # fmt: skip


def test_generic_pack_spells_graphemes(resources) -> None:
    assert _phonemize("Hola, Ana", "es", resources) == [
        "h", "o", "l", "a", "|", ",", "a", "n", "a", "|",
    ]  # fmt: skip


def test_empty_text_gives_no_symbols(resources) -> None:
    assert _phonemize("", "en", resources) == []
    assert _phonemize("", "zh", resources) == []


def test_module_level_normalize_and_phonemize(resources) -> None:
    normalized = normalize("I have 3 cats.", "en-US", resources)

    assert normalized.normalized == "I have three cats."
    assert texts(phonemize(normalized.normalized, "en", resources))[-1] == "."


def test_module_level_helpers_use_loaded_resources(fresh_resource_state) -> None:
    load()

    assert normalize("第3名", "zh").normalized == "第三名"
    assert texts(phonemize("你好", "zh")) == ["n", "i2", "h", "ao3", "|"]


def test_encoding_is_total_for_any_text(resources) -> None:
    samples = ["", "   ", "I have 3 cats.", "混合 text 123 ✓ ☃", "​\u0007", "Ωμέγα 42"]
    for language in ("en", "zh", "el", "und"):
        for text in samples:
            normalized = normalize(text, language, resources).normalized
            token_ids = encode(phonemize(normalized, language, resources), resources.vocabulary)
            assert all(0 <= token_id < resources.vocabulary.size() for token_id in token_ids)
