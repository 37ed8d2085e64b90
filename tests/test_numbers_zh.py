import pytest

from voxfront.languages import resolve_language_pack
from voxfront.text.expanders import ExpansionError
from voxfront.text.numbers_zh import num2str, verbalize_cardinal, verbalize_digits


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0", "零"),
        ("10", "十"),
        ("15", "十五"),
        ("105", "一百零五"),
        ("1001", "一千零一"),
        ("10000", "一万"),
        ("120000", "十二万"),
        ("100000000", "一亿"),
    ],
)
def test_verbalize_cardinal(value: str, expected: str) -> None:
    assert verbalize_cardinal(value) == expected


def test_verbalize_cardinal_with_limit_reads_digits() -> None:
    assert verbalize_cardinal("0123", with_limit=True) == "零幺二三"
    assert verbalize_cardinal("12345678901234", with_limit=True) == "幺二三四五六七八九零幺二三四"


def test_verbalize_cardinal_rejects_huge_numbers() -> None:
    with pytest.raises(ExpansionError):
        verbalize_cardinal("1" * 20)


def test_num2str_decimals() -> None:
    assert num2str("3.14") == "三点一四"
    assert num2str("0.50") == "零点五"
    assert num2str(".5") == "零点五"
    assert num2str("2.0") == "二"


def test_verbalize_digits() -> None:
    assert verbalize_digits("110") == "一一零"
    assert verbalize_digits("110", alt_one=True) == "幺幺零"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("电话是13812345678", "电话是幺三八幺二三四五六七八"),
        ("在2020/3/5见", "在二零二零年三月五日见"),
        ("从9:00-17:30上班", "从九点至十七点半上班"),
        ("跑了3.5km", "跑了三点五千米"),
        ("约3/4的人", "约四分之三的人"),
        ("有300+块", "有三百多块"),
        ("评分1-5分", "评分一到五分"),
        ("拨打010-12345678", "拨打零幺零,幺二三四五六七八"),
        ("光速3e8米每秒", "光速三亿米每秒"),
        ("①号选手", "一号选手"),
        ("ＡＢＣ１２３", "ABC一百二十三"),
    ],
)
def test_chinese_numeral_rules(resources, text: str, expected: str) -> None:
    assert resolve_language_pack("zh").normalize(text, resources).normalized == expected
