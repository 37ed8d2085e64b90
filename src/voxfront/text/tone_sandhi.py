"""Mandarin tone sandhi over segmented words.

Tones are integers 1-5 with 5 the neutral tone. Each rule receives a word and
the tones of its characters and returns the adjusted tones.
"""

from __future__ import annotations

_NUMERALS = frozenset("零一二两三四五六七八九十百千万亿0123456789")
_PUNCTUATION = frozenset("!?…,.-")
_NEUTRAL_PARTICLES = frozenset("吧呢哈啊呐噻嘛吖嗨哦哒额滴哩哟喽啰耶喔诶")
_STRUCTURAL_PARTICLES = frozenset("的地得")
_NEUTRAL_SUFFIXES = frozenset("们子")
_GE_PREFIXES = frozenset("几有两半多各整每做是")

MUST_NEUTRAL_WORDS = frozenset(
    {
        "麻烦", "马虎", "风筝", "队伍", "钥匙", "部分", "那么", "这么", "这个", "那个",
        "运气", "豆腐", "认识", "规矩", "衣服", "衣裳", "葡萄", "萝卜", "舒服", "舌头",
        "脑袋", "耳朵", "老实", "老婆", "糊涂", "精神", "窗户", "知识", "眼睛", "眉毛",
        "生意", "琢磨", "玻璃", "热闹", "点心", "漂亮", "清楚", "消息", "比方", "欺负",
        "棉花", "本事", "木头", "朋友", "月亮", "暖和", "明白", "时候", "新鲜", "故事",
        "收拾", "招呼", "打算", "打听", "扎实", "意思", "怎么", "志气", "心思", "师傅",
        "巴掌", "工夫", "尾巴", "小伙", "对付", "家伙", "客气", "学问", "学生", "名字",
        "媳妇", "姑娘", "头发", "太阳", "大夫", "多少", "地方", "在乎", "嘴巴", "喜欢",
        "商量", "告诉", "后头", "口袋", "厉害", "功夫", "力气", "前头", "利索", "凉快",
        "关系", "先生", "兄弟", "便宜", "休息", "什么", "人家", "亲戚", "事情", "买卖",
        "主意", "丫头", "东西", "丈夫", "上头", "下巴", "父亲", "母亲", "照顾", "介绍",
        "幸福", "熟悉", "计划", "逻辑", "惦记",
    }
)  # fmt: skip
MUST_NOT_NEUTRAL_WORDS = frozenset(
    {"男子", "女子", "分子", "原子", "量子", "莲子", "石子", "瓜子", "电子", "人人", "虎虎"}
)


def apply_tone_sandhi(word: str, tones: list[int]) -> list[int]:
    """Apply 不, 一, neutral-tone and third-tone sandhi in that order."""
    if len(word) != len(tones) or not word:
        return list(tones)
    tones = bu_sandhi(word, tones)
    tones = yi_sandhi(word, tones)
    tones = neutral_sandhi(word, tones)
    return three_sandhi(word, tones)


def bu_sandhi(word: str, tones: list[int]) -> list[int]:
    tones = list(tones)
    if len(word) == 3 and word[1] == "不":
        tones[1] = 5
        return tones
    for index, char in enumerate(word[:-1]):
        if char == "不" and tones[index + 1] == 4:
            tones[index] = 2
    return tones


def yi_sandhi(word: str, tones: list[int]) -> list[int]:
    tones = list(tones)
    if "一" not in word or all(char in _NUMERALS for char in word):
        return tones
    if len(word) == 3 and word[1] == "一" and word[0] == word[2]:
        tones[1] = 5
        return tones
    if word.startswith("第一"):
        tones[1] = 1
        return tones
    for index, char in enumerate(word[:-1]):
        if char != "一":
            continue
        previous = word[index - 1] if index else ""
        if previous == "第" or previous in _NUMERALS:
            continue
        following = word[index + 1]
        if following in _NUMERALS or following in _PUNCTUATION:
            continue
        tones[index] = 2 if tones[index + 1] == 4 else 4
    return tones


def neutral_sandhi(word: str, tones: list[int]) -> list[int]:
    tones = list(tones)
    last = len(word) - 1

    if word not in MUST_NOT_NEUTRAL_WORDS:
        for index in range(1, len(word)):
            if word[index] == word[index - 1] and word[index] not in _NUMERALS:
                tones[index] = 5

    tail = word[-1]
    if (
        tail in _NEUTRAL_PARTICLES
        or tail in _STRUCTURAL_PARTICLES
        or (len(word) > 1 and tail in _NEUTRAL_SUFFIXES and word not in MUST_NOT_NEUTRAL_WORDS)
    ):
        tones[last] = 5

    ge_index = word.find("个")
    if ge_index >= 1:
        previous = word[ge_index - 1]
        if previous in _NUMERALS or previous in _GE_PREFIXES:
            tones[ge_index] = 5
    elif word == "个":
        tones[0] = 5
    elif word in MUST_NEUTRAL_WORDS or word[-2:] in MUST_NEUTRAL_WORDS:
        tones[last] = 5
    return tones


def three_sandhi(word: str, tones: list[int]) -> list[int]:
    tones = list(tones)
    if len(tones) == 4 and all(tone == 3 for tone in tones):
        # Four-character words split into two two-character halves.
        return [2, 3, 2, 3]
    for index in range(len(tones) - 1):
        if tones[index] == 3 and tones[index + 1] == 3:
            tones[index] = 2
    return tones
