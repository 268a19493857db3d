"""Constant lunar calendar data and the decoders over the packed year table."""

from __future__ import annotations

import json
import logging
from typing import NamedTuple, Optional, Sequence, Tuple, TypeVar

from .errors import InvalidDateError, LunarRangeError, TableIntegrityError

__all__ = [
    "FIRST_YEAR",
    "LAST_YEAR",
    "Holiday",
    "Star",
    "earthly_branch",
    "heavenly_stem",
    "leap_month_length",
    "leap_month_of",
    "lookup",
    "month_length",
    "solar_term_name",
    "solar_term_offset_minutes",
    "verify_year_table",
    "year_length",
    "zodiac_animal",
]

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

FIRST_YEAR = 1900
LAST_YEAR = 2099

NO_LEAP_NIBBLES = (0x0, 0xF)

# One entry per lunar year from 1900 through 2100.
#   bits 15..4  month 1..12 has 30 days when set, 29 otherwise
#   bits  3..0  leap month number, 0x0 or 0xF when the year has none
# The leap month has 30 days when the following entry ends in 0xF. The 2100
# entry only exists to answer that question for 2099.
YEAR_TABLE: Tuple[int, ...] = (
    0x4bd8, 0x4ae0, 0xa570, 0x54d5, 0xd260, 0xd950, 0x5554, 0x56af,
    0x9ad0, 0x55d2, 0x4ae0, 0xa5b6, 0xa4d0, 0xd250, 0xd295, 0xb54f,
    0xd6a0, 0xada2, 0x95b0, 0x4977, 0x497f, 0xa4b0, 0xb4b5, 0x6a50,
    0x6d40, 0xab54, 0x2b6f, 0x9570, 0x52f2, 0x4970, 0x6566, 0xd4a0,
    0xea50, 0x6a95, 0x5adf, 0x2b60, 0x86e3, 0x92ef, 0xc8d7, 0xc95f,
    0xd4a0, 0xd8a6, 0xb55f, 0x56a0, 0xa5b4, 0x25df, 0x92d0, 0xd2b2,
    0xa950, 0xb557, 0x6ca0, 0xb550, 0x5355, 0x4daf, 0xa5b0, 0x4573,
    0x52bf, 0xa9a8, 0xe950, 0x6aa0, 0xaea6, 0xab50, 0x4b60, 0xaae4,
    0xa570, 0x5260, 0xf263, 0xd950, 0x5b57, 0x56a0, 0x96d0, 0x4dd5,
    0x4ad0, 0xa4d0, 0xd4d4, 0xd250, 0xd558, 0xb540, 0xb6a0, 0x95a6,
    0x95bf, 0x49b0, 0xa974, 0xa4b0, 0xb27a, 0x6a50, 0x6d40, 0xaf46,
    0xab60, 0x9570, 0x4af5, 0x4970, 0x64b0, 0x74a3, 0xea50, 0x6b58,
    0x5ac0, 0xab60, 0x96d5, 0x92e0, 0xc960, 0xd954, 0xd4a0, 0xda50,
    0x7552, 0x56a0, 0xabb7, 0x25d0, 0x92d0, 0xcab5, 0xa950, 0xb4a0,
    0xbaa4, 0xad50, 0x55d9, 0x4ba0, 0xa5b0, 0x5176, 0x52bf, 0xa930,
    0x7954, 0x6aa0, 0xad50, 0x5b52, 0x4b60, 0xa6e6, 0xa4e0, 0xd260,
    0xea65, 0xd530, 0x5aa0, 0x76a3, 0x96d0, 0x4afb, 0x4ad0, 0xa4d0,
    0xd0b6, 0xd25f, 0xd520, 0xdd45, 0xb5a0, 0x56d0, 0x55b2, 0x49b0,
    0xa577, 0xa4b0, 0xaa50, 0xb255, 0x6d2f, 0xada0, 0x4b63, 0x937f,
    0x49f8, 0x4970, 0x64b0, 0x68a6, 0xea5f, 0x6b20, 0xa6c4, 0xaaef,
    0x92e0, 0xd2e3, 0xc960, 0xd557, 0xd4a0, 0xda50, 0x5d55, 0x56a0,
    0xa6d0, 0x55d4, 0x52d0, 0xa9b8, 0xa950, 0xb4a0, 0xb6a6, 0xad50,
    0x55a0, 0xaba4, 0xa5b0, 0x52b0, 0xb273, 0x6930, 0x7337, 0x6aa0,
    0xad50, 0x4b55, 0x4b6f, 0xa570, 0x54e4, 0xd260, 0xe968, 0xd520,
    0xdaa0, 0x6aa6, 0x56df, 0x4ae0, 0xa9d4, 0xa4d0, 0xd150, 0xf252, 0xd520,
)

# Minutes from 1900-01-06T02:05:00Z to each solar term of that solar year.
SOLAR_TERM_OFFSETS: Tuple[int, ...] = (
    0, 21208, 42467, 63836, 85337, 107014, 128867, 150921,
    173149, 195551, 218072, 240693, 263343, 285989, 308563, 331033,
    353350, 375494, 397447, 419210, 440795, 462224, 483532, 504758,
)

HEAVENLY_STEMS: Tuple[str, ...] = ("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸")

EARTHLY_BRANCHES: Tuple[str, ...] = (
    "子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥",
)

ZODIAC: Tuple[str, ...] = ("鼠", "牛", "虎", "兔", "龙", "蛇", "马", "羊", "猴", "鸡", "狗", "猪")

SOLAR_TERMS: Tuple[str, ...] = (
    "小寒", "大寒", "立春", "雨水", "惊蛰", "春分", "清明", "谷雨",
    "立夏", "小满", "芒种", "夏至", "小暑", "大暑", "立秋", "处暑",
    "白露", "秋分", "寒露", "霜降", "立冬", "小雪", "大雪", "冬至",
)

LUNAR_NUMERALS: Tuple[str, ...] = ("零", "一", "二", "三", "四", "五", "六", "七", "八", "九")

# 初 十 廿 卅 are day-of-month prefixes; 正 冬 腊 name months 1, 11 and 12.
LUNAR_SPECIAL_WORDS: Tuple[str, ...] = ("初", "十", "廿", "卅", "正", "冬", "腊", "闰")

WEEKDAY_NAMES: Tuple[str, ...] = ("日", "一", "二", "三", "四", "五", "六")


class Holiday(NamedTuple):
    month: int
    day: int
    name: str


class Star(NamedTuple):
    name: str
    fortune: str
    direction: str


LUNAR_HOLIDAYS: Tuple[Holiday, ...] = (
    Holiday(1, 1, "春节"),
    Holiday(1, 15, "元宵节"),
    Holiday(5, 5, "端午节"),
    Holiday(7, 7, "七夕节"),
    Holiday(7, 15, "中元节"),
    Holiday(8, 15, "中秋节"),
    Holiday(9, 9, "重阳节"),
    Holiday(12, 8, "腊八节"),
    Holiday(12, 23, "北方小年"),
    Holiday(12, 24, "南方小年"),
)

NEW_YEARS_EVE = "除夕"

SOLAR_HOLIDAYS: Tuple[Holiday, ...] = (
    Holiday(1, 1, "元旦节"),
    Holiday(2, 14, "情人节"),
    Holiday(3, 8, "妇女节"),
    Holiday(3, 12, "植树节"),
    Holiday(3, 15, "消费者权益日"),
    Holiday(3, 21, "世界森林日"),
    Holiday(4, 1, "愚人节"),
    Holiday(4, 7, "世界卫生日"),
    Holiday(4, 22, "世界地球日"),
    Holiday(5, 1, "劳动节"),
    Holiday(5, 4, "青年节"),
    Holiday(5, 31, "世界无烟日"),
    Holiday(6, 1, "儿童节"),
    Holiday(6, 26, "禁毒日"),
    Holiday(7, 1, "建党节"),
    Holiday(8, 1, "建军节"),
    Holiday(8, 15, "抗战胜利"),
    Holiday(9, 10, "教师节"),
    Holiday(9, 28, "孔子诞辰"),
    Holiday(10, 1, "国庆节"),
    Holiday(12, 20, "澳门回归"),
    Holiday(12, 24, "平安夜"),
    Holiday(12, 25, "圣诞节"),
)

PENGZU_HEAVENLY: Tuple[str, ...] = (
    "甲不开仓\n财物耗亡", "乙不栽植\n千株不长", "丙不修灶\n必见灾殃", "丁不剃头\n头主生疮",
    "戊不受田\n田主不祥", "己不破券\n二比并亡", "庚不经络\n织机虚张", "辛不合酱\n主人不尝",
    "壬不决水\n更难提防", "癸不词讼\n理弱敌强",
)

PENGZU_EARTHLY: Tuple[str, ...] = (
    "子不问卜\n自惹祸殃", "丑不冠带\n主不还乡", "寅不祭祀\n神鬼不尝", "卯不穿井\n水泉不香",
    "辰不哭泣\n必主重丧", "巳不远行\n财物伏藏", "午不苫盖\n屋主更张", "未不服药\n毒气入肠",
    "申不安床\n鬼祟入房", "酉不宴客\n醉坐颠狂", "戌不吃犬\n作怪上床", "亥不嫁娶\n不利新郎",
)

EVIL_SPIRIT: Tuple[str, ...] = ("南", "东", "北", "西")

FETUS_GOD_DIRECTION: Tuple[str, ...] = (
    "外东北", "外正东", "外东南", "外正南", "外西南",
    "外正西", "外西北", "外正北", "房内北", "房内南", "房内东",
)

FETUS_GOD_HEAVENLY: Tuple[str, ...] = ("门", "碓磨", "厨灶", "仓库", "房床")

FETUS_GOD_EARTHLY: Tuple[str, ...] = ("碓", "厕", "炉灶", "大门", "栖", "床")

TWELVE_DUTY: Tuple[str, ...] = ("开", "闭", "建", "除", "满", "平", "定", "执", "破", "危", "成", "收")

FIVE_ELEMENTS: Tuple[str, ...] = (
    "海中金", "炉中火", "大林木", "路旁土", "剑锋金", "山头火", "涧下水", "城头土", "白蜡金", "杨柳木",
    "泉中水", "屋上土", "霹雳火", "松柏木", "长流水", "砂石金", "山下火", "平地木", "壁上土", "金箔金",
    "灯头火", "天河水", "大驿土", "钗钏金", "桑柘木", "大溪水", "沙中土", "天上火", "石榴木", "大海水",
)

# Rows follow the week of the year modulo 4, columns the day of the week
# starting on Sunday.
TWENTY_EIGHT_STARS: Tuple[Tuple[Star, ...], ...] = (
    (
        Star("房日兔", "吉", "东方"),
        Star("心月狐", "凶", "东方"),
        Star("尾火虎", "吉", "东方"),
        Star("箕水豹", "吉", "东方"),
        Star("角木蛟", "吉", "东方"),
        Star("亢金龙", "凶", "东方"),
        Star("氐土貉", "凶", "东方"),
    ),
    (
        Star("虚日鼠", "凶", "北方"),
        Star("危月燕", "凶", "北方"),
        Star("室火猪", "吉", "北方"),
        Star("壁水貐", "吉", "北方"),
        Star("斗木獬", "吉", "北方"),
        Star("牛金牛", "凶", "北方"),
        Star("女士蝠", "凶", "北方"),
    ),
    (
        Star("昴日鸡", "凶", "西方"),
        Star("毕月乌", "吉", "西方"),
        Star("觜火猴", "凶", "西方"),
        Star("参水猿", "凶", "西方"),
        Star("奎水狼", "凶", "西方"),
        Star("娄金狗", "吉", "西方"),
        Star("胃土雉", "吉", "西方"),
    ),
    (
        Star("星日马", "凶", "南方"),
        Star("张月鹿", "吉", "南方"),
        Star("翼火蛇", "凶", "南方"),
        Star("轸水蚓", "吉", "南方"),
        Star("井木犴", "吉", "南方"),
        Star("鬼金羊", "凶", "南方"),
        Star("柳土獐", "凶", "南方"),
    ),
)


def lookup(table: Sequence[T], index: int, label: str) -> T:
    """Return ``table[index]`` without Python's negative-index wraparound."""

    if not 0 <= index < len(table):
        raise IndexError(f"{label} index {index} outside [0, {len(table)})")
    return table[index]


def _encoding(year: int) -> int:
    if not FIRST_YEAR <= year <= LAST_YEAR:
        raise LunarRangeError(
            f"Lunar year {year} outside supported range {FIRST_YEAR}-{LAST_YEAR}"
        )
    return YEAR_TABLE[year - FIRST_YEAR]


def leap_month_of(year: int) -> Optional[int]:
    """Return the leap month number of *year*, or ``None`` when it has none."""

    nibble = _encoding(year) & 0xF
    if nibble in NO_LEAP_NIBBLES:
        return None
    return nibble


def month_length(year: int, month: int) -> int:
    """Number of days (29 or 30) in the regular *month* of lunar *year*."""

    if not 1 <= month <= 12:
        raise InvalidDateError(f"Lunar month must be within 1-12, got {month}")
    return 30 if _encoding(year) & (0x10000 >> month) else 29


def leap_month_length(year: int) -> Optional[int]:
    """Number of days in the leap month of *year*, ``None`` without one."""

    if leap_month_of(year) is None:
        return None
    following = YEAR_TABLE[year - FIRST_YEAR + 1]
    return 30 if following & 0xF == 0xF else 29


def year_length(year: int) -> int:
    """Total days of lunar *year*, leap month included."""

    encoding = _encoding(year)
    # A lunar year has at least twelve 29-day months.
    total = 348
    bit = 0x8000
    while bit > 0x8:
        if encoding & bit:
            total += 1
        bit >>= 1
    return total + (leap_month_length(year) or 0)


def solar_term_offset_minutes(index: int) -> int:
    return lookup(SOLAR_TERM_OFFSETS, index, "solar term")


def solar_term_name(index: int) -> str:
    return lookup(SOLAR_TERMS, index, "solar term")


def heavenly_stem(index: int) -> str:
    return lookup(HEAVENLY_STEMS, index, "heavenly stem")


def earthly_branch(index: int) -> str:
    return lookup(EARTHLY_BRANCHES, index, "earthly branch")


def zodiac_animal(index: int) -> str:
    return lookup(ZODIAC, index, "zodiac")


def verify_year_table() -> None:
    """Reject leap nibbles that carry no meaning in the packed encoding.

    Raises
    ------
    TableIntegrityError
        If the table does not span 1900-2100 or an entry ends in 0xD or 0xE.
    """

    expected = LAST_YEAR - FIRST_YEAR + 2
    if len(YEAR_TABLE) != expected:
        raise TableIntegrityError(
            f"Year table holds {len(YEAR_TABLE)} entries, expected {expected}"
        )
    for offset, encoding in enumerate(YEAR_TABLE):
        nibble = encoding & 0xF
        if nibble > 12 and nibble not in NO_LEAP_NIBBLES:
            raise TableIntegrityError(
                f"Undefined leap nibble {nibble:#x} for year {FIRST_YEAR + offset}"
            )
    LOGGER.debug(
        json.dumps(
            {"event": "year_table_verified", "first": FIRST_YEAR, "last": LAST_YEAR}
        )
    )


verify_year_table()
