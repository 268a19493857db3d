# -*- coding: utf-8 -*-
"""
农历年历打印（1900–2099）

要点：
- 二十四节气采用固定线性近似（UTC 日期）。
- 列出农历各月初一对应的公历日期，含闰月。
- 多个年份时用 joblib 并行计算，按输入顺序输出。

用法:
    python lunar_almanac.py [year | start-end | y1,y2,...] [--jobs N]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from joblib import Parallel, cpu_count, delayed

from lunarcal import LunarCalendarDay, LunarRangeError, solar_terms_of_year
from lunarcal.almanac import lunar_month_name, zodiac
from lunarcal.converter import LunarDate, lunar_to_solar, solar_of_epoch_day
from lunarcal.cyclical import cyclical_name, lunar_year_cyclical
from lunarcal.tables import FIRST_YEAR, LAST_YEAR, leap_month_of, leap_month_length, month_length

LOGGER = logging.getLogger(__name__)


def parse_year_arguments(arg: str) -> List[int]:
    """解析年份参数，支持单年、范围以及逗号分隔列表。"""

    years: List[int] = []
    parts = [p.strip() for p in arg.split(',') if p.strip()]
    if not parts:
        raise ValueError("年份参数为空")

    for part in parts:
        if '-' in part:
            start_str, end_str = part.split('-', 1)
            start = int(start_str)
            end = int(end_str)
            if end < start:
                raise ValueError(f"范围 {part} 结束年份早于开始年份")
            years.extend(range(start, end + 1))
        else:
            years.append(int(part))

    for year in years:
        if not FIRST_YEAR <= year <= LAST_YEAR:
            raise ValueError(f"年份 {year} 超出 {FIRST_YEAR}-{LAST_YEAR}")

    # 去重同时保持输入顺序
    seen = set()
    ordered_years: List[int] = []
    for year in years:
        if year not in seen:
            ordered_years.append(year)
            seen.add(year)

    return ordered_years


def compute_year(year: int) -> Dict:
    """汇总一个农历年：节气、各月初一、闰月与除夕。"""

    out: Dict = {
        'year': year,
        'name': cyclical_name(lunar_year_cyclical(year)),
        'zodiac': zodiac(year),
        'leap_month': leap_month_of(year),
        'solar_terms': [],
        'months': [],
    }

    for name, when in solar_terms_of_year(year):
        out['solar_terms'].append({'name': name, 'date': when.isoformat()})

    leap = leap_month_of(year)
    for month in range(1, 13):
        steps = [(False, month_length(year, month))]
        if month == leap:
            steps.append((True, leap_month_length(year)))
        for is_leap, days in steps:
            first = solar_of_epoch_day(lunar_to_solar(LunarDate(year, month, 1, is_leap)))
            out['months'].append({
                'name': lunar_month_name(month, is_leap),
                'first_day': first.isoformat(),
                'days': days,
            })

    eve = LunarCalendarDay.from_lunar(year, 12, month_length(year, 12))
    out['new_years_eve'] = eve.solar.isoformat()

    LOGGER.debug(json.dumps({'event': 'almanac_year', 'year': year}))
    return out


def format_year(summary: Dict) -> str:
    lines = [f"农历 {summary['year']} 年（{summary['name']}，{summary['zodiac']}年）"]
    if summary['leap_month']:
        lines.append(f"闰月：{lunar_month_name(summary['leap_month'], True)}月")

    lines.append("\n二十四节气（UTC）")
    lines.append("-" * 64)
    for term in summary['solar_terms']:
        lines.append(f"{term['name']:<6} {term['date']}")

    lines.append("\n农历月份")
    lines.append("-" * 64)
    for month in summary['months']:
        label = f"{month['name']}月"
        lines.append(f"{label:<6} 初一:{month['first_day']}  {month['days']}天")
    lines.append(f"除夕   {summary['new_years_eve']}")
    return "\n".join(lines)


def compute_years(years: List[int], n_jobs: Optional[int] = None) -> List[Dict]:
    if not years:
        return []
    if n_jobs is None:
        n_jobs = cpu_count()
    n_jobs = max(1, min(n_jobs, len(years)))
    if n_jobs == 1:
        return [compute_year(year) for year in years]
    return Parallel(n_jobs=n_jobs)(delayed(compute_year)(year) for year in years)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="打印农历年历与二十四节气")
    parser.add_argument('years', nargs='?', default=None, help='年份：2025、2020-2025 或 2020,2023')
    parser.add_argument('--jobs', type=int, default=None, help='并行进程数（默认 CPU 核数）')
    ns = parser.parse_args(argv)

    if ns.years is None:
        years = [2025]
    else:
        try:
            years = parse_year_arguments(ns.years)
        except ValueError as exc:
            print(f"年份参数无效: {exc}")
            raise SystemExit(1)

    try:
        summaries = compute_years(years, ns.jobs)
    except LunarRangeError as exc:
        print(f"计算失败: {exc}")
        raise SystemExit(1)

    for idx, summary in enumerate(summaries):
        if idx:
            print("\n" + "=" * 72 + "\n")
        print(format_year(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
