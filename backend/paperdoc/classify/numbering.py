"""
大纲编号识别 - 按行前缀判断编号级别并映射首行缩进

级别与前缀：
- 1级: 一、
- 2级: （一）
- 3级: 1.
- 4级: （1）
- 5级: ①

前缀在子串意义上并不互斥，必须按 5 → 1 的顺序检查，首个匹配生效。

测试要点：
- test_detect_levels: 各级别字面量识别
- test_indent_overrides: 自定义缩进只覆盖1-5级
- test_remove_prefix_idempotent: 去除前缀幂等
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from ..models import NumberingIndents, NumberingLevel, NumberingPattern

_CN_NUMERALS = "一二三四五六七八九十"

# 优先级顺序：5 → 4 → 3 → 2 → 1
NUMBERING_PATTERNS: list[tuple[NumberingLevel, re.Pattern[str]]] = [
    (NumberingLevel.LEVEL_5, re.compile(r"^[①②③④⑤⑥⑦⑧⑨⑩]")),
    (NumberingLevel.LEVEL_4, re.compile(r"^（([0-9]+)）")),
    (NumberingLevel.LEVEL_3, re.compile(r"^([0-9]+)\.")),
    (NumberingLevel.LEVEL_2, re.compile(rf"^（([{_CN_NUMERALS}]+)）")),
    (NumberingLevel.LEVEL_1, re.compile(rf"^([{_CN_NUMERALS}]+)、")),
]

# 默认首行缩进（em）
DEFAULT_INDENTS: dict[NumberingLevel, float] = {
    NumberingLevel.NONE: 2,
    NumberingLevel.LEVEL_1: 0,
    NumberingLevel.LEVEL_2: 2,
    NumberingLevel.LEVEL_3: 4,
    NumberingLevel.LEVEL_4: 6,
    NumberingLevel.LEVEL_5: 8,
}

IndentOverrides = NumberingIndents | Mapping[int, float] | None


def _match(line: str) -> tuple[NumberingLevel, re.Match[str]] | None:
    for level, pattern in NUMBERING_PATTERNS:
        m = pattern.match(line)
        if m:
            return level, m
    return None


def detect_numbering_level(line: str) -> NumberingLevel:
    """识别行首编号级别"""
    found = _match(line.strip())
    return found[0] if found else NumberingLevel.NONE


def get_indent_for_level(level: NumberingLevel, overrides: IndentOverrides = None) -> float:
    """编号级别 → 首行缩进（em），无编号行不可覆盖"""
    level = NumberingLevel(level)
    if level is NumberingLevel.NONE or overrides is None:
        return DEFAULT_INDENTS[level]

    if isinstance(overrides, NumberingIndents):
        overrides = overrides.as_mapping()

    value = overrides.get(int(level))
    return DEFAULT_INDENTS[level] if value is None else value


def parse_line_with_numbering(line: str, overrides: IndentOverrides = None) -> NumberingPattern:
    level = detect_numbering_level(line)
    return NumberingPattern(level=level, text=line, indent=get_indent_for_level(level, overrides))


def parse_content_with_numbering(
    content: str,
    overrides: IndentOverrides = None,
) -> list[NumberingPattern]:
    return [parse_line_with_numbering(line, overrides) for line in content.split("\n")]


def remove_numbering_prefix(line: str) -> str:
    """去除行首编号及其两侧空白；无编号的行原样返回"""
    text = line.strip()
    found = _match(text)
    if not found:
        return line

    # 连续编号（如 "一、1. xxx"）一并去除，保证幂等
    while found:
        text = text[found[1].end():].strip()
        found = _match(text)
    return text
