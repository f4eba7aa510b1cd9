"""
文字类别与编号识别单元测试

每个模块完成后必须运行：pytest tests/unit/test_classify.py -v
"""

import pytest

from paperdoc.classify import (
    content_section_for,
    detect_numbering_level,
    detect_script,
    get_indent_for_level,
    parse_content_with_numbering,
    parse_line_with_numbering,
    remove_numbering_prefix,
)
from paperdoc.models import NumberingIndents, NumberingLevel, ScriptKind


class TestScript:
    """文字类别测试"""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("hello", ScriptKind.ENGLISH),
            ("你好", ScriptKind.CHINESE),
            ("hello你好", ScriptKind.MIXED),
            ("123", ScriptKind.CHINESE),
            ("", ScriptKind.CHINESE),
        ],
    )
    def test_detect_script(self, line: str, expected: ScriptKind):
        assert detect_script(line) is expected

    def test_mixed_uses_chinese_format(self):
        """测试混排行使用中文格式"""
        assert content_section_for(ScriptKind.MIXED) == "contentChinese"
        assert content_section_for(ScriptKind.ENGLISH) == "contentEnglish"


class TestNumbering:
    """编号识别测试"""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("一、摘要", NumberingLevel.LEVEL_1),
            ("（一）引言", NumberingLevel.LEVEL_2),
            ("1. 背景", NumberingLevel.LEVEL_3),
            ("（1）说明", NumberingLevel.LEVEL_4),
            ("①注意", NumberingLevel.LEVEL_5),
            ("普通段落", NumberingLevel.NONE),
            ("十二、结语", NumberingLevel.LEVEL_1),
            ("  2.缩进的编号", NumberingLevel.LEVEL_3),
        ],
    )
    def test_detect_levels(self, line: str, expected: NumberingLevel):
        """测试各级别字面量识别"""
        assert detect_numbering_level(line) == expected

    def test_default_indents(self):
        assert get_indent_for_level(NumberingLevel.NONE) == 2
        assert get_indent_for_level(NumberingLevel.LEVEL_1) == 0
        assert get_indent_for_level(NumberingLevel.LEVEL_5) == 8

    def test_indent_overrides(self):
        """测试自定义缩进只覆盖1-5级"""
        overrides = NumberingIndents(level1=1.5, level3=0)
        assert get_indent_for_level(NumberingLevel.LEVEL_1, overrides) == 1.5
        assert get_indent_for_level(NumberingLevel.LEVEL_3, overrides) == 0
        assert get_indent_for_level(NumberingLevel.LEVEL_2, overrides) == 2
        assert get_indent_for_level(NumberingLevel.NONE, {0: 9}) == 2

    def test_parse_line(self):
        pattern = parse_line_with_numbering("（一）国内研究")
        assert pattern.level == NumberingLevel.LEVEL_2
        assert pattern.text == "（一）国内研究"
        assert pattern.indent == 2

    def test_parse_content(self):
        patterns = parse_content_with_numbering("一、总述\n正文\n①细节")
        assert [p.level for p in patterns] == [
            NumberingLevel.LEVEL_1,
            NumberingLevel.NONE,
            NumberingLevel.LEVEL_5,
        ]


class TestRemovePrefix:
    """去除编号前缀测试"""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("一、摘要", "摘要"),
            ("（一） 引言", "引言"),
            ("1. 背景", "背景"),
            ("①注意", "注意"),
            ("普通段落", "普通段落"),
        ],
    )
    def test_remove_prefix(self, line: str, expected: str):
        assert remove_numbering_prefix(line) == expected

    @pytest.mark.parametrize("line", ["一、1. 嵌套", "（1）（2）连续", "普通", "  2. 前导空白"])
    def test_remove_prefix_idempotent(self, line: str):
        """测试去除前缀幂等"""
        once = remove_numbering_prefix(line)
        assert remove_numbering_prefix(once) == once

    def test_remove_multi_level_prefix(self):
        """测试多级数字编号整体去除，结果不再带任何编号前缀"""
        result = remove_numbering_prefix("1.2.3 方法")
        assert result == "3 方法"
        assert detect_numbering_level(result) == NumberingLevel.NONE
        assert remove_numbering_prefix(result) == result
