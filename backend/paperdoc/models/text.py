"""
行级派生结构 - 分类器与脚注拆分器的输出（不存储）
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class ScriptKind(str, Enum):
    """文字类别"""
    CHINESE = "chinese"
    ENGLISH = "english"
    MIXED = "mixed"


class NumberingLevel(IntEnum):
    """大纲编号级别"""
    NONE = 0
    LEVEL_1 = 1   # 一、
    LEVEL_2 = 2   # （一）
    LEVEL_3 = 3   # 1.
    LEVEL_4 = 4   # （1）
    LEVEL_5 = 5   # ①


@dataclass(frozen=True)
class NumberingPattern:
    """单行编号识别结果"""
    level: NumberingLevel
    text: str
    indent: float  # em


class SegmentKind(str, Enum):
    """片段类型"""
    TEXT = "text"
    FOOTNOTE = "footnote"


@dataclass(frozen=True)
class Segment:
    """
    行内片段

    text 始终保存源文本；脚注锚点的 text 为原始标记（如 [1]）
    """
    kind: SegmentKind
    text: str
    footnote_id: int | None = None

    @property
    def is_anchor(self) -> bool:
        return self.kind is SegmentKind.FOOTNOTE
