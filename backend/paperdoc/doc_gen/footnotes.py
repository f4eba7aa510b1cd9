"""
脚注拆分器 - 将一行文本拆为普通文本片段与脚注锚点片段

规则：
1. 单遍、从左到右、不重叠地扫描 [n] 标记
2. n 对应内容非空的脚注 → 锚点片段；否则原样保留标记文本
3. 标记之间的文本按顺序输出，不丢弃

所有片段的 text 依次拼接可还原原行。
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from ..models import Segment, SegmentKind
from ..validation import FOOTNOTE_REF_RE


@dataclass(frozen=True)
class FootnoteReference:
    """行内脚注标记位置"""
    id: int
    start: int
    end: int


def extract_footnote_references(text: str) -> Iterator[FootnoteReference]:
    for m in FOOTNOTE_REF_RE.finditer(text):
        yield FootnoteReference(id=int(m.group(1)), start=m.start(), end=m.end())


def has_content(footnote_table: Mapping[int, str], footnote_id: int) -> bool:
    content = footnote_table.get(footnote_id)
    return bool(content and content.strip())


def splice_footnotes(line: str, footnote_table: Mapping[int, str]) -> list[Segment]:
    """拆分一行文本"""
    segments: list[Segment] = []
    last = 0

    for ref in extract_footnote_references(line):
        if ref.start > last:
            segments.append(Segment(SegmentKind.TEXT, line[last:ref.start]))

        marker = line[ref.start:ref.end]
        if has_content(footnote_table, ref.id):
            segments.append(Segment(SegmentKind.FOOTNOTE, marker, footnote_id=ref.id))
        else:
            segments.append(Segment(SegmentKind.TEXT, marker))
        last = ref.end

    if last < len(line) or not segments:
        segments.append(Segment(SegmentKind.TEXT, line[last:]))

    return segments
