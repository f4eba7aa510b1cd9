"""
脚注部件 - 向 docx 包写入 word/footnotes.xml

python-docx 不直接支持脚注，这里构造脚注 XML 部件并与主文档部件建立关联。
分隔符脚注占用 id -1 与 0，用户脚注使用其正整数编号。
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from docx.opc.constants import CONTENT_TYPE as CT
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.oxml import serialize_part_xml
from docx.opc.packuri import PackURI
from docx.opc.part import Part, XmlPart
from docx.oxml import OxmlElement, parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.text.paragraph import Paragraph
from docx.text.run import Run

if TYPE_CHECKING:
    from docx.document import Document as DocxDocument

    from .assembler import FootnoteSpec
    from .resolver import ConcreteStyle

FOOTNOTES_PARTNAME = "/word/footnotes.xml"

_SEPARATOR_PARAGRAPH = (
    '<w:p><w:pPr><w:spacing w:after="0" w:line="240" w:lineRule="auto"/></w:pPr>'
    "<w:r><w:{mark}/></w:r></w:p>"
)

_FOOTNOTES_XML = (
    f"<w:footnotes {nsdecls('w')}>"
    '<w:footnote w:type="separator" w:id="-1">'
    + _SEPARATOR_PARAGRAPH.format(mark="separator")
    + "</w:footnote>"
    '<w:footnote w:type="continuationSeparator" w:id="0">'
    + _SEPARATOR_PARAGRAPH.format(mark="continuationSeparator")
    + "</w:footnote>"
    "</w:footnotes>"
)

FontApplier = Callable[[Run, "ConcreteStyle", bool], None]


def add_reference_mark(run: Run, tag: str, footnote_id: int | None = None) -> None:
    """在 run 中追加脚注引用标记（正文 footnoteReference / 脚注内 footnoteRef）"""
    run.font.superscript = True
    mark = OxmlElement(tag)
    if footnote_id is not None:
        mark.set(qn("w:id"), str(footnote_id))
    run._r.append(mark)


def build_footnotes_element(footnotes: Sequence[FootnoteSpec], apply_font: FontApplier):
    """构造 w:footnotes 根元素"""
    root = parse_xml(_FOOTNOTES_XML)

    for spec in footnotes:
        footnote = OxmlElement("w:footnote")
        footnote.set(qn("w:id"), str(spec.id))
        p = OxmlElement("w:p")
        footnote.append(p)
        root.append(footnote)

        paragraph = Paragraph(p, None)
        paragraph.paragraph_format.space_after = 0

        ref_run = paragraph.add_run()
        apply_font(ref_run, spec.style, False)
        add_reference_mark(ref_run, "w:footnoteRef")

        text_run = paragraph.add_run(f" {spec.text}")
        apply_font(text_run, spec.style, spec.style.bold)

    return root


def add_footnotes_part(
    document: DocxDocument,
    footnotes: Sequence[FootnoteSpec],
    apply_font: FontApplier,
) -> Part:
    """写入（或替换）文档的脚注部件"""
    root = build_footnotes_element(footnotes, apply_font)
    main_part = document.part

    for rel in main_part.rels.values():
        if rel.reltype == RT.FOOTNOTES and not rel.is_external:
            existing = rel.target_part
            if isinstance(existing, XmlPart):
                existing._element = root
            else:
                existing._blob = serialize_part_xml(root)
            return existing

    part = XmlPart(PackURI(FOOTNOTES_PARTNAME), CT.WML_FOOTNOTES, root, main_part.package)
    main_part.relate_to(part, RT.FOOTNOTES)
    return part
