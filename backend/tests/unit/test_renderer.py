"""
docx渲染单元测试

每个模块完成后必须运行：pytest tests/unit/test_renderer.py -v
"""

import asyncio
import io

import pytest
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.shared import Mm

from paperdoc.doc_gen import AssembledDocument, DocumentAssembler, DocxRenderer, ParagraphSpec
from paperdoc.interfaces import SerializationError
from paperdoc.models import PaperContent


@pytest.fixture
def renderer() -> DocxRenderer:
    return DocxRenderer()


def _footnotes_blob(docx_bytes: bytes) -> bytes | None:
    doc = Document(io.BytesIO(docx_bytes))
    for rel in doc.part.rels.values():
        if rel.reltype == RT.FOOTNOTES:
            return rel.target_part.blob
    return None


class TestDocxRenderer:
    """渲染测试"""

    def test_render_produces_docx(self, renderer: DocxRenderer, minimal_content: PaperContent):
        """测试输出可被 python-docx 重新打开"""
        data = renderer.render(DocumentAssembler().assemble(minimal_content))
        assert len(data) > 0

        doc = Document(io.BytesIO(data))
        texts = [p.text for p in doc.paragraphs]
        assert texts[0] == "测试论文"
        assert "第二段。" in texts

    def test_page_margins(self, renderer: DocxRenderer, minimal_content: PaperContent):
        data = renderer.render(DocumentAssembler().assemble(minimal_content))
        section = Document(io.BytesIO(data)).sections[0]
        assert section.left_margin == Mm(25.4)
        assert section.top_margin == Mm(25.4)

    def test_paragraph_format(self, renderer: DocxRenderer, minimal_content: PaperContent):
        """测试标题与正文的段落/字体格式"""
        data = renderer.render(DocumentAssembler().assemble(minimal_content))
        doc = Document(io.BytesIO(data))

        title = doc.paragraphs[0]
        assert title.runs[0].font.bold is True
        assert title.runs[0].font.name == "宋体"

        body = next(p for p in doc.paragraphs if p.text.startswith("第二段"))
        assert body.paragraph_format.line_spacing == 1.5

    def test_divider_border(self, renderer: DocxRenderer, minimal_content: PaperContent):
        data = renderer.render(DocumentAssembler().assemble(minimal_content))
        doc = Document(io.BytesIO(data))
        assert "w:pBdr" in doc.paragraphs[2]._p.xml

    def test_render_footnote_part(self, renderer: DocxRenderer, minimal_content: PaperContent):
        """测试脚注部件与引用"""
        data = renderer.render(DocumentAssembler().assemble(minimal_content))

        doc = Document(io.BytesIO(data))
        assert "w:footnoteReference" in doc.element.xml

        blob = _footnotes_blob(data)
        assert blob is not None
        xml = blob.decode("utf-8")
        assert 'w:id="1"' in xml
        assert "注释" in xml

    def test_no_footnote_part_without_anchors(self, renderer: DocxRenderer):
        data = renderer.render(DocumentAssembler().assemble(PaperContent(title="t", body="见 [5]")))
        doc = Document(io.BytesIO(data))
        assert "w:footnoteReference" not in doc.element.xml

    def test_serialization_error(self, renderer: DocxRenderer, minimal_content: PaperContent, monkeypatch):
        """测试序列化失败抛 SerializationError"""
        def broken_font(*args, **kwargs):
            raise ValueError("字体写入失败")

        monkeypatch.setattr("paperdoc.doc_gen.renderer.apply_font", broken_font)
        with pytest.raises(SerializationError):
            renderer.render(DocumentAssembler().assemble(minimal_content))

    def test_unknown_alignment_renders_left(self, renderer: DocxRenderer):
        document = AssembledDocument(
            title="t",
            paragraphs=[ParagraphSpec(section="title", alignment="diagonal")],
        )
        doc = Document(io.BytesIO(renderer.render(document)))
        assert doc.paragraphs[0].alignment == WD_ALIGN_PARAGRAPH.LEFT

    def test_render_async(self, renderer: DocxRenderer, minimal_content: PaperContent):
        """测试异步渲染"""
        document = DocumentAssembler().assemble(minimal_content)
        data = asyncio.run(renderer.render_async(document))
        assert data[:2] == b"PK"
