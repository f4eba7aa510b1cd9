"""
文档装配单元测试

每个模块完成后必须运行：pytest tests/unit/test_assembler.py -v
"""

import pytest

from paperdoc.doc_gen import DocumentAssembler, ParagraphKind, build_file_name
from paperdoc.interfaces import FormatError
from paperdoc.models import (
    FormatConfig,
    NumberingIndents,
    PaperContent,
    StyleFormat,
)


@pytest.fixture
def assembler() -> DocumentAssembler:
    return DocumentAssembler()


class TestSectionOrder:
    """章节顺序测试"""

    def test_section_order(self, assembler: DocumentAssembler, sample_content: PaperContent):
        """测试章节按固定顺序输出"""
        document = assembler.assemble(sample_content)

        sections = []
        for paragraph in document.paragraphs:
            if not sections or sections[-1] != paragraph.section:
                sections.append(paragraph.section)

        assert sections == [
            "title",
            "personalInfo",
            "abstractTitle",
            "abstract",
            "keywords",
            "introductionTitle",
            "introduction",
            "divider",
            "body",
            "divider",
            "conclusionTitle",
            "conclusion",
            "divider",
            "referencesTitle",
            "references",
        ]

    def test_skip_empty_sections(self, assembler: DocumentAssembler, minimal_content: PaperContent):
        """测试空章节跳过"""
        document = assembler.assemble(minimal_content)
        sections = {p.section for p in document.paragraphs}

        assert "abstractTitle" not in sections
        assert "keywords" not in sections
        assert "conclusionTitle" not in sections
        assert len(document.section_paragraphs("divider")) == 1

    def test_headings_text(self, assembler: DocumentAssembler, sample_content: PaperContent):
        document = assembler.assemble(sample_content)
        assert document.section_paragraphs("abstractTitle")[0].text == "摘  要"
        assert document.section_paragraphs("introductionTitle")[0].text == "引言"
        assert document.section_paragraphs("referencesTitle")[0].text == "参考文献"

    def test_personal_info_line(self, assembler: DocumentAssembler, sample_content: PaperContent):
        paragraph = assembler.assemble(sample_content).section_paragraphs("personalInfo")[0]
        assert paragraph.text == "姓名：张三  学号：2024001"
        assert paragraph.alignment == "center"

    def test_keywords_label_bold(self, assembler: DocumentAssembler, sample_content: PaperContent):
        paragraph = assembler.assemble(sample_content).section_paragraphs("keywords")[0]
        assert [run.text for run in paragraph.runs] == ["关键词：", "公共空间；城市更新"]
        assert paragraph.runs[0].bold is True


class TestBody:
    """正文装配测试"""

    def test_end_to_end_runs(self, assembler: DocumentAssembler, minimal_content: PaperContent):
        """测试两段正文：3个片段 + 1个片段"""
        document = assembler.assemble(minimal_content)
        body = document.section_paragraphs("body")

        assert len(body) == 2
        assert len(body[0].runs) == 3
        assert len(body[1].runs) == 1
        assert body[0].runs[1].footnote_id == 1
        assert [f.id for f in document.footnotes] == [1]

    def test_blank_line_keeps_paragraph(self, assembler: DocumentAssembler, sample_content: PaperContent):
        """测试空行保留为空段落"""
        body = assembler.assemble(sample_content).section_paragraphs("body")
        assert len(body) == 7
        assert body[3].kind is ParagraphKind.BLANK
        assert body[3].runs == ()

    def test_body_numbering_indent(self, assembler: DocumentAssembler, sample_content: PaperContent):
        """测试编号级别缩进（em × 字号磅值）"""
        body = assembler.assemble(sample_content).section_paragraphs("body")
        indents = [p.first_line_indent for p in body if p.kind is ParagraphKind.TEXT]
        assert indents == [0, 24, 48, 24, 72, 96]

    def test_body_script_styles(self, assembler: DocumentAssembler, sample_content: PaperContent):
        """测试正文中英文格式选择"""
        body = assembler.assemble(sample_content).section_paragraphs("body")
        assert body[0].runs[0].style.family == "宋体"
        assert body[4].runs[0].style.family == "Times New Roman"
        assert body[0].line_value == 540
        assert body[0].alignment == "justify"

    def test_numbering_indent_overrides(self, assembler: DocumentAssembler):
        config = FormatConfig(numbering_indents=NumberingIndents(level1=1))
        content = PaperContent(title="t", body="一、总述\n普通段落")
        body = assembler.assemble(content, config).section_paragraphs("body")
        assert [p.first_line_indent for p in body] == [12, 24]

    def test_dangling_reference_literal(self, assembler: DocumentAssembler):
        """测试未定义脚注按原文输出"""
        content = PaperContent(title="t", body="见 [5] 说明")
        document = assembler.assemble(content)
        paragraph = document.section_paragraphs("body")[0]
        assert paragraph.text == "见 [5] 说明"
        assert not any(run.is_anchor for run in paragraph.runs)
        assert document.footnotes == []


class TestOtherSections:
    """其他章节测试"""

    def test_introduction_and_conclusion_footnotes(
        self, assembler: DocumentAssembler, sample_content: PaperContent
    ):
        document = assembler.assemble(sample_content)
        intro = document.section_paragraphs("introduction")[0]
        assert [run.footnote_id for run in intro.runs] == [None, 1, None]
        assert [f.id for f in document.footnotes] == [1, 2, 3]

    def test_footnote_script_style(self, assembler: DocumentAssembler, sample_content: PaperContent):
        footnotes = {f.id: f for f in assembler.assemble(sample_content).footnotes}
        assert footnotes[1].style.family == "宋体"
        assert footnotes[2].style.family == "Times New Roman"
        assert footnotes[2].style.size == "小五"

    def test_references_not_spliced(self, assembler: DocumentAssembler, sample_content: PaperContent):
        """测试参考文献不拆分脚注、无首行缩进"""
        paragraph = assembler.assemble(sample_content).section_paragraphs("references")[0]
        assert len(paragraph.runs) == 1
        assert paragraph.first_line_indent == 0

    def test_section_indent_two_em(self, assembler: DocumentAssembler, sample_content: PaperContent):
        abstract = assembler.assemble(sample_content).section_paragraphs("abstract")
        assert [p.first_line_indent for p in abstract] == [24, 24]

    def test_format_error_propagates(self, assembler: DocumentAssembler, minimal_content: PaperContent):
        config = FormatConfig(content_chinese=StyleFormat(size="特大号"))
        with pytest.raises(FormatError):
            assembler.assemble(minimal_content, config)


def test_build_file_name():
    assert build_file_name("我的 论文/初稿") == "我的_论文_初稿.docx"
