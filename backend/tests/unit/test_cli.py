"""
命令行单元测试
"""

import json
from pathlib import Path

import pytest

from paperdoc.cli import main


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    path = temp_dir / "paperdoc.yaml"
    path.write_text(
        "runtime_options:\n"
        "  paths:\n"
        "    storage_dir: storage\n"
        "    output_dir: output\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def content_file(temp_dir: Path) -> Path:
    path = temp_dir / "paper.json"
    path.write_text(
        json.dumps(
            {
                "title": "命令行论文",
                "content": "第一段 [1] 内容。",
                "footnotes": [{"id": 1, "content": "注释"}],
            },
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    return path


def test_export_writes_docx(config_file: Path, content_file: Path, temp_dir: Path):
    code = main(["--config", str(config_file), "export", "--content", str(content_file)])
    assert code == 0
    assert (temp_dir / "output" / "命令行论文.docx").exists()


def test_export_draft(config_file: Path, content_file: Path, temp_dir: Path):
    """保存草稿后直接导出"""
    assert main(["--config", str(config_file), "draft", "save", str(content_file)]) == 0
    assert main(["--config", str(config_file), "export"]) == 0
    assert (temp_dir / "output" / "命令行论文.docx").exists()


def test_export_empty_draft_fails(config_file: Path, capsys):
    assert main(["--config", str(config_file), "export"]) == 1
    assert "请填写 题目" in capsys.readouterr().out


def test_config_export_import_reset(config_file: Path, temp_dir: Path):
    exported = temp_dir / "format.json"
    assert main(["--config", str(config_file), "config", "export", "--output", str(exported)]) == 0

    data = json.loads(exported.read_text(encoding="utf-8"))
    data["title"]["family"] = "楷体"
    exported.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    assert main(["--config", str(config_file), "config", "import", str(exported)]) == 0
    stored = json.loads((temp_dir / "storage" / "paperdoc-format-config.json").read_text(encoding="utf-8"))
    assert stored["title"]["family"] == "楷体"

    assert main(["--config", str(config_file), "config", "reset"]) == 0
    stored = json.loads((temp_dir / "storage" / "paperdoc-format-config.json").read_text(encoding="utf-8"))
    assert stored["title"]["family"] == "宋体"


def test_config_import_invalid(config_file: Path, temp_dir: Path, capsys):
    bad = temp_dir / "bad.json"
    bad.write_text("[]", encoding="utf-8")
    assert main(["--config", str(config_file), "config", "import", str(bad)]) == 1
    assert "配置必须是一个对象" in capsys.readouterr().out


def test_format_error_exits_nonzero(config_file: Path, content_file: Path, temp_dir: Path, capsys):
    fmt = temp_dir / "format.json"
    fmt.write_text(
        json.dumps(
            {
                "title": {"size": "特大号"},
                "personalInfo": {"family": "宋体"},
                "abstractTitle": {"family": "黑体"},
                "abstractContent": {"family": "宋体"},
            },
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    code = main(
        ["--config", str(config_file), "export", "--content", str(content_file), "--format", str(fmt)]
    )
    assert code == 1
    assert "文档生成失败" in capsys.readouterr().out
