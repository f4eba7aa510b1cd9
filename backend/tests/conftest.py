"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(sample_content, format_config):
        assert sample_content.title == "测试论文"
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from paperdoc.config import InMemoryStore, RuntimeConfig
from paperdoc.models import (
    FormatConfig,
    Footnote,
    PaperContent,
    PersonalInfoItem,
    default_format_config,
)


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config(temp_dir: Path) -> RuntimeConfig:
    """运行期配置（存储与输出指向临时目录）"""
    return RuntimeConfig(storage_dir=temp_dir / "storage", output_dir=temp_dir / "output")


@pytest.fixture
def format_config() -> FormatConfig:
    """内置默认格式配置"""
    return default_format_config()


@pytest.fixture
def store() -> InMemoryStore:
    """内存键值存储"""
    return InMemoryStore()


# ============================================================================
# 数据模型 Fixtures
# ============================================================================

@pytest.fixture
def minimal_content() -> PaperContent:
    """最小论文内容（题目 + 一条脚注的正文）"""
    return PaperContent(
        title="测试论文",
        body="第一段 [1] 内容。\n第二段。",
        footnotes=[Footnote(id=1, content="注释")],
    )


@pytest.fixture
def sample_content() -> PaperContent:
    """各章节齐全的论文内容"""
    return PaperContent(
        title="城市更新中的公共空间研究",
        personal_info=[
            PersonalInfoItem(label="姓名", value="张三"),
            PersonalInfoItem(label="学号", value="2024001"),
        ],
        abstract="本文讨论公共空间。\n并提出改进建议。",
        keywords="公共空间；城市更新",
        introduction="研究背景[1]。",
        body=(
            "一、研究现状\n"
            "（一）国内研究\n"
            "1. 早期阶段[2]\n"
            "\n"
            "This paragraph is English.\n"
            "（1）细节说明\n"
            "①注意事项"
        ),
        conclusion="综上所述[3]。",
        references="[1] 张三. 城市研究. 2020.",
        footnotes=[
            Footnote(id=1, content="背景资料来源"),
            Footnote(id=2, content="See the appendix."),
            Footnote(id=3, content="结论说明"),
        ],
    )


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
