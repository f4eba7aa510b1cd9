"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from paperdoc.interfaces import IDocumentRenderer

    class MyRenderer(IDocumentRenderer):
        def render(self, document: AssembledDocument) -> bytes:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .doc_gen.assembler import AssembledDocument
    from .doc_gen.resolver import ConcreteStyle
    from .models import ExportJob, FormatConfig, PaperContent


# ============================================================================
# 持久化协作方接口
# ============================================================================

class KeyValueStore(Protocol):
    """键值存储协议（草稿与格式配置的持久化）"""

    def get(self, key: str) -> str | None:
        """读取文本，不存在时返回None"""
        ...

    def set(self, key: str, value: str) -> None:
        """写入文本"""
        ...


# ============================================================================
# 文档生成模块接口
# ============================================================================

class IFormatResolver(ABC):
    """格式解析器接口 - 章节路径 → 具体样式"""

    @abstractmethod
    def resolve(self, section_path: str, config: FormatConfig | None) -> ConcreteStyle:
        """
        解析章节格式

        Args:
            section_path: 章节路径（如 introduction.content）
            config: 格式配置（缺失字段回退到内置默认值）

        Returns:
            具体样式（所有字段均有值）

        Raises:
            FormatError: 未知字号或未知章节路径
        """
        ...


class IDocumentAssembler(ABC):
    """文档装配器接口 - 论文内容 → 段落序列"""

    @abstractmethod
    def assemble(self, content: PaperContent, config: FormatConfig | None) -> AssembledDocument:
        """
        按固定章节顺序装配段落

        Args:
            content: 论文内容（调用方已完成清洗与校验）
            config: 格式配置

        Returns:
            有序段落序列 + 脚注定义
        """
        ...


class IDocumentRenderer(ABC):
    """文档渲染器接口 - 段落序列 → docx字节"""

    @abstractmethod
    def render(self, document: AssembledDocument) -> bytes:
        """
        序列化为docx

        Raises:
            SerializationError: 序列化失败（不返回部分输出）
        """
        ...


class IExportPipeline(ABC):
    """导出流水线接口"""

    @abstractmethod
    def export(self, content: PaperContent, format_config: FormatConfig | None = None) -> ExportJob:
        """清洗 → 校验 → 装配 → 序列化"""
        ...


# ============================================================================
# 异常定义
# ============================================================================

class PaperDocError(Exception):
    """基础异常"""
    pass


class FormatError(PaperDocError):
    """格式错误（配置值超出固定枚举，如未知字号）"""
    pass


class SerializationError(PaperDocError):
    """序列化错误"""
    pass


class ConfigError(PaperDocError):
    """配置错误"""
    pass
