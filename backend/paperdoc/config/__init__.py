"""
配置层 - 运行期配置、格式配置交换与持久化

职责：
- 加载 config/paperdoc.yaml（运行期参数，支持环境变量覆盖）
- 格式配置的导出/导入（JSON）
- 草稿与格式配置的键值存储
"""

from .format_store import (
    DraftRepository,
    FormatConfigRepository,
    export_format_config,
    import_format_config,
)
from .runtime_config import (
    ExportConfig,
    LoggingConfig,
    RuntimeConfig,
    get_config,
    reload_config,
    setup_logging,
)
from .storage import DRAFT_KEY, FORMAT_CONFIG_KEY, FileStore, InMemoryStore

__all__ = [
    "RuntimeConfig",
    "ExportConfig",
    "LoggingConfig",
    "get_config",
    "reload_config",
    "setup_logging",
    "InMemoryStore",
    "FileStore",
    "DRAFT_KEY",
    "FORMAT_CONFIG_KEY",
    "FormatConfigRepository",
    "DraftRepository",
    "export_format_config",
    "import_format_config",
]
