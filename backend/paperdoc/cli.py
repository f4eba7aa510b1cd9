"""
命令行入口

用法：
    paperdoc export [--content paper.json] [--format format.json] [--output-dir out]
    paperdoc config export [--output format.json]
    paperdoc config import format.json
    paperdoc config reset
    paperdoc draft save paper.json
    paperdoc draft show
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import (
    DraftRepository,
    FileStore,
    FormatConfigRepository,
    RuntimeConfig,
    import_format_config,
    reload_config,
    setup_logging,
)
from .interfaces import ConfigError, PaperDocError
from .models import PaperContent
from .pipeline import ExportPipeline

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="paperdoc", description="论文文档装配与docx导出")
    parser.add_argument("--config", type=Path, default=None, help="运行期配置文件（YAML）")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="导出docx")
    export.add_argument("--content", type=Path, default=None, help="论文内容JSON（缺省使用已保存草稿）")
    export.add_argument("--format", type=Path, default=None, help="格式配置JSON（缺省使用已保存配置）")
    export.add_argument("--output-dir", type=Path, default=None, help="输出目录")

    config = sub.add_parser("config", help="格式配置管理")
    config_sub = config.add_subparsers(dest="action", required=True)
    config_export = config_sub.add_parser("export", help="导出格式配置")
    config_export.add_argument("--output", type=Path, default=None, help="输出文件（缺省打印到标准输出）")
    config_import = config_sub.add_parser("import", help="导入格式配置")
    config_import.add_argument("path", type=Path)
    config_sub.add_parser("reset", help="重置为默认格式配置")

    draft = sub.add_parser("draft", help="草稿管理")
    draft_sub = draft.add_subparsers(dest="action", required=True)
    draft_save = draft_sub.add_parser("save", help="保存草稿")
    draft_save.add_argument("path", type=Path)
    draft_sub.add_parser("show", help="打印已保存草稿")

    return parser


def _load_content(path: Path) -> PaperContent:
    return PaperContent.model_validate_json(path.read_text(encoding="utf-8"))


def _cmd_export(args: argparse.Namespace, config: RuntimeConfig, store: FileStore) -> int:
    content = _load_content(args.content) if args.content else DraftRepository(store).load()

    if args.format:
        format_config, check = import_format_config(
            args.format.read_text(encoding="utf-8"), config.limits
        )
        if format_config is None:
            print(f"格式配置无效: {check.error}")
            return 1
    else:
        format_config = FormatConfigRepository(store, config.limits).load()

    pipeline = ExportPipeline(config=config)
    job, output_path = pipeline.export_to_file(content, args.output_dir, format_config)

    for flag in job.flags:
        print(f"警告: {flag}")
    if output_path is None:
        for error in job.errors:
            print(f"错误: {error}")
        return 1

    print(f"已导出: {output_path}")
    return 0


def _cmd_config(args: argparse.Namespace, config: RuntimeConfig, store: FileStore) -> int:
    repo = FormatConfigRepository(store, config.limits)

    if args.action == "export":
        text = repo.export_text()
        if args.output:
            args.output.write_text(text, encoding="utf-8")
            print(f"已导出格式配置: {args.output}")
        else:
            print(text)
        return 0

    if args.action == "import":
        imported, check = repo.import_text(args.path.read_text(encoding="utf-8"))
        if imported is None:
            print(f"导入失败: {check.error}")
            return 1
        print("配置导入成功")
        return 0

    repo.reset()
    print("已重置为默认格式配置")
    return 0


def _cmd_draft(args: argparse.Namespace, config: RuntimeConfig, store: FileStore) -> int:
    repo = DraftRepository(store)

    if args.action == "save":
        repo.save(_load_content(args.path))
        print("草稿已保存")
        return 0

    print(repo.load().model_dump_json(by_alias=True, indent=2))
    return 0


_COMMANDS = {
    "export": _cmd_export,
    "config": _cmd_config,
    "draft": _cmd_draft,
}


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = reload_config(args.config) if args.config else reload_config()
    except ConfigError as e:
        print(f"配置加载失败: {e}")
        return 1
    setup_logging(config.logging)
    store = FileStore(config.storage_dir)

    try:
        return _COMMANDS[args.command](args, config, store)
    except (PaperDocError, ValidationError, OSError):
        logger.exception(f"命令执行失败: {args.command}")
        print("文档生成失败，请检查内容和格式设置")
        return 1


if __name__ == "__main__":
    sys.exit(main())
