from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import GritConfig, load_config
from .errors import GritUserError
from .message import CommitFields, CommitType, Footer, format_commit_message, render_editor_template
from .template import compile_template
from .version import tool_version

logger = logging.getLogger("grit")


def _setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("GRIT_DEBUG") else logging.WARNING
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="grit",
        description="Conventional commit assistant: commit-message templates",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--root",
        type=Path,
        default=None,
        help="корень репозитория с .grit.yaml (по умолчанию текущий каталог)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Скомпилировать и отрендерить шаблон")
    sp_render.add_argument("template", metavar="FILE|-", help="файл шаблона или - для stdin")
    sp_render.add_argument(
        "--var",
        action="append",
        metavar="KEY=VALUE",
        help="строковая переменная (можно указать несколько)",
    )
    sp_render.add_argument(
        "--list",
        action="append",
        metavar="KEY=A,B,C",
        help="переменная-список, элементы через запятую",
    )
    sp_render.add_argument(
        "--flag",
        action="append",
        metavar="KEY",
        help="булева переменная со значением true",
    )
    sp_render.add_argument(
        "--context",
        type=Path,
        metavar="FILE",
        help="YAML-файл с переменными (аргументы командной строки имеют приоритет)",
    )
    sp_render.add_argument(
        "--strict",
        action="store_true",
        help="ошибка при обращении к неизвестной переменной",
    )

    sp_check = sub.add_parser("check", help="Только компиляция шаблона")
    sp_check.add_argument("template", metavar="FILE|-", help="файл шаблона или - для stdin")

    sub.add_parser("editor-template", help="Текст буфера редактора")

    sp_format = sub.add_parser("format", help="Сформировать сообщение коммита")
    sp_format.add_argument("--type", required=True, dest="commit_type", help="тип коммита (feat, fix, ...)")
    sp_format.add_argument("--description", required=True, help="краткое описание")
    sp_format.add_argument("--scope", help="область изменений")
    sp_format.add_argument("--breaking", action="store_true", help="ломающее изменение ('!')")
    sp_format.add_argument("--body", help="подробное описание")
    sp_format.add_argument(
        "--footer",
        action="append",
        metavar="KEY: VALUE",
        help="footer коммита (можно указать несколько)",
    )

    return p


def _read_source(arg: str) -> str:
    """Читает шаблон из файла или из stdin ('-')."""
    if arg == "-":
        return sys.stdin.read()
    path = Path(arg)
    if not path.is_file():
        raise ValueError(f"Template file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Failed to read template file {path}: {e}") from e


def _split_assignment(spec: str, option: str) -> tuple[str, str]:
    if "=" not in spec:
        raise ValueError(f"Invalid {option} format '{spec}'. Expected 'KEY=VALUE'")
    key, value = spec.split("=", 1)
    key = key.strip()
    if not key:
        raise ValueError(f"Invalid {option} format '{spec}': empty key")
    return key, value


def _read_context_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ValueError(f"Context file not found: {path}")
    try:
        raw = YAML(typ="safe").load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ValueError(f"Failed to parse context file {path}: {e}")
    if not isinstance(raw, dict):
        raise ValueError(f"Context file must contain a mapping: {path}")
    return raw


def _build_context(ns: argparse.Namespace) -> Dict[str, Any]:
    context: Dict[str, Any] = {}
    if ns.context is not None:
        context.update(_read_context_file(ns.context))

    for spec in ns.var or []:
        key, value = _split_assignment(spec, "--var")
        context[key] = value

    for spec in ns.list or []:
        key, value = _split_assignment(spec, "--list")
        context[key] = [item.strip() for item in value.split(",") if item.strip()]

    for key in ns.flag or []:
        context[key.strip()] = True

    return context


def _parse_footers(footers: Optional[List[str]]) -> List[Footer]:
    return [Footer.parse(raw) for raw in footers or []]


def _run_render(ns: argparse.Namespace, cfg: GritConfig) -> int:
    template = compile_template(_read_source(ns.template), name=ns.template)
    strict = bool(ns.strict or cfg.template.strict)
    sys.stdout.write(template.render(_build_context(ns), strict=strict))
    return 0


def _run_check(ns: argparse.Namespace) -> int:
    template = compile_template(_read_source(ns.template), name=ns.template)
    logger.debug("Template '%s' is valid", template.name)
    sys.stdout.write("ok\n")
    return 0


def _run_format(ns: argparse.Namespace, cfg: GritConfig) -> int:
    commit_type = CommitType.parse(ns.commit_type)
    if commit_type.value not in cfg.types:
        raise ValueError(
            f"Commit type '{commit_type.value}' is disabled in configuration. "
            f"Allowed: {', '.join(cfg.types)}"
        )
    fields = CommitFields(
        type=commit_type,
        description=ns.description,
        scope=ns.scope,
        breaking=ns.breaking,
        body=ns.body,
        footers=_parse_footers(ns.footer),
    )
    template = compile_template(cfg.message_template(), name="commit-message")
    sys.stdout.write(format_commit_message(fields, template, strict=cfg.template.strict) + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        cfg = load_config(ns.root or Path.cwd())

        if ns.cmd == "render":
            return _run_render(ns, cfg)

        if ns.cmd == "check":
            return _run_check(ns)

        if ns.cmd == "editor-template":
            sys.stdout.write(render_editor_template(cfg.types))
            return 0

        if ns.cmd == "format":
            return _run_format(ns, cfg)

    except GritUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
