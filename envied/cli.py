from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from .config import Settings
from .declarations import load_declarations
from .env_loader import load_env_file
from .errors import EnviedError
from .generator import generate_file, generate_source
from .resolver import derive_key

logger = logging.getLogger(__name__)


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="envied command line interface")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate", help="Generate a Python module from env declarations"
    )
    generate_parser.add_argument(
        "declarations", type=Path, help="JSON or YAML declaration file"
    )
    generate_parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Output file (default: stdout)"
    )
    generate_parser.add_argument(
        "--root",
        type=Path,
        default=settings.project_root,
        help="Project root that env file paths are relative to",
    )

    keys_parser = subparsers.add_parser(
        "keys", help="List the variable each declared field is read from"
    )
    keys_parser.add_argument(
        "declarations", type=Path, help="JSON or YAML declaration file"
    )
    keys_parser.add_argument(
        "--root",
        type=Path,
        default=settings.project_root,
        help="Project root that env file paths are relative to",
    )

    return parser


def _list_keys(declarations: Path, root: Path) -> List[str]:
    rows: List[str] = []
    for env_class in load_declarations(declarations):
        config = env_class.config
        env = load_env_file(config.path, require=bool(config.require_env_file), root=root)
        for env_field in env_class.fields:
            key = derive_key(env_field, config)
            status = "present" if key in env else "missing"
            rows.append(f"{env_class.name}.{env_field.name}\t{key}\t{status}")
    return rows


def _fail(exc: Exception) -> NoReturn:
    logger.debug("Generation failed", exc_info=True)
    print(f"error: {exc}", file=sys.stderr)
    raise SystemExit(1) from exc


def main(argv: Optional[list[str]] = None) -> None:
    try:
        settings = Settings.load()
    except EnviedError as exc:
        _fail(exc)
    parser = _build_parser(settings)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "generate":
            classes = load_declarations(args.declarations)
            if args.output is None:
                sys.stdout.write(generate_source(classes, root=args.root))
            else:
                generate_file(classes, args.output, root=args.root)
            return
        if args.command == "keys":
            for row in _list_keys(args.declarations, args.root):
                print(row)
            return
    except (EnviedError, OSError) as exc:
        _fail(exc)

    parser.error(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
