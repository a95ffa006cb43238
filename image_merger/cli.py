"""Командная строка: загрузить источники, склеить и записать результат.

Usage:
  image-merger a.png b.png -o merged.jpg
  image-merger https://example.com/a.png local.png -o out.png --vertical
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import requests

from image_merger.config import Config, configure_logging
from image_merger.errors import ConfigError, MergerError
from image_merger.services.encode_service import EncodeService, format_from_suffix
from image_merger.services.image_service import ImageService
from image_merger.services.merge_service import MergeService

log = logging.getLogger(__name__)


def positive_float(value: str) -> float:
    """Тип argparse: строго положительное число."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-merger",
        description="Склеивает изображения (файлы или URL) в одно по горизонтали или вертикали.",
    )
    parser.add_argument("sources", nargs="+", help="Пути или URL изображений в порядке склейки")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Путь итогового файла")
    parser.add_argument(
        "--vertical",
        action="store_true",
        help="Складывать сверху вниз (по умолчанию слева направо)",
    )
    parser.add_argument(
        "--format",
        default=None,
        help="Формат записи (по умолчанию по расширению файла, иначе MERGER_DEFAULT_FORMAT)",
    )
    parser.add_argument(
        "--timeout",
        type=positive_float,
        default=None,
        help="Таймаут HTTP-запроса в секундах (по умолчанию MERGER_HTTP_TIMEOUT)",
    )
    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    loader = ImageService(timeout=args.timeout)
    merger = MergeService()
    encoder = EncodeService()

    try:
        fmt = args.format or format_from_suffix(args.output) or Config().DEFAULT_FORMAT
        images = [loader.load(source) for source in args.sources]
        result = merger.merge(images, horizontal=not args.vertical)
        saved = encoder.save(result.image, args.output, fmt)
    except (MergerError, OSError, requests.RequestException) as exc:
        log.debug("Merge failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Merged {result.count} images into {result.width}x{result.height}: {saved}")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    try:
        configure_logging()
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
