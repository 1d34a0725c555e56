#!/usr/bin/env python3
"""
Upload an image to the image host, signed with your posting key.

Usage:
  POSTING_KEY=5K... signed-upload photo.jpg --user alice
  signed-upload photo.jpg --endpoint https://images.example.com --log-level DEBUG

Notes:
- The posting key is only read from the POSTING_KEY environment variable
  (or .env), never from the command line.
- Exit code 0 and the hosted URL on stdout on success; 1 when the upload
  fails; 2 when no endpoint is configured.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from signed_upload.application.use_cases.image_upload import UploadImageUseCase
from signed_upload.core.config import settings
from signed_upload.core.exceptions import ConfigurationError
from signed_upload.core.pyd_schemas import ProgressEvent
from signed_upload.infrastructure.adapters import (
    LocalImageFile,
    StaticIdentityProvider,
)
from signed_upload.infrastructure.adapters.bundles.upload import (
    get_upload_adapter_bundle,
)

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format=settings.log_format,
        datefmt=settings.log_date_format,
    )
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signed-upload",
        description="Upload an image signed with your posting key.",
    )
    parser.add_argument("image", help="Path to the image file")
    parser.add_argument(
        "--user", default=None, help="Account name (default: POSTING_USER)"
    )
    parser.add_argument(
        "--endpoint",
        default=None,
        help="Upload endpoint base URL (default: IMAGE_UPLOAD_ENDPOINT)",
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="Transfer timeout in seconds"
    )
    parser.add_argument("--log-level", default=None, help="Logging level")
    return parser


def print_progress(event: ProgressEvent) -> None:
    if event.message is not None:
        print(event.message, file=sys.stderr)
    elif event.error is not None:
        print(f"Error: {event.error}", file=sys.stderr)


async def run(args: argparse.Namespace) -> int:
    identity = None
    if args.user:
        identity = StaticIdentityProvider(args.user, settings.posting_key or None)
    adapters = get_upload_adapter_bundle(identity=identity, timeout=args.timeout)

    try:
        use_case = UploadImageUseCase(adapters, endpoint=args.endpoint)
    except ConfigurationError as e:
        print(f"Error: {e} (set IMAGE_UPLOAD_ENDPOINT or --endpoint)", file=sys.stderr)
        return 2

    result = await use_case.execute(LocalImageFile(args.image), print_progress)
    if not result.success:
        return 1
    print(result.url)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
