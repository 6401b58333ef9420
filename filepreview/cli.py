from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from filepreview.config import get_settings
from filepreview.preview.exceptions import PreviewError
from filepreview.preview.types import PreviewOptions
from filepreview.services.preview_generator import generate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filepreview",
        description="Generate a GIF/JPG/PNG preview from an image, video, PDF or document",
    )
    parser.add_argument("source", help="Local path or http(s) URL of the file to preview")
    parser.add_argument("output", help="Output image path (.gif, .jpg or .png)")
    parser.add_argument("--width", type=int, help="Preview width in pixels")
    parser.add_argument("--height", type=int, help="Preview height in pixels")
    parser.add_argument(
        "--force-aspect",
        action="store_true",
        help="Keep the source aspect ratio when scaling video frames",
    )
    parser.add_argument("--quality", type=int, help="Output quality (1-100)")
    parser.add_argument("--background", help="Flatten transparency onto this color")
    parser.add_argument("--colorspace", help="ImageMagick colorspace, e.g. rgb or sRGB")
    parser.add_argument("--density", type=int, help="Rasterization density in DPI")
    parser.add_argument("--autorotate", action="store_true", help="Apply EXIF orientation")
    parser.add_argument("--trim", action="store_true", help="Crop the preview to its content")
    parser.add_argument(
        "--pagerange",
        help="Document pages to render as 'start-end'; one image is written per page",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> PreviewOptions:
    values: Dict[str, Any] = {
        "width": args.width,
        "height": args.height,
        "force_aspect": args.force_aspect,
        "quality": args.quality,
        "background": args.background,
        "colorspace": args.colorspace,
        "density": args.density,
        "autorotate": args.autorotate,
        "trim": args.trim,
        "pagerange": args.pagerange,
    }
    return PreviewOptions.from_mapping(values)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    log_level = getattr(logging, (args.log_level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        result = asyncio.run(generate(args.source, args.output, _options_from_args(args), settings=settings))
    except PreviewError as exc:
        parser.error(str(exc))
    else:
        outputs: List[str] = [str(path) for path in result.outputs]
        print(json.dumps({"file_type": result.file_type.value, "outputs": outputs}, indent=2))


if __name__ == "__main__":
    main()
