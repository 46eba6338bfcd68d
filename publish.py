#!/usr/bin/env python3
"""
Biography Publisher command line.
Renders a biography JSON file to PDF/DOCX, or prints its generation prompt.
"""
import argparse
import json
import logging
import os
import sys

from biography_model import VOICES, normalize_biography
from biography_publisher import RENDERERS, export_biography
from config import LOG_LEVEL
from exceptions import BiographyError
from image_handler import ImageHandler
from prompts import build_prompt

logger = logging.getLogger(__name__)


def load_biography(path):
    with open(path, 'r', encoding="utf-8") as f:
        return normalize_biography(json.load(f))


def run_export(args):
    biography = load_biography(args.input)
    story = None
    if args.story:
        with open(args.story, 'r', encoding="utf-8") as f:
            story = f.read()

    handler = ImageHandler(base_path=os.path.dirname(os.path.abspath(args.input)))
    artifact = export_biography(biography, args.format, story=story, title=args.title, image_handler=handler)

    os.makedirs(args.output, exist_ok=True)
    target = os.path.join(args.output, artifact.filename)
    with open(target, 'wb') as f:
        f.write(artifact.content)
    print(target)


def run_prompt(args):
    print(build_prompt(load_biography(args.input), args.voice))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render biographies and generation prompts")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Render a biography JSON file to a document")
    export.add_argument("input", help="Path to the biography JSON file")
    export.add_argument("--format", choices=sorted(RENDERERS), default="pdf",
                        help="Output format (default: pdf)")
    export.add_argument("--output", default=".", help="Directory to write the document to")
    export.add_argument("--title", help="Override the document title")
    export.add_argument("--story", help="Markup file to render instead of the stored draft")
    export.set_defaults(handler=run_export)

    prompt = subparsers.add_parser("prompt", help="Print the generation prompt for a biography")
    prompt.add_argument("input", help="Path to the biography JSON file")
    prompt.add_argument("--voice", choices=list(VOICES), default="emotional",
                        help="Narrative voice (default: emotional)")
    prompt.set_defaults(handler=run_prompt)

    args = parser.parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        args.handler(args)
    except BiographyError as e:
        logger.error("%s: %s", e.error_code, e.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
