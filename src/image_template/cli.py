import argparse
import logging
import sys
from pprint import pprint
from typing import Optional

from pydantic import ValidationError

from image_template.api.renderer import render_file
from image_template.api.template import parse_template
from image_template.config import Settings
from image_template.errors import ImageTemplateError
from image_template.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="image-template command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render a template to an image")
    render_parser.add_argument("template_file", help="Template JSON file")
    render_parser.add_argument("inputs_file", help="Inputs JSON file")
    render_parser.add_argument("output_file", help="Output image file")

    show_parser = subparsers.add_parser("show", help="Show the parsed template")
    show_parser.add_argument("template_file", help="Template JSON file")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("image_template")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    try:
        if args.command == "render":
            settings = Settings()
            result = render_file(
                args.template_file, args.inputs_file, args.output_file, settings
            )
            for warning in result.warnings:
                logger.warning(warning)
            logger.info("Image generated and saved to %s" % args.output_file)

        elif args.command == "show":
            pprint(parse_template(args.template_file))
    except ImageTemplateError as e:
        logger.error(str(e))
        return 1
    except ValidationError as e:
        logger.error("Invalid configuration: %s" % e)
        return 1

    return None


if __name__ == "__main__":
    sys.exit(main())
