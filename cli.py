#!/usr/bin/env python3
"""
Command-line interface for media tag and URL generation.
"""

import argparse
import sys

from dotenv import load_dotenv

from media_tags.config import get_config
from media_tags.rendering.image_tags import ImageTagRenderer
from media_tags.rendering.upload_tags import UploadTagRenderer
from media_tags.rendering.video_tags import VideoTagRenderer
from media_tags.responsive.breakpoints import (
    InvalidInput,
    build_sizes_attribute,
    get_breakpoints,
)

# Load environment variables
load_dotenv()


def _parse_widths(value):
    return [int(part) for part in value.split(",") if part.strip()]


def _srcset_options(args):
    """Srcset options from --widths or the --min-width/--max-width/--max-images range."""
    if args.widths:
        return {"breakpoints": _parse_widths(args.widths)}
    return {
        "min_width": args.min_width,
        "max_width": args.max_width,
        "max_images": args.max_images,
    }


def _wants_srcset(args):
    return any(
        value is not None
        for value in (args.widths, args.min_width, args.max_width, args.max_images)
    )


def cmd_breakpoints(args):
    """Print breakpoints for a width range."""
    try:
        breakpoints = get_breakpoints(_srcset_options(args))
    except InvalidInput as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"📐 Breakpoints: {', '.join(str(width) for width in breakpoints)}")
    if args.sizes:
        print(f"📏 Sizes: {build_sizes_attribute(breakpoints)}")

    return 0


def cmd_image(args):
    """Print an <img> tag."""
    options = {}
    if args.width:
        options["width"] = args.width
    if args.height:
        options["height"] = args.height
    if args.crop:
        options["crop"] = args.crop
    if args.format:
        options["format"] = args.format
    if args.secure:
        options["secure"] = True
    if _wants_srcset(args):
        options["srcset"] = {**_srcset_options(args), "sizes": args.sizes}

    renderer = ImageTagRenderer(get_config())
    print(renderer.image_tag(args.public_id, options))
    return 0


def cmd_video(args):
    """Print a <video> tag."""
    options = {}
    if args.source_types:
        options["source_types"] = args.source_types.split(",")
    if args.secure:
        options["secure"] = True
    if args.controls:
        options["controls"] = True

    renderer = VideoTagRenderer(get_config())
    print(renderer.video_tag(args.source, options))
    return 0


def cmd_upload_tag(args):
    """Print an upload <input>."""
    renderer = UploadTagRenderer(get_config())
    if args.preset:
        print(renderer.unsigned_image_upload_tag(args.field, args.preset))
    else:
        print(renderer.image_upload_tag(args.field))
    return 0


def _add_range_arguments(parser):
    parser.add_argument("--widths", help="Explicit comma separated widths")
    parser.add_argument("--min-width", type=int, help="Smallest srcset width")
    parser.add_argument("--max-width", type=int, help="Largest srcset width")
    parser.add_argument("--max-images", type=int, help="Number of srcset images")
    parser.add_argument("--sizes", action="store_true", help="Also generate the sizes attribute")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Media tag and URL generation",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Breakpoints command
    bp_parser = subparsers.add_parser("breakpoints", help="Compute srcset breakpoints")
    _add_range_arguments(bp_parser)

    # Image command
    image_parser = subparsers.add_parser("image", help="Generate an <img> tag")
    image_parser.add_argument("public_id", help="Public ID of the image")
    image_parser.add_argument("--width", "-W", type=int, help="Width")
    image_parser.add_argument("--height", "-H", type=int, help="Height")
    image_parser.add_argument("--crop", "-c", help="Crop mode")
    image_parser.add_argument("--format", "-f", help="Delivery format")
    image_parser.add_argument("--secure", action="store_true", help="Use https URLs")
    _add_range_arguments(image_parser)

    # Video command
    video_parser = subparsers.add_parser("video", help="Generate a <video> tag")
    video_parser.add_argument("source", help="Public ID of the video")
    video_parser.add_argument("--source-types", help="Comma separated source types")
    video_parser.add_argument("--controls", action="store_true", help="Add the controls attribute")
    video_parser.add_argument("--secure", action="store_true", help="Use https URLs")

    # Upload tag command
    upload_parser = subparsers.add_parser("upload-tag", help="Generate an upload <input>")
    upload_parser.add_argument("field", help="Form field receiving the upload result")
    upload_parser.add_argument("--preset", help="Unsigned upload preset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "breakpoints":
            return cmd_breakpoints(args)
        elif args.command == "image":
            return cmd_image(args)
        elif args.command == "video":
            return cmd_video(args)
        elif args.command == "upload-tag":
            return cmd_upload_tag(args)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130
    except ValueError as e:
        print(f"\n❌ Error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
