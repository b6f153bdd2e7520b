import argparse
import logging
from typing import Optional

from psd_raster import PSDImage
from psd_raster.exceptions import PSDDecodeError
from psd_raster.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="psd-raster command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser(
        "export", help="Decode the merged image and save it, e.g. as PNG"
    )
    export_parser.add_argument("input_file", help="Input PSD file")
    export_parser.add_argument("output_file", help="Output image file")

    show_parser = subparsers.add_parser("show", help="Show the file metadata")
    show_parser.add_argument("input_file", help="Input PSD file")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("psd_raster")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    try:
        psd = PSDImage.open(args.input_file)
        if args.command == "export":
            psd.topil().save(args.output_file)
        elif args.command == "show":
            print(psd)
            print("compression: %s" % psd.compression.name)
            print("dpi: %d x %d" % psd.dpi)
            print("pixel format: %s" % psd.pixel_format.name)
            if psd.transparency_index != -1:
                print("transparency index: %d" % psd.transparency_index)
    except PSDDecodeError as e:
        logger.error("Failed to decode %s: %s" % (args.input_file, e))
        return 1

    return None


if __name__ == "__main__":
    raise SystemExit(main())
