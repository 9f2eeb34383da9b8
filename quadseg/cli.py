"""Command line entry point — segment one image and write split/merge outputs.

    quadseg lena.png -o out/ --min-area 25 --threshold 5.8 --show
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from quadseg.config import settings
from quadseg.engine.config import SegmentationConfig
from quadseg.engine.pipeline import create_pipeline
from quadseg.utils.imaging import load_grayscale, resize_to_power_of_two, save_image

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quadseg",
        description="Quadtree split-and-merge segmentation of a grayscale image",
    )
    parser.add_argument("input", help="Image file (any format Pillow reads)")
    parser.add_argument("-o", "--output", default=".", help="Output folder (default: current)")
    parser.add_argument("--min-area", type=int, default=None,
                        help=f"Never split regions this small (default: {settings.quadseg_min_area})")
    parser.add_argument("--threshold", type=float, default=None,
                        help=f"Deviation threshold (default: {settings.quadseg_deviation_threshold})")
    parser.add_argument("--no-resize", action="store_true",
                        help="Keep original size instead of resizing to a power-of-two square")
    parser.add_argument("--no-merge", action="store_true", help="Skip the sibling-merge pass")
    parser.add_argument("--until-stable", action="store_true",
                        help="Repeat the merge pass until nothing changes")
    parser.add_argument("--ext", choices=["jpg", "png"], default="jpg", help="Output image format")
    parser.add_argument("--show", action="store_true", help="Display original/split/merge in a window")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(
        logging, settings.quadseg_log_level.upper(), logging.INFO
    )
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        config = SegmentationConfig.from_settings(
            min_area=args.min_area,
            deviation_threshold=args.threshold,
            coarsen=not args.no_merge,
            until_stable=args.until_stable,
        )
        image = load_grayscale(args.input)
        if not args.no_resize:
            image = resize_to_power_of_two(image)
        result = create_pipeline(config).run(image)

        out_dir = Path(args.output)
        written = [save_image(result.split_image, out_dir / f"split.{args.ext}")]
        if result.merged_image is not None:
            written.append(save_image(result.merged_image, out_dir / f"merge.{args.ext}"))
    except (OSError, ValueError) as e:
        print(f"quadseg: {e}", file=sys.stderr)
        return 1

    for path in written:
        logger.info("Wrote %s", path)

    merged = f", {result.region_count} regions after merge" if result.merged_image is not None else ""
    print(
        f"{image.shape[1]}x{image.shape[0]}: {result.leaf_count} leaves "
        f"(depth {result.depth}){merged}, PSNR {result.psnr_split:.2f} dB"
    )

    if args.show:
        import matplotlib.pyplot as plt

        from quadseg.utils.visualize import plot_segmentation

        plot_segmentation(image, result.split_image, result.merged_image, tree=result.tree)
        plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
