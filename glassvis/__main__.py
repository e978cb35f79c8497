"""Glassvis entry point.

Usage:
    python -m glassvis                                Launch GUI (default)
    python -m glassvis [--config FILE] gui            Launch GUI
    python -m glassvis diff REF CAPT [options]        Headless diff
    python -m glassvis capture [--device N]           Grab a camera frame
"""
import argparse
import sys

from .analysis import export_results_as_json, log_result
from .camera import capture_frame
from .config import MAX_SIGNIFICANCE, MIN_SIGNIFICANCE
from .errors import GlassvisError
from .json_config import load_glassvis_config
from .pipeline import run_diff_files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glassvis",
        description="Visual quality control by reference/captured image diffing"
    )
    parser.add_argument('--config', help='JSON settings file')
    subparsers = parser.add_subparsers(dest='command')

    subparsers.add_parser('gui', help='Launch the GUI (default)')

    diff = subparsers.add_parser('diff', help='Diff a captured image against a reference')
    diff.add_argument('reference', help='Reference image path')
    diff.add_argument('captured', help='Captured image path')
    diff.add_argument('-s', '--significance', type=int,
                      help=f'Defect significance {MIN_SIGNIFICANCE}..{MAX_SIGNIFICANCE}')
    diff.add_argument('--no-box', action='store_true', help='Do not draw the bounding box')
    diff.add_argument('--clamp', action='store_true', help='Clamp the bounding box to the image')
    diff.add_argument('--output-dir', dest='data_dir',
                      help='Data directory; the diff is written to <dir>/output/diff<name>')
    diff.add_argument('--json', metavar='FILE', nargs='?', const='',
                      help='Export the result as JSON (auto-named if FILE is omitted)')
    diff.add_argument('--log', metavar='FILE', help='Append the result to a CSV log')
    diff.add_argument('-q', '--quiet', action='store_true', help='Only print the defect rate')

    capture = subparsers.add_parser('capture', help='Capture a frame from a camera')
    capture.add_argument('--device', type=int, help='Camera device index')
    capture.add_argument('--output-dir', default='.', help='Directory for the frame')

    return parser


def run_diff_command(args, config) -> int:
    if args.clamp:
        config.diff.clamp_bounding_box = True
    if args.data_dir:
        config.display.data_dir = args.data_dir

    result = run_diff_files(
        args.reference, args.captured,
        significance=args.significance,
        draw_bounding_box=False if args.no_box else None,
        config=config,
        verbose=not args.quiet
    )
    print(result['message'])

    if args.json is not None:
        json_path = export_results_as_json(result, args.json or None)
        print(f"Results saved to: {json_path}")
    if args.log:
        log_result(args.log, result)
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_glassvis_config(args.config)

        if args.command == 'diff':
            return run_diff_command(args, config)

        if args.command == 'capture':
            if args.device is not None:
                config.camera.device = args.device
            print(capture_frame(config.camera, args.output_dir))
            return 0
    except GlassvisError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    from .gui import main as run_gui
    print("Launching Glassvis GUI...")
    run_gui(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
