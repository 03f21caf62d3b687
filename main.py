#!/usr/bin/env python3
"""
Main entry point for scanner registration.

Reads scanner beacon reports, places every scanner into one shared frame and
reports the number of unique beacons and the two scanners farthest apart.
"""

import argparse
import sys

from beaconreg import (DEFAULT_THRESHOLD, ScannerParseError, ScannerRegistration,
                       UnsolvableInputError, generate_rotations)
from beaconreg.visualization import (plot_registration_progress, plot_scanner_layout,
                                     show_registration)

DEFAULT_INPUT = 'data/example_scanners.txt'


def run_registration(input_path, threshold=DEFAULT_THRESHOLD, anchor_id=None,
                     max_sweeps=None, n_jobs=1, plot=False, visualize=False, verbose=True):
    """Register all scanners in a report file and print the results."""
    print("\n" + "="*80)
    print("Scanner Registration")
    print("="*80)

    print(f"\nLoading scanner reports from {input_path}...")
    registration = ScannerRegistration(input_path)
    print(f"  Scanners: {len(registration.scanners)}")
    print(f"  Beacon reports: {sum(len(s) for s in registration.scanners.values())}")

    result = registration.register(
        threshold=threshold,
        anchor_id=anchor_id,
        max_sweeps=max_sweeps,
        n_jobs=n_jobs,
        verbose=verbose
    )

    print(f"\n{'='*80}")
    print("RESULTS")
    print("="*80)
    print(f"Unique beacons: {result.beacon_count}")

    farthest = result.max_scanner_distance()
    if farthest is None:
        print("Max scanner distance: n/a (single scanner)")
    else:
        distance, (id_a, pos_a), (id_b, pos_b) = farthest
        print(f"Max scanner distance: {distance} between scanner {id_a} at {pos_a} "
              f"and scanner {id_b} at {pos_b}")

    print("\nScanner positions:")
    for scanner_id, position in sorted(result.scanner_positions.items()):
        print(f"  {scanner_id:>3}: {position}")

    if plot:
        plot_registration_progress(result)
        plot_scanner_layout(result)

    if visualize:
        show_registration(result)

    return result


def print_rotations():
    """Print the 24 cube rotation matrices."""
    rotations = generate_rotations()
    print(f"\n{len(rotations)} rotations:\n")
    for idx, rotation in enumerate(rotations, 1):
        print(f"[{idx:2d}] {rotation.description}")
        for row in rotation.matrix.tolist():
            print("      " + " ".join(f"{v:2d}" for v in row))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Scanner Registration from Shared Beacons',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Register the bundled example
  python main.py register data/example_scanners.txt

  # Use 4 workers for the rotation search and save plots
  python main.py register data/example_scanners.txt --jobs 4 --plot

  # Show the rotation group
  python main.py rotations
        """
    )

    subparsers = parser.add_subparsers(dest='mode', help='Mode')

    register_parser = subparsers.add_parser('register', help='Register scanners from a report file')
    register_parser.add_argument('input', type=str, nargs='?', default=DEFAULT_INPUT,
                                 help='Path to scanner report file')
    register_parser.add_argument('--threshold', type=int, default=DEFAULT_THRESHOLD,
                                 help='Minimum shared beacons to accept an alignment')
    register_parser.add_argument('--anchor', type=int, default=None,
                                 help='Scanner id that defines the global frame (default: lowest id)')
    register_parser.add_argument('--max-sweeps', type=int, default=None,
                                 help='Give up after this many sweeps')
    register_parser.add_argument('--jobs', type=int, default=1,
                                 help='Parallel workers for the rotation search')
    register_parser.add_argument('--plot', action='store_true',
                                 help='Save and show progress and layout plots')
    register_parser.add_argument('--visualize', action='store_true',
                                 help='Show the registered scene in Open3D')
    register_parser.add_argument('--quiet', action='store_true',
                                 help='Only print the results')

    subparsers.add_parser('rotations', help='Print the 24 rotation matrices')

    args = parser.parse_args(argv)

    if args.mode == 'rotations':
        print_rotations()
        return 0

    if args.mode is None:
        print(f"No mode specified. Registering {DEFAULT_INPUT}...")
        args = parser.parse_args(['register', DEFAULT_INPUT])

    try:
        run_registration(
            args.input,
            threshold=args.threshold,
            anchor_id=args.anchor,
            max_sweeps=args.max_sweeps,
            n_jobs=args.jobs,
            plot=args.plot,
            visualize=args.visualize,
            verbose=not args.quiet
        )
    except (ScannerParseError, UnsolvableInputError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
