"""Global registration of many scanners into one shared coordinate frame."""

import os
from itertools import combinations

from .matcher import match_beacons
from .scanner import Scanner, load_scanners
from .utils import time_function
from .vector import ZERO

DEFAULT_THRESHOLD = 12


class UnsolvableInputError(RuntimeError):
    """Raised when the remaining scanners cannot be connected to the global frame."""

    def __init__(self, message, unfixed_ids):
        super().__init__(message)
        self.unfixed_ids = list(unfixed_ids)


class RegistrationResult:
    """Outcome of a registration run, expressed in the anchor scanner's frame."""

    def __init__(self, beacons, scanner_positions, anchor_id, threshold, sweeps, seed_count=None):
        self.beacons = frozenset(beacons)
        self.scanner_positions = dict(scanner_positions)
        self.anchor_id = anchor_id
        self.threshold = threshold
        self.sweeps = sweeps
        self.seed_count = self.beacon_count if seed_count is None else seed_count

    @property
    def beacon_count(self):
        """Number of unique beacons in the global frame."""
        return len(self.beacons)

    @property
    def beacon_count_history(self):
        """Global beacon count after seeding, then after every sweep."""
        return [self.seed_count] + [s['beacon_count'] for s in self.sweeps]

    def max_scanner_distance(self):
        """
        Largest Manhattan distance between any two scanner positions.

        Returns:
            Tuple of (distance, (id_a, position_a), (id_b, position_b)), or
            None if fewer than two scanners were registered
        """
        pairs = list(combinations(sorted(self.scanner_positions.items()), 2))
        if not pairs:
            return None
        (id_a, pos_a), (id_b, pos_b) = max(
            pairs, key=lambda pair: pair[0][1].manhattan_distance(pair[1][1])
        )
        return pos_a.manhattan_distance(pos_b), (id_a, pos_a), (id_b, pos_b)

    def __repr__(self):
        return (f"RegistrationResult({len(self.scanner_positions)} scanners, "
                f"{self.beacon_count} beacons)")


class ScannerRegistration:
    """
    Places every scanner into the frame of an anchor scanner.

    Unresolved scanners are kept in a worklist and matched against the growing
    global beacon set, sweep after sweep, until none remain.
    """

    def __init__(self, scanners):
        """
        Initialize registration.

        Args:
            scanners: Mapping of id to Scanner, iterable of Scanner objects,
                      or path to a scanner report file
        """
        if isinstance(scanners, (str, os.PathLike)):
            scanners = load_scanners(scanners)
        if isinstance(scanners, dict):
            scanners = list(scanners.values())

        self.scanners = {}
        for scanner in scanners:
            if not isinstance(scanner, Scanner):
                raise TypeError(f"Expected Scanner, got {type(scanner).__name__}")
            if scanner.scanner_id in self.scanners:
                raise ValueError(f"Duplicate scanner id: {scanner.scanner_id}")
            self.scanners[scanner.scanner_id] = scanner

        if not self.scanners:
            raise ValueError("At least one scanner is required")

    @time_function
    def register(self, threshold=DEFAULT_THRESHOLD, anchor_id=None, max_sweeps=None,
                 n_jobs=1, verbose=True):
        """
        Run the registration loop.

        Args:
            threshold: Minimum number of shared beacons to accept an alignment
            anchor_id: Scanner whose frame becomes the global frame
                       (default: lowest scanner id)
            max_sweeps: Optional ceiling on the number of sweeps
            n_jobs: joblib workers passed to the matcher
            verbose: Print progress

        Returns:
            RegistrationResult

        Raises:
            UnsolvableInputError: If a full sweep fixes no scanner, or more
                                  than ``max_sweeps`` sweeps would be needed
        """
        if anchor_id is None:
            anchor_id = min(self.scanners)
        elif anchor_id not in self.scanners:
            raise ValueError(f"Unknown anchor scanner: {anchor_id}")

        global_beacons = set(self.scanners[anchor_id].beacons)
        positions = {anchor_id: ZERO}
        pending = sorted(i for i in self.scanners if i != anchor_id)
        sweeps = []

        if verbose:
            print(f"\n{'='*70}")
            print("SCANNER REGISTRATION")
            print(f"{'='*70}")
            print(f"Scanners:   {len(self.scanners)}")
            print(f"Anchor:     scanner {anchor_id} ({len(global_beacons)} beacons)")
            print(f"Threshold:  {threshold} shared beacons")

        while pending:
            if max_sweeps is not None and len(sweeps) >= max_sweeps:
                raise UnsolvableInputError(
                    f"Exceeded {max_sweeps} sweeps with {len(pending)} scanners unfixed: {pending}",
                    pending
                )

            sweep = len(sweeps) + 1
            if verbose:
                print(f"\nSweep {sweep}: {len(pending)} scanners remaining...")

            beacons_before = len(global_beacons)
            still_pending = []
            fixed_now = []
            for scanner_id in pending:
                match = match_beacons(global_beacons, self.scanners[scanner_id].beacons,
                                      threshold=threshold, n_jobs=n_jobs)
                if match is None:
                    still_pending.append(scanner_id)
                    continue

                offset, new_beacons = match
                global_beacons.update(new_beacons)
                positions[scanner_id] = offset
                fixed_now.append(scanner_id)
                if verbose:
                    print(f"  ✓ Scanner {scanner_id} at {offset} "
                          f"(+{len(new_beacons)} beacons, total {len(global_beacons)})")

            sweeps.append({
                'sweep': sweep,
                'fixed': fixed_now,
                'added': len(global_beacons) - beacons_before,
                'beacon_count': len(global_beacons),
            })

            if not fixed_now:
                raise UnsolvableInputError(
                    f"No scanner could be matched in sweep {sweep}; "
                    f"unfixed scanners {still_pending} do not overlap the global frame",
                    still_pending
                )
            pending = still_pending

        result = RegistrationResult(global_beacons, positions, anchor_id, threshold, sweeps,
                                    seed_count=len(self.scanners[anchor_id]))

        if verbose:
            print(f"\n{'='*70}")
            print("REGISTRATION SUMMARY")
            print(f"{'='*70}")
            print(f"Sweeps:          {len(sweeps)}")
            print(f"Unique beacons:  {result.beacon_count}")
            print(f"{'='*70}\n")

        return result
