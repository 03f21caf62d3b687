"""
BeaconReg - Scanner registration from shared beacon observations

Places many 3D scanners into one coordinate frame, featuring:
- Exact integer cube rotation group (24 orientations)
- Hypothesize-and-verify beacon matching with optional parallel search
- Worklist registration loop with unsolvable-input detection
- Progress and layout plots
"""

from .matcher import match_beacons
from .registration import (DEFAULT_THRESHOLD, RegistrationResult, ScannerRegistration,
                           UnsolvableInputError)
from .scanner import Scanner, ScannerParseError, load_scanners, parse_scanners
from .transforms import Rotation, generate_rotations
from .vector import Vector
from .visualization import plot_registration_progress, plot_scanner_layout

__version__ = "1.0.0"
__all__ = ["DEFAULT_THRESHOLD", "RegistrationResult", "Rotation", "Scanner",
           "ScannerParseError", "ScannerRegistration", "UnsolvableInputError", "Vector",
           "generate_rotations", "load_scanners", "match_beacons", "parse_scanners",
           "plot_registration_progress", "plot_scanner_layout"]
