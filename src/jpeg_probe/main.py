import argparse
import sys
from pathlib import Path

from .errors import ParseError
from .marker import scan
from .primitives import FRAME_POLICIES, ScanConfig
from .report import format_report


def probe_file(path: Path, config: ScanConfig, verbose: bool = False, verify: bool = False) -> bool:
    """Scan one file and print its report. Returns False on any failure."""
    try:
        data = path.read_bytes()
    except OSError as e:
        print(f"We did not manage to open {path.name}: {e.strerror or e}", file=sys.stderr)
        return False

    try:
        report = scan(data, config, verbose=verbose)
    except ParseError as e:
        print(f"{path.name}: {type(e).__name__}: {e}", file=sys.stderr)
        return False

    print(format_report(path.name, report, verbose=verbose))

    if verify:
        # imported here so plain scans never load OpenCV
        from .verify import compare

        mismatches = compare(report, path)
        for mismatch in mismatches:
            print(f"  mismatch: {mismatch}")
        if mismatches:
            return False
        print("  OpenCV agrees")

    return True


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="jpeg-probe",
        description="Report dimensions, bit depth and container type of JPEG files",
    )
    parser.add_argument("paths", nargs="+", help="JPEG files to inspect")
    parser.add_argument("--policy", choices=FRAME_POLICIES, default="last",
                        help="Which frame header to report when a file has several")
    parser.add_argument("--skip-segments", action="store_true",
                        help="Skip over the body of every length-bearing segment")
    parser.add_argument("--verify", action="store_true",
                        help="Cross-check the reported dimensions against OpenCV")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show every marker found and the full frame header")

    args = parser.parse_args(argv)

    config = ScanConfig(frame_policy=args.policy, skip_unknown_segments=args.skip_segments)

    ok = True
    for name in args.paths:
        # one bad file never stops the rest of the batch
        ok = probe_file(Path(name), config, verbose=args.verbose, verify=args.verify) and ok

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
