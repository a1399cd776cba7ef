from __future__ import annotations
from typing import List, Optional, Tuple

from .errors import NoFrameHeader
from .primitives import FrameHeader, Report, ScanConfig, ScanState

CONTAINER_IDENTIFIERS = {
    0xE0: "JFIF",
    0xE1: "EXIF",
}
UNKNOWN_IDENTIFIER = "UNKNOWN"


def select_frame(frames: List[Tuple[int, FrameHeader]], policy: str = "last") -> Tuple[int, FrameHeader]:
    """Pick one (marker code, header) pair out of every frame header seen.

    Pairs are ordered by marker code; the sort is stable so segments sharing
    a code keep their stream order.
    """
    ordered = sorted(frames, key=lambda pair: pair[0])
    if policy == "first":
        return ordered[0]
    if policy == "largest":
        # max() keeps the first maximum, walk backwards so "last" breaks ties
        return max(reversed(ordered), key=lambda pair: pair[1].width * pair[1].height)
    return ordered[-1]


def aggregate(state: ScanState, config: Optional[ScanConfig] = None) -> Report:
    if config is None:
        config = ScanConfig()

    if not state.frame_headers:
        raise NoFrameHeader("No Start of Frame segment found")

    kind, header = select_frame(state.frame_headers, config.frame_policy)
    identifier = CONTAINER_IDENTIFIERS.get(state.container_kind, UNKNOWN_IDENTIFIER)

    return Report(
        identifier=identifier,
        selected_frame=header,
        frame_kind=kind,
        frame_count=len(state.frame_headers),
        complete=state.seen_end_of_image,
    )


def format_report(name: str, report: Report, verbose: bool = False) -> str:
    frame = report.selected_frame
    line = f"File ({name}) {report.identifier} {frame.width}x{frame.height}"
    if verbose:
        line += (
            f" {frame.precision}-bit {frame.component_count} components"
            f" SOF{report.frame_kind - 0xC0} ({report.frame_count} frame"
            f"{'s' if report.frame_count != 1 else ''})"
        )
        if not report.complete:
            line += " [no EOI]"
    return line
