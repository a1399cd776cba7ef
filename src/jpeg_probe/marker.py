# --------------------------------------------------------
# |segment name|marker value|has data|description        |
# --------------------------------------------------------
# |SOI         |0xFFD8      |No      | start of image    |
# |EOI         |0xFFD9      |No      | end of image      |
# |RSTn        |0xFFD0-D7   |No      | restart interval  |
# |SOF0-2      |0xFFC0-C2   |Yes     | frame header      |
# |APP0        |0xFFE0      |Yes     | JFIF extra info   |
# |APP1        |0xFFE1      |Yes     | EXIF extra info   |
# |DQT / DHT   |0xFFDB/C4   |Yes     | tables (skipped)  |
# |SOS         |0xFFDA      |Yes     | start of scan     |
# --------------------------------------------------------
# Segments without data are only the 2 marker bytes.
# Segments with data carry a 2 byte big-endian length right after the marker;
# the length counts itself, so the body is length - 2 bytes.
from __future__ import annotations
from typing import Optional, Union

from .cursor import ByteCursor, MARKER_PREFIX
from .errors import (
    MalformedFrameHeader,
    NotAJpeg,
    OutOfBounds,
    TruncatedSegment,
)
from .primitives import FrameHeader, Marker, MarkerType, Report, ScanConfig, ScanState, Segment
from .report import CONTAINER_IDENTIFIERS, aggregate

SOI_MARKER = 0xD8
EOI_MARKER = 0xD9
STUFFED_BYTE = 0x00
TEM_MARKER = 0x01

# baseline, extended sequential and progressive DCT
PARSED_FRAME_CODES = (0xC0, 0xC1, 0xC2)
# C4, C8 and CC live in the SOF range but are DHT, JPG and DAC
NON_FRAME_CODES = (0xC4, 0xC8, 0xCC)

FRAME_HEADER_SIZE = 6


def marker_info(code: int) -> str:

    marker_dict = {
        0xD8: "Start of Image (SOI)",
        0xD9: "End of Image (EOI)",
        0xC0: "Start of Frame 0 (SOF0) - Baseline DCT",
        0xC1: "Start of Frame 1 (SOF1) - Extended Sequential DCT",
        0xC2: "Start of Frame 2 (SOF2) - Progressive DCT",
        0xC3: "Start of Frame 3 (SOF3) - Lossless",
        0xC4: "Define Huffman Table (DHT)",
        0xCC: "Define Arithmetic Coding (DAC)",
        0xDA: "Start of Scan (SOS)",
        0xDB: "Define Quantization Table (DQT)",
        0xDD: "Define Restart Interval (DRI)",
        0xE0: "Application Segment 0 (APP0) - JFIF Info",
        0xE1: "Application Segment 1 (APP1) - EXIF Info",
        0xFE: "Comment (COM)",
    }

    if code in marker_dict:
        return marker_dict[code]
    if 0xE0 <= code <= 0xEF:
        return f"Application Segment {code - 0xE0} (APP{code - 0xE0})"
    if 0xC0 <= code <= 0xCF and code not in NON_FRAME_CODES:
        return f"Start of Frame {code - 0xC0} (SOF{code - 0xC0})"
    if 0xD0 <= code <= 0xD7:
        return f"Restart {code - 0xD0} (RST{code - 0xD0})"
    return "Unknown Marker"


def classify(code: int) -> Marker:
    """Classify the byte that follows a 0xFF prefix."""
    if code == MARKER_PREFIX:
        kind = MarkerType.INDICATOR
    elif code == SOI_MARKER:
        kind = MarkerType.START_OF_IMAGE
    elif code == EOI_MARKER:
        kind = MarkerType.END_OF_IMAGE
    elif 0xE0 <= code <= 0xEF:
        kind = MarkerType.APPLICATION
    elif 0xC0 <= code <= 0xCF and code not in NON_FRAME_CODES:
        kind = MarkerType.START_OF_FRAME
    else:
        # includes 0x00, the stuffed byte of entropy-coded data
        kind = MarkerType.OTHER
    return Marker(kind, code)


def has_length(code: int) -> bool:
    """Whether a marker is followed by a length field and a body."""
    if code in (STUFFED_BYTE, TEM_MARKER, MARKER_PREFIX, SOI_MARKER, EOI_MARKER):
        return False
    return not 0xD0 <= code <= 0xD7


def decode_segment(cursor: ByteCursor, marker_start: int, marker: Optional[Marker] = None) -> Segment:
    """Materialize the segment whose 0xFF prefix sits at ``marker_start``.

    The caller advances by ``2 + segment.length`` afterwards.
    """
    if marker is None:
        try:
            marker = classify(cursor.peek(marker_start + 1))
        except OutOfBounds as e:
            raise TruncatedSegment(f"Marker at offset {marker_start} is cut off") from e

    try:
        length = cursor.read_u16(marker_start + 2)
    except OutOfBounds as e:
        raise TruncatedSegment(
            f"Length field of {marker_info(marker.code)} at offset {marker_start} is cut off"
        ) from e

    if length < 2:
        raise TruncatedSegment(
            f"{marker_info(marker.code)} at offset {marker_start} declares length {length}"
        )

    try:
        body = cursor.slice(marker_start + 4, length - 2)
    except OutOfBounds as e:
        raise TruncatedSegment(
            f"{marker_info(marker.code)} at offset {marker_start} declares {length} bytes "
            f"but only {len(cursor) - marker_start - 2} remain"
        ) from e

    return Segment(marker, length, body)


def parse_frame_header(body: bytes) -> FrameHeader:
    """Parse a Start-Of-Frame body into a FrameHeader."""
    if len(body) < FRAME_HEADER_SIZE:
        raise MalformedFrameHeader(
            f"Frame header needs {FRAME_HEADER_SIZE} bytes, got {len(body)}"
        )
    # Precision: 1 byte, Height: 2 bytes, Width: 2 bytes, Components: 1 byte
    # trailing component specifications are not needed here
    return FrameHeader(
        precision=body[0],
        height=(body[1] << 8) | body[2],
        width=(body[3] << 8) | body[4],
        component_count=body[5],
    )


def _dispatch(cursor: ByteCursor, idx: int, marker: Marker, state: ScanState,
              config: ScanConfig, verbose: bool) -> int:
    """Handle the marker at ``idx`` and return how many bytes to advance."""
    if marker.type is MarkerType.INDICATOR:
        # fill byte, the second 0xFF may start the real marker
        return 1

    if marker.type is MarkerType.START_OF_IMAGE:
        state.seen_start_of_image = True
        if verbose:
            print("Found SOI (Start of Image)")
        return 2

    if marker.type is MarkerType.END_OF_IMAGE:
        state.seen_end_of_image = True
        if verbose:
            print("Found EOI (End of Image)")
        return 2

    if marker.type is MarkerType.APPLICATION:
        segment = decode_segment(cursor, idx, marker)
        if verbose:
            print(f"Found {marker_info(marker.code)} with length {segment.length} bytes")
        if state.container_identifier is None and marker.code in CONTAINER_IDENTIFIERS:
            state.container_identifier = segment.body[:4]
            state.container_kind = marker.code
        return 2 + segment.length

    if marker.type is MarkerType.START_OF_FRAME and marker.code in PARSED_FRAME_CODES:
        segment = decode_segment(cursor, idx, marker)
        if verbose:
            print(f"Found {marker_info(marker.code)} with length {segment.length} bytes")
        state.frame_headers.append((marker.code, parse_frame_header(segment.body)))
        return 2 + segment.length

    if config.skip_unknown_segments and has_length(marker.code):
        segment = decode_segment(cursor, idx, marker)
        if verbose:
            print(f"Skipping {marker_info(marker.code)} with length {segment.length} bytes")
        return 2 + segment.length

    return 2


def scan(data: Union[bytes, bytearray, memoryview], config: Optional[ScanConfig] = None,
         verbose: bool = False) -> Report:
    """
    Walk the marker stream of a whole JPEG file and report its geometry.

    Args:
        data: the complete file contents
        config: frame selection and segment skipping options (defaults if None)
        verbose: print every marker handled, in stream order

    Returns:
        Report of the container identifier and the selected frame header

    Raises:
        NotAJpeg, TruncatedSegment, MalformedFrameHeader, NoFrameHeader
    """
    if config is None:
        config = ScanConfig()

    cursor = ByteCursor(data)
    if len(cursor) < 2 or cursor.peek(0) != MARKER_PREFIX or cursor.peek(1) != SOI_MARKER:
        raise NotAJpeg("Expected JPEG file input, missing SOI marker")

    state = ScanState()
    idx = 0
    while True:
        idx = cursor.next_prefix(idx)
        if idx is None:
            break  # End of data

        try:
            code = cursor.peek(idx + 1)
        except OutOfBounds as e:
            raise TruncatedSegment(f"Marker at offset {idx} is cut off by the end of the data") from e

        idx += _dispatch(cursor, idx, classify(code), state, config, verbose)

    if not state.seen_start_of_image:
        raise NotAJpeg("Expected JPEG file input, missing SOI marker")

    return aggregate(state, config)
