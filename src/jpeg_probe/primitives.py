from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class MarkerType(Enum):
    INDICATOR = "indicator"  # 0xFF fill byte
    START_OF_IMAGE = "soi"
    END_OF_IMAGE = "eoi"
    APPLICATION = "app"
    START_OF_FRAME = "sof"
    OTHER = "other"


@dataclass(frozen=True)
class Marker:
    type: MarkerType
    # the byte following 0xFF, e.g. 0xE1 for APP1 or 0xC2 for SOF2
    code: int


@dataclass(frozen=True)
class Segment:
    marker: Marker
    # includes the 2 bytes of the length field itself
    length: int
    body: bytes


@dataclass(frozen=True)
class FrameHeader:
    precision: int = 0
    height: int = 0
    width: int = 0
    component_count: int = 0


@dataclass
class ScanState:
    seen_start_of_image: bool = False
    seen_end_of_image: bool = False
    # first 4 body bytes of the APP segment that identified the container
    container_identifier: Optional[bytes] = None
    container_kind: Optional[int] = None
    # (marker code, header) in the order the segments appear
    frame_headers: List[Tuple[int, FrameHeader]] = field(default_factory=list)


@dataclass(frozen=True)
class Report:
    identifier: str
    selected_frame: FrameHeader
    frame_kind: int = 0xC0
    frame_count: int = 1
    complete: bool = True


FRAME_POLICIES = ("last", "first", "largest")


@dataclass(frozen=True)
class ScanConfig:
    # which Start-Of-Frame wins when a file declares several
    frame_policy: str = "last"
    # skip the body of every length-bearing marker instead of stepping over its 2 bytes
    skip_unknown_segments: bool = False

    def __post_init__(self):
        if self.frame_policy not in FRAME_POLICIES:
            raise ValueError(f"Unknown frame policy: {self.frame_policy!r}")
