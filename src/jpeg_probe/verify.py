from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Tuple, Union

import cv2
import numpy as np

from .primitives import Report


def opencv_dimensions(path: Union[str, Path]) -> Optional[Tuple[int, int, int]]:
    """Decode the file with OpenCV and return (width, height, channels)."""
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        return None
    img = np.asarray(img)
    height, width = img.shape[:2]
    channels = img.shape[2] if img.ndim == 3 else 1
    return int(width), int(height), int(channels)


def compare(report: Report, path: Union[str, Path]) -> List[str]:
    """List every disagreement between a report and OpenCV's decode of the same file."""
    dims = opencv_dimensions(path)
    if dims is None:
        return ["OpenCV could not decode the file"]

    width, height, channels = dims
    frame = report.selected_frame
    mismatches = []
    if frame.width != width:
        mismatches.append(f"width {frame.width} != OpenCV {width}")
    if frame.height != height:
        mismatches.append(f"height {frame.height} != OpenCV {height}")
    # OpenCV hands back YCbCr and CMYK alike as 3 channel BGR, only grayscale is comparable
    if (frame.component_count == 1) != (channels == 1):
        mismatches.append(f"{frame.component_count} components != OpenCV {channels} channels")
    return mismatches
