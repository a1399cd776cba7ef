"""Synthetic JPEG byte strings shared by the test modules."""

SOI = b"\xFF\xD8"
EOI = b"\xFF\xD9"

# JFIF identifier + version 1.1 + no units + density 1x1 + no thumbnail
JFIF_BODY = b"JFIF\x00" b"\x01\x01" b"\x00" b"\x00\x01\x00\x01" b"\x00\x00"
EXIF_BODY = b"Exif\x00\x00" + b"II*\x00\x08\x00\x00\x00"


def segment(code: int, body: bytes) -> bytes:
    """Marker + big-endian length (counting itself) + body."""
    length = len(body) + 2
    return bytes([0xFF, code, length >> 8, length & 0xFF]) + body


def sof_body(height: int, width: int, precision: int = 8, components: int = 3) -> bytes:
    body = bytes([precision, height >> 8, height & 0xFF, width >> 8, width & 0xFF, components])
    # component id, sampling, quantization table for each component
    for component_id in range(1, components + 1):
        body += bytes([component_id, 0x11, 0x00 if component_id == 1 else 0x01])
    return body


def minimal_jpeg() -> bytes:
    """SOI, APP0 (JFIF), SOF0 of 32x16 8-bit 3 components, EOI."""
    return (
        SOI
        + b"\xFF\xE0\x00\x10" + JFIF_BODY
        + b"\xFF\xC0\x00\x0B" b"\x08\x00\x10\x00\x20\x03" b"\x01\x22\x00"
        + EOI
    )


def jpeg(*segments: bytes, end: bool = True) -> bytes:
    return SOI + b"".join(segments) + (EOI if end else b"")
