from __future__ import annotations
import cv2, time, logging
from typing import Iterator, Dict, Any

logger = logging.getLogger(__name__)

def open_source(source: int|str):
    # "0", "1", ... select a camera; anything else is a video path/URL
    if isinstance(source, str) and source.isdigit():
        source = int(source)
    cap = cv2.VideoCapture(source)
    if not cap.isOpened():
        raise RuntimeError(f"Cannot open source {source!r}")
    return cap

def frames(source: int|str=0, width: int=320, height: int=240) -> Iterator[Dict[str,Any]]:
    """Yield frames resized to the working size until the source runs dry."""
    cap = open_source(source)
    try:
        i = 0
        while True:
            ok, frame = cap.read()
            if not ok or frame is None or frame.size == 0:
                logger.info("source %r exhausted after %d frames", source, i)
                break
            frame = cv2.resize(frame, (width, height))
            yield {"image": frame, "meta": {"ts": time.time(), "index": i}}
            i += 1
    finally:
        cap.release()
