from typing import Iterable, List, Sequence

import numpy as np

from ..schema import DetectedRegion


def quad_to_region(quad: Sequence[Sequence[float]]) -> DetectedRegion:
    """Axis-aligned rectangle around a 4-point detection polygon."""
    xs = [int(round(p[0])) for p in quad]
    ys = [int(round(p[1])) for p in quad]
    x0, y0 = min(xs), min(ys)
    return DetectedRegion(left=x0, top=y0, width=max(xs) - x0, height=max(ys) - y0)


def inflate(region: DetectedRegion, border: int, img_w: int, img_h: int) -> DetectedRegion:
    """Grow a rectangle by ``border`` px per side, clipped to the image."""
    x0 = max(0, region.left - border)
    y0 = max(0, region.top - border)
    x1 = min(img_w, region.left + region.width + border)
    y1 = min(img_h, region.top + region.height + border)
    return DetectedRegion(left=x0, top=y0, width=max(0, x1 - x0), height=max(0, y1 - y0))


def _same_line(a: DetectedRegion, b: DetectedRegion) -> bool:
    # vertical overlap of at least half the shorter box
    overlap = min(a.top + a.height, b.top + b.height) - max(a.top, b.top)
    return overlap >= 0.5 * min(a.height, b.height)


def _union(a: DetectedRegion, b: DetectedRegion) -> DetectedRegion:
    x0, y0 = min(a.left, b.left), min(a.top, b.top)
    x1 = max(a.left + a.width, b.left + b.width)
    y1 = max(a.top + a.height, b.top + b.height)
    return DetectedRegion(left=x0, top=y0, width=x1 - x0, height=y1 - y0)


def merge_regions(regions: Iterable[DetectedRegion], threshold: int) -> List[DetectedRegion]:
    """Merge neighbours on the same line whose horizontal gap is <= threshold.

    Input order is kept; a merged box takes the position of its first member.
    """
    out: List[DetectedRegion] = []
    for r in regions:
        if out:
            prev = out[-1]
            gap = r.left - (prev.left + prev.width)
            if _same_line(prev, r) and gap <= threshold and r.left >= prev.left:
                out[-1] = _union(prev, r)
                continue
        out.append(r)
    return out


def crop(image: np.ndarray, region: DetectedRegion) -> np.ndarray:
    y0, x0 = max(0, region.top), max(0, region.left)
    return image[y0:y0 + region.height, x0:x0 + region.width].copy()


def sub_image_size(sub_image: np.ndarray) -> tuple:
    """(width, height) of a crop; (0, 0) for anything that is not at least 2-D."""
    shape = getattr(sub_image, "shape", ())
    if len(shape) < 2:
        return 0, 0
    return int(shape[1]), int(shape[0])
