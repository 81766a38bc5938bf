"""
Connected-component extraction on a binary edge map.

Labeling is a single top-to-bottom, left-to-right pass without label
merging: a foreground pixel inherits its left neighbour's label, else its
top neighbour's, else starts a new label. Shapes whose rows reach back up
through an unlabeled gap (a U opening upward, for instance) therefore
split into several components.
"""

import logging
from typing import List, Tuple

import numpy as np

from core.constants import ContourConstants
from core.image.buffer import PixelBuffer
from core.utils.decorators import log_duration
from schemas import Rect

logger = logging.getLogger(__name__)


def label_components(mask: np.ndarray) -> Tuple[np.ndarray, int]:
    """
    Label foreground pixels of a boolean mask.

    Only pixels with 1 <= x < width - 1 and 1 <= y < height - 1 are
    labeled. Within a row every run of foreground pixels shares the label
    of its first pixel, which comes from the pixel above or is fresh.

    Args:
        mask: (H, W) boolean array

    Returns:
        (labels, count): int32 label grid (0 = background) and the number
        of labels issued
    """
    height, width = mask.shape
    labels = np.zeros((height, width), dtype=np.int32)
    next_label = 1

    for y in range(1, height - 1):
        row = mask[y, 1 : width - 1]
        if not row.any():
            continue
        padded = np.concatenate(([False], row, [False]))
        changes = np.flatnonzero(padded[1:] != padded[:-1])
        starts = changes[0::2] + 1
        ends = changes[1::2] + 1
        for start, end in zip(starts, ends):
            label = labels[y - 1, start]
            if label == 0:
                label = next_label
                next_label += 1
            labels[y, start:end] = label

    return labels, next_label - 1


def bounding_boxes(labels: np.ndarray, count: int) -> List[Tuple[int, int, int, int]]:
    """(min_x, min_y, max_x, max_y) of labels 1..count, in label order."""
    if count == 0:
        return []

    ys, xs = np.nonzero(labels)
    ids = labels[ys, xs]
    height, width = labels.shape

    min_x = np.full(count + 1, width, dtype=np.int64)
    min_y = np.full(count + 1, height, dtype=np.int64)
    max_x = np.zeros(count + 1, dtype=np.int64)
    max_y = np.zeros(count + 1, dtype=np.int64)
    np.minimum.at(min_x, ids, xs)
    np.minimum.at(min_y, ids, ys)
    np.maximum.at(max_x, ids, xs)
    np.maximum.at(max_y, ids, ys)

    return [
        (int(min_x[i]), int(min_y[i]), int(max_x[i]), int(max_y[i]))
        for i in range(1, count + 1)
    ]


@log_duration
def find_contours(buffer: PixelBuffer) -> List[Rect]:
    """
    Bounding boxes of the connected components of channel 0.

    Box width and height are max - min (not max - min + 1). Only boxes
    larger than 20 on both axes are kept, at most 100 of them, in label
    order.
    """
    labels, count = label_components(buffer.plane(0) > 0)

    rects: List[Rect] = []
    for min_x, min_y, max_x, max_y in bounding_boxes(labels, count):
        width = max_x - min_x
        height = max_y - min_y
        if width <= ContourConstants.MIN_BOX_SIZE or height <= ContourConstants.MIN_BOX_SIZE:
            continue
        if len(rects) == ContourConstants.MAX_CONTOURS:
            logger.warning(
                f"Contour limit of {ContourConstants.MAX_CONTOURS} reached, dropping the rest"
            )
            break
        rects.append(Rect(x=min_x, y=min_y, width=width, height=height))

    logger.debug(f"{count} components labeled, {len(rects)} contours kept")
    return rects
