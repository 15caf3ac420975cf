from __future__ import annotations

from typing import Tuple


RGB = Tuple[int, int, int]

PALETTE: Tuple[RGB, ...] = (
    (254, 111, 94),   # bittersweet
    (31, 117, 254),   # blue
    (162, 162, 208),  # blue bell
    (203, 65, 84),    # brick red
    (253, 219, 109),  # dandelion
    (206, 255, 29),   # electric lime
    (93, 118, 203),   # indigo
    (200, 56, 90),    # maroon
    (26, 72, 118),    # midnight blue
    (205, 164, 222),  # wisteria
)

BACKGROUND: RGB = (255, 255, 255)
SPAWN_BUFFER: RGB = (197, 208, 230)  # periwinkle


def color_for_index(index: int) -> RGB:
    return PALETTE[index % len(PALETTE)]
