from __future__ import annotations

from typing import Tuple

_SYSTEM = (
    (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
    (0, 0, 128), (128, 0, 128), (0, 128, 128), (192, 192, 192),
    (128, 128, 128), (255, 0, 0), (0, 255, 0), (255, 255, 0),
    (0, 0, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
)
_CUBE_STEPS = (0, 95, 135, 175, 215, 255)

EMPTY_RGB = (30, 30, 36)


def xterm_to_rgb(index: int) -> Tuple[int, int, int]:
    """Convert an xterm-256 color index (as used by level themes) to RGB."""
    index = int(index)
    if index < 16:
        return _SYSTEM[index]
    if index < 232:
        index -= 16
        return _CUBE_STEPS[index // 36], _CUBE_STEPS[(index // 6) % 6], _CUBE_STEPS[index % 6]
    gray = 8 + (index - 232) * 10
    return gray, gray, gray
