"""
Swipe direction decoding.
Maps a swipe vector to a key index by looking its angle up in a fixed
table of angular sectors. Screen coordinates: y grows downward, so 90
degrees points down.
"""
import math
from enum import Enum, auto
from typing import Dict, List, Optional, Sequence, Tuple


class LayoutArity(Enum):
    """Sector table used for a single decode."""
    FOUR_WAY = auto()
    SIX_WAY = auto()
    EIGHT_WAY = auto()
    TWO_STROKE_STAGE1 = auto()
    TWO_STROKE_STAGE2_NARROW = auto()
    TWO_STROKE_STAGE2_WIDE = auto()

    @property
    def key_count(self) -> int:
        return len({key for _, _, key in SECTOR_TABLES[self]})


class Direction(Enum):
    """Canonical swipe directions used for feedback markers."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    UP_LEFT = auto()
    UP_RIGHT = auto()
    DOWN_LEFT = auto()
    DOWN_RIGHT = auto()

    @property
    def arrow(self) -> str:
        return ARROWS[self]


ARROWS: Dict[Direction, str] = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
    Direction.UP_LEFT: "↖",
    Direction.UP_RIGHT: "↗",
    Direction.DOWN_LEFT: "↙",
    Direction.DOWN_RIGHT: "↘",
}

# (lower, upper, key): lower inclusive, upper exclusive, degrees in [0, 360)
Sector = Tuple[float, float, int]


def _build_sectors(origin: float, unit: float, spans: Sequence[Tuple[int, int]]) -> List[Sector]:
    """
    Lay out contiguous sectors clockwise from ``origin``.

    Args:
        origin: Start angle of the first span in degrees.
        unit: Width of one sector unit in degrees.
        spans: (width in units, key) pairs; widths must add up to 360 degrees.

    Returns:
        Sector list where the span crossing 0 degrees is split in two.
    """
    sectors: List[Sector] = []
    offset = 0
    for width, key in spans:
        start = (origin + offset * unit) % 360.0
        end = start + width * unit
        if end > 360.0:
            sectors.append((start, 360.0, key))
            sectors.append((0.0, end - 360.0, key))
        else:
            sectors.append((start, end, key))
        offset += width
    if offset * unit != 360.0:
        raise ValueError(f"Sector spans cover {offset * unit} degrees, expected 360")
    return sectors


SECTOR_TABLES: Dict[LayoutArity, List[Sector]] = {
    # Right-facing quadrant is key 1; 45 degrees belongs to the down quadrant
    LayoutArity.FOUR_WAY: _build_sectors(315.0, 90.0, [(1, 1), (1, 3), (1, 2), (1, 0)]),
    LayoutArity.SIX_WAY: _build_sectors(0.0, 60.0, [(1, 3), (1, 4), (1, 5), (1, 2), (1, 1), (1, 0)]),
    LayoutArity.EIGHT_WAY: _build_sectors(
        337.5, 45.0, [(1, 3), (1, 4), (1, 5), (1, 6), (1, 7), (1, 0), (1, 1), (1, 2)]
    ),
    LayoutArity.TWO_STROKE_STAGE1: _build_sectors(
        0.0, 60.0, [(1, 3), (1, 4), (1, 5), (1, 2), (1, 1), (1, 0)]
    ),
    LayoutArity.TWO_STROKE_STAGE2_NARROW: _build_sectors(0.0, 90.0, [(1, 0), (1, 3), (1, 2), (1, 1)]),
    # 16 sectors of 22.5 degrees from 0; the two sectors left over after
    # key 1 fold back into key 0, which then spans 0 degrees
    LayoutArity.TWO_STROKE_STAGE2_WIDE: _build_sectors(
        0.0, 22.5, [(1, 0), (2, 4), (2, 3), (2, 5), (3, 2), (4, 1), (2, 0)]
    ),
}

# Key index -> direction of the sector centre, for feedback markers
_KEY_DIRECTIONS: Dict[LayoutArity, Dict[int, Direction]] = {
    LayoutArity.FOUR_WAY: {
        0: Direction.UP,
        1: Direction.RIGHT,
        2: Direction.LEFT,
        3: Direction.DOWN,
    },
    LayoutArity.SIX_WAY: {
        0: Direction.UP_RIGHT,
        1: Direction.UP,
        2: Direction.UP_LEFT,
        3: Direction.DOWN_RIGHT,
        4: Direction.DOWN,
        5: Direction.DOWN_LEFT,
    },
    LayoutArity.EIGHT_WAY: {
        0: Direction.UP_LEFT,
        1: Direction.UP,
        2: Direction.UP_RIGHT,
        3: Direction.RIGHT,
        4: Direction.DOWN_RIGHT,
        5: Direction.DOWN,
        6: Direction.DOWN_LEFT,
        7: Direction.LEFT,
    },
}
_KEY_DIRECTIONS[LayoutArity.TWO_STROKE_STAGE1] = _KEY_DIRECTIONS[LayoutArity.SIX_WAY]

DEFAULT_KEY = 0


def normalize_angle(angle: float) -> float:
    """Fold an angle in degrees into [0, 360)."""
    angle = angle % 360.0
    # A tiny negative angle rounds up to exactly 360 after the modulo
    if angle >= 360.0:
        angle = 0.0
    return angle


def swipe_angle(dx: float, dy: float) -> float:
    """Angle of a swipe vector in degrees, in [0, 360)."""
    angle = math.degrees(math.atan2(dy, dx))
    if angle < 0:
        angle += 360.0
    return normalize_angle(angle)


def key_for_angle(angle: float, arity: LayoutArity) -> int:
    """Look an angle (degrees) up in the sector table of ``arity``."""
    angle = normalize_angle(angle)
    for lower, upper, key in SECTOR_TABLES[arity]:
        if lower <= angle < upper:
            return key
    # Only reachable for NaN input
    return DEFAULT_KEY


def decode(dx: float, dy: float, arity: LayoutArity) -> int:
    """
    Decode a swipe vector into a key index.

    Only the direction of (dx, dy) matters; the magnitude is ignored.

    Args:
        dx: Horizontal displacement (positive = right).
        dy: Vertical displacement (positive = down).
        arity: Sector table to decode against.

    Returns:
        Key index for the sector containing the swipe angle.
    """
    return key_for_angle(swipe_angle(dx, dy), arity)


def direction(dx: float, dy: float) -> Direction:
    """Coarse 4-way direction: the dominant axis wins, ties go vertical."""
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def direction_for_key(key: int, arity: LayoutArity) -> Optional[Direction]:
    """Direction marker for a decoded key, if the arity has one."""
    return _KEY_DIRECTIONS.get(arity, {}).get(key)
