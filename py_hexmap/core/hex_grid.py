"""
Hexagonal grid coordinate system.

Cells are laid out in columns of flat-topped hexes where even and odd
columns are vertically staggered: an even column sits half a hex higher
than the odd columns beside it. Cells are addressed either by a
(col, row) coordinate or by a flat array index ``row * width + col``.
"""

import math
from enum import IntEnum
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from .errors import InvalidInputError

# Distance reported for anything involving the invalid coordinate.
MAX_DISTANCE = 32767


class HexCoordinate(NamedTuple):
    """Column/row position of a cell."""
    col: int
    row: int


INVALID_HEX = HexCoordinate(-1, -1)


class Direction(IntEnum):
    """Neighbor directions, numbered clockwise from north."""

    N = 0
    NE = 1
    SE = 2
    S = 3
    SW = 4
    NW = 5


class HexGrid:
    """Fixed-size rectangular grid of hexes."""

    def __init__(self, width: int, height: int):
        """
        Initialize the grid.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width < 1 or height < 1:
            raise InvalidInputError(
                f"grid dimensions must be positive, got {width}x{height}"
            )
        self.width = int(width)
        self.height = int(height)
        self.size = self.width * self.height

        indices = np.arange(self.size)
        self.cell_cols = indices % self.width
        self.cell_rows = indices // self.width

    def __repr__(self) -> str:
        return f"HexGrid(width={self.width}, height={self.height})"

    def contains(self, coord: Tuple[int, int]) -> bool:
        col, row = coord
        return 0 <= col < self.width and 0 <= row < self.height

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < self.size

    def to_index(self, coord: Tuple[int, int]) -> int:
        """Convert a coordinate to its array index."""
        self._check_coord(coord)
        col, row = coord
        return row * self.width + col

    def to_coord(self, index: int) -> HexCoordinate:
        """Convert an array index to its coordinate."""
        self._check_index(index)
        return HexCoordinate(index % self.width, index // self.width)

    def distance(self, a: Tuple[int, int], b: Tuple[int, int]) -> int:
        """
        Number of steps between two hexes.

        The column axis is staggered, so moving diagonally between columns
        of opposite parity costs an extra row step in two of the four
        skew cases. Either argument being INVALID_HEX means the two are
        unrelated and MAX_DISTANCE is returned. Any other coordinate off the
        grid raises InvalidInputError.

        Args:
            a: First coordinate
            b: Second coordinate

        Returns:
            Hex distance between a and b
        """
        if tuple(a) == INVALID_HEX or tuple(b) == INVALID_HEX:
            return MAX_DISTANCE
        self._check_coord(a)
        self._check_coord(b)

        a_col, a_row = a
        b_col, b_row = b
        dx = abs(a_col - b_col)
        dy = abs(a_row - b_row)

        v_penalty = 0
        if ((a_row < b_row and a_col % 2 == 0 and b_col % 2 == 1) or
                (a_row > b_row and a_col % 2 == 1 and b_col % 2 == 0)):
            v_penalty = 1

        return max(dx, dy + v_penalty + dx // 2)

    def distances_from(self, center: Tuple[int, int]) -> np.ndarray:
        """
        Distance from every cell to ``center``, in array index order.

        Vectorized form of ``distance(cell, center)``.
        """
        if tuple(center) == INVALID_HEX:
            return np.full(self.size, MAX_DISTANCE, dtype=np.int64)
        self._check_coord(center)

        c_col, c_row = center
        cols, rows = self.cell_cols, self.cell_rows
        dx = np.abs(cols - c_col)
        dy = np.abs(rows - c_row)

        even = cols % 2 == 0
        v_penalty = (
            ((rows < c_row) & even & (c_col % 2 == 1)) |
            ((rows > c_row) & ~even & (c_col % 2 == 0))
        ).astype(np.int64)

        return np.maximum(dx, dy + v_penalty + dx // 2)

    def neighbor(self, index: int, direction: int) -> Optional[int]:
        """
        Array index of the neighbor in the given direction.

        Args:
            index: Cell array index
            direction: Direction 0-5 (0 = north, 1 = northeast, ...)

        Returns:
            Neighbor index, or None if the grid has no cell there
        """
        self._check_index(index)
        if direction not in range(6):
            raise InvalidInputError(f"direction must be in 0..5, got {direction}")

        width = self.width
        col = index % width
        even = col % 2 == 0
        top = index < width
        bottom = index >= self.size - width
        left = col == 0
        right = col == width - 1

        if direction == Direction.N and not top:
            return index - width
        elif direction == Direction.NE and not right:
            if not even:
                return index + 1
            if not top:
                return index - width + 1
        elif direction == Direction.SE and not right:
            if even:
                return index + 1
            if not bottom:
                return index + width + 1
        elif direction == Direction.S and not bottom:
            return index + width
        elif direction == Direction.SW and not left:
            if even:
                return index - 1
            if not bottom:
                return index + width - 1
        elif direction == Direction.NW and not left:
            if not even:
                return index - 1
            if not top:
                return index - width - 1

        return None

    def neighbors(self, index: int) -> List[int]:
        """All existing neighbors of a cell, ordered by direction. Result may have fewer than 6 entries."""
        result = []
        for direction in Direction:
            neighbor = self.neighbor(index, direction)
            if neighbor is not None:
                result.append(neighbor)
        return result

    def hex_neighbors(self, coord: Tuple[int, int]) -> List[HexCoordinate]:
        """Same as neighbors() but with coordinates instead of array indexes."""
        return [self.to_coord(n) for n in self.neighbors(self.to_index(coord))]

    def random_hex(self, rng) -> HexCoordinate:
        """
        Pick a uniformly random cell.

        Args:
            rng: Random source with a ``random()`` method returning [0, 1)

        Returns:
            Coordinate of the chosen cell
        """
        index = min(int(rng.random() * self.size), self.size - 1)
        return self.to_coord(index)

    def pixel_center(self, coord: Tuple[int, int], radius: float) -> Tuple[float, float]:
        """Pixel center of a cell; odd columns are shifted half a row down."""
        col, row = coord
        x = radius * (1.5 * col + 1)
        if col % 2 == 0:
            y = radius + row * (math.sqrt(3) * radius)
        else:
            y = radius + (row + 0.5) * (math.sqrt(3) * radius)
        return x, y

    def _check_coord(self, coord: Tuple[int, int]) -> None:
        if not self.contains(coord):
            raise InvalidInputError(f"coordinate {tuple(coord)} is outside the {self.width}x{self.height} grid")

    def _check_index(self, index: int) -> None:
        if not self.is_valid_index(index):
            raise InvalidInputError(f"index {index} is outside [0, {self.size})")
