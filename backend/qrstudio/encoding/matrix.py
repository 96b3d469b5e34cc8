"""QR symbol matrix: the ``qrcode`` library behind a small adapter.

The rest of the engine only sees ``QrMatrix``; error-correction bit work
stays inside ``qrcode``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import numpy as np
import qrcode
from numpy.typing import NDArray
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError

from qrstudio.errors import EncodingError

logger = logging.getLogger(__name__)

FINDER_SPAN = 7

EC_LEVELS = ("L", "M", "Q", "H")

_EC_ALIASES = {
    "L": "L",
    "LOW": "L",
    "M": "M",
    "MEDIUM": "M",
    "Q": "Q",
    "QUARTILE": "Q",
    "H": "H",
    "HIGH": "H",
}

_EC_CONSTANTS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


def normalize_ec_level(level: object) -> str:
    """Map ``L/M/Q/H`` or ``low/medium/quartile/high`` to a letter; default ``M``."""
    if isinstance(level, str):
        return _EC_ALIASES.get(level.strip().upper(), "M")
    return "M"


def is_ec_level(level: object) -> bool:
    return isinstance(level, str) and level.strip().upper() in _EC_ALIASES


@dataclass(frozen=True)
class Neighbors:
    """Which orthogonal neighbors of a cell are dark."""

    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False


@dataclass(frozen=True)
class QrMatrix:
    """Square boolean module grid of side ``size`` plus the symbol version."""

    size: int
    version: int
    modules: NDArray[np.bool_]

    def is_dark(self, row: int, col: int) -> bool:
        """Bounds-checked module query; outside the grid is light."""
        if 0 <= row < self.size and 0 <= col < self.size:
            return bool(self.modules[row, col])
        return False

    def neighbors(self, row: int, col: int) -> Neighbors:
        return Neighbors(
            top=self.is_dark(row - 1, col),
            right=self.is_dark(row, col + 1),
            bottom=self.is_dark(row + 1, col),
            left=self.is_dark(row, col - 1),
        )

    def is_finder(self, row: int, col: int) -> bool:
        """True inside one of the three 7x7 corner finder regions."""
        n = self.size
        top = row < FINDER_SPAN
        left = col < FINDER_SPAN
        return (top and left) or (top and col >= n - FINDER_SPAN) or (row >= n - FINDER_SPAN and left)

    def finder_origins(self) -> list[tuple[int, int]]:
        """(row, col) of each finder's top-left cell: top-left, top-right, bottom-left."""
        far = self.size - FINDER_SPAN
        return [(0, 0), (0, far), (far, 0)]

    def dark_modules(self) -> Iterator[tuple[int, int]]:
        """Dark cells outside the finder regions, row-major."""
        rows, cols = np.nonzero(self.modules)
        for row, col in zip(rows.tolist(), cols.tolist()):
            if not self.is_finder(row, col):
                yield row, col

    @classmethod
    def from_rows(cls, rows: list[list[bool]], version: int = 1) -> QrMatrix:
        grid = np.array(rows, dtype=bool)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"matrix must be square, got shape {grid.shape}")
        return cls(size=int(grid.shape[0]), version=version, modules=grid)


MatrixEncoder = Callable[[str, str], QrMatrix]


def encode_matrix(content: str, ec_level: str = "M") -> QrMatrix:
    """Build the module matrix for ``content`` at the given error-correction level."""
    if not content:
        raise EncodingError("Cannot encode empty content")
    level = normalize_ec_level(ec_level)
    qr = qrcode.QRCode(
        version=None,
        error_correction=_EC_CONSTANTS[level],
        box_size=1,
        border=0,
    )
    qr.add_data(content)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise EncodingError(
            f"Content of {len(content)} chars does not fit a QR symbol at level {level}: {e}"
        ) from e

    matrix = QrMatrix.from_rows(qr.get_matrix(), version=qr.version)
    logger.debug("Encoded %d chars -> version %d (%dx%d)", len(content), matrix.version, matrix.size, matrix.size)
    return matrix
