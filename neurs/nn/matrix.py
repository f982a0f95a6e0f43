"""A dense, row-major matrix of 32-bit floats.

This is the only numeric container the network uses. Products, elementwise
arithmetic, transposes and mapping a function over every entry all go through
here, and every operation checks the shapes of its operands first.
"""

from typing import Callable, Optional, Sequence

import numpy as np

from neurs.nn.errors import DimensionMismatch, EmptyInput, MalformedMatrix, ShapeMismatch

DTYPE = np.float32


def _dot(row: np.ndarray, col: np.ndarray) -> np.float32:
    """Dot product of two equal length sequences, summed left to right"""
    total = DTYPE(0.0)
    for a, b in zip(row, col):
        total += a * b
    return total


class Matrix():
    def __init__(self, data: Sequence[float], rows: int, cols: int):
        """Create a new matrix from flat, row-major data

        Args:
            data (Sequence[float]): rows * cols values, one row after the other. Copied.
            rows (int): number of rows
            cols (int): number of columns

        Raises:
            MalformedMatrix: the amount of data doesn't match rows * cols
        """
        self.data = np.array(data, dtype=DTYPE).reshape(-1)
        self.rows = rows
        self.cols = cols
        self._check()

    @classmethod
    def _wrap(cls, data: np.ndarray, rows: int, cols: int) -> 'Matrix':
        """Build a matrix around an array we just created, without copying it"""
        matrix = cls.__new__(cls)
        matrix.data = data
        matrix.rows = rows
        matrix.cols = cols
        return matrix

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> 'Matrix':
        """Build a matrix from a list of rows, e.g. [[1, 2, 3], [4, 5, 6]]

        Raises:
            EmptyInput: no rows were given
            MalformedMatrix: the rows are not all the same length as the first one
        """
        rows = [list(row) for row in rows]
        if len(rows) == 0:
            raise EmptyInput('can not build a matrix from zero rows')

        cols = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != cols:
                raise MalformedMatrix(f'row {i} has {len(row)} values but row 0 has {cols}')

        return cls([x for row in rows for x in row], len(rows), cols)

    @classmethod
    def from_vector(cls, values: Sequence[float]) -> 'Matrix':
        """A single row matrix, which is how one sample is fed to the network"""
        return cls.from_rows([values])

    @classmethod
    def from_dim(cls, rows: int, cols: int, rng: Optional[np.random.Generator] = None) -> 'Matrix':
        """Random matrix with every entry drawn uniformly from [-1, 1)

        Args:
            rows (int): number of rows
            cols (int): number of columns
            rng (np.random.Generator, optional): source of randomness. Defaults to a fresh generator.
        """
        if rows < 0 or cols < 0:
            raise MalformedMatrix(f'can not build a {rows}x{cols} matrix')
        if rng is None:
            rng = np.random.default_rng()
        # random() is [0, 1) in float32, so 2x - 1 stays exactly inside [-1, 1)
        data = rng.random(rows * cols, dtype=DTYPE) * 2 - 1
        return cls._wrap(data, rows, cols)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def _check(self):
        if self.rows < 0 or self.cols < 0 or len(self.data) != self.rows * self.cols:
            raise MalformedMatrix(
                f'{len(self.data)} values can not fill a {self.rows}x{self.cols} matrix')

    def copy(self) -> 'Matrix':
        return Matrix._wrap(self.data.copy(), self.rows, self.cols)

    def to_rows(self) -> list[list[float]]:
        return [[float(x) for x in self.get_row(i)] for i in range(self.rows)]

    def get_row(self, index: int) -> np.ndarray:
        """A read only view over one row, no copy is made"""
        if not 0 <= index < self.rows:
            raise IndexError(f'row {index} is out of range for {self.rows} rows')
        view = self.data[self.cols * index:self.cols * (index + 1)]
        view.flags.writeable = False
        return view

    def get_col(self, index: int) -> np.ndarray:
        """A read only view over one column, stepping through the data by cols"""
        if not 0 <= index < self.cols:
            raise IndexError(f'column {index} is out of range for {self.cols} columns')
        view = self.data[index::self.cols]
        view.flags.writeable = False
        return view

    def multiply(self, other: 'Matrix') -> 'Matrix':
        """Matrix product, self is (n x m) and other is (m x p), the result is (n x p)

        Raises:
            DimensionMismatch: self.cols != other.rows
        """
        self._check()
        other._check()
        if self.cols != other.rows:
            raise DimensionMismatch(
                f'can not multiply a {self.rows}x{self.cols} matrix '
                f'by a {other.rows}x{other.cols} matrix')

        data = np.empty(self.rows * other.cols, dtype=DTYPE)
        for i in range(self.rows):
            row = self.get_row(i)
            for j in range(other.cols):
                data[i * other.cols + j] = _dot(row, other.get_col(j))

        return Matrix._wrap(data, self.rows, other.cols)

    def _elementwise(self, other: 'Matrix', op: np.ufunc) -> 'Matrix':
        if not isinstance(other, Matrix):
            raise TypeError(f'expected a Matrix, got {type(other).__name__}')
        self._check()
        other._check()
        if self.shape != other.shape:
            raise ShapeMismatch(
                f'matrices had different order: {self.rows}x{self.cols} '
                f'and {other.rows}x{other.cols}')

        # inf and nan are passed straight through
        with np.errstate(all='ignore'):
            data = op(self.data, other.data)
        return Matrix._wrap(data, self.rows, self.cols)

    def add(self, other: 'Matrix') -> 'Matrix':
        return self._elementwise(other, np.add)

    def sub(self, other: 'Matrix') -> 'Matrix':
        return self._elementwise(other, np.subtract)

    def mul(self, other: 'Matrix') -> 'Matrix':
        """Elementwise (Hadamard) product, not the matrix product"""
        return self._elementwise(other, np.multiply)

    def div(self, other: 'Matrix') -> 'Matrix':
        return self._elementwise(other, np.divide)

    def add_assign(self, other: 'Matrix') -> 'Matrix':
        """In place add, the same as self = self + other"""
        self.data = self.add(other).data
        return self

    def add_col(self, x: float):
        """Append a column filled with x to the right of every row, in place.

        The network uses this to put a constant 1 next to its inputs so the
        bias can live inside the weight matrix.
        """
        self._check()
        grid = self.data.reshape(self.rows, self.cols)
        column = np.full((self.rows, 1), x, dtype=DTYPE)
        self.data = np.hstack([grid, column]).reshape(-1)
        self.cols += 1

    def apply(self, func: Callable[[float], float]) -> 'Matrix':
        """A new matrix with func applied to every entry on its own"""
        self._check()
        with np.errstate(all='ignore'):
            data = np.fromiter((func(x) for x in self.data), dtype=DTYPE, count=len(self.data))
        return Matrix._wrap(data, self.rows, self.cols)

    def sum(self) -> float:
        self._check()
        return float(np.sum(self.data, dtype=DTYPE))

    def transpose(self) -> 'Matrix':
        self._check()
        data = self.data.reshape(self.rows, self.cols).T.flatten()
        return Matrix._wrap(data, self.cols, self.rows)

    @property
    def T(self) -> 'Matrix':
        return self.transpose()

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div
    __iadd__ = add_assign
    __matmul__ = multiply

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))

    def __repr__(self) -> str:
        return f'Matrix(data={self.data.tolist()}, rows={self.rows}, cols={self.cols})'

    def __str__(self) -> str:
        lines = []
        for i in range(self.rows):
            values = ' '.join(f'{x:.5f}' for x in self.get_row(i))
            indent = '  ' if i else ''
            lines.append(f'{indent}[ {values} ]')
        return '[ {} ]'.format('\n'.join(lines))
