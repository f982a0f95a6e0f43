"""Errors raised by the matrix engine when operands have the wrong shape."""


class MatrixError(ValueError):
    """Base class for every matrix shape error"""


class DimensionMismatch(MatrixError):
    """The left operand's columns don't match the right operand's rows in a product"""


class ShapeMismatch(MatrixError):
    """Elementwise operands have different row or column counts"""


class MalformedMatrix(MatrixError):
    """The data length doesn't match rows * cols (or the rows are ragged)"""


class EmptyInput(MatrixError):
    """A matrix was built from an empty sequence of rows"""
