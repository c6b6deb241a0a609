"""
Binary-set dissimilarity measures.

These treat every entry as a boolean ("true" means not exactly zero). Each
measure is a closed-form ratio of the four contingency counts produced by
:func:`contingency` in a single pass over the two vectors.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from ..core.numeric import Scalar, literal, quiet_math, zero
from ..utils.validation import prepare_pair


@dataclass(frozen=True)
class Contingency:
    """
    2x2 contingency counts of two boolean vectors.

    Attributes:
        tt: Positions true in both
        tf: Positions true in x only
        ft: Positions true in y only
        ff: Positions false in both
    """

    tt: Scalar
    tf: Scalar
    ft: Scalar
    ff: Scalar

    @property
    def n(self) -> Scalar:
        """Vector length (the four counts always sum to it)."""
        return self.tt + self.tf + self.ft + self.ff

    @property
    def mismatches(self) -> Scalar:
        """Positions true in exactly one vector."""
        return self.tf + self.ft

    @property
    def nonzero(self) -> Scalar:
        """Positions true in at least one vector."""
        return self.tt + self.tf + self.ft

    @property
    def x_true(self) -> Scalar:
        return self.tt + self.tf

    @property
    def y_true(self) -> Scalar:
        return self.tt + self.ft


def contingency(x: ArrayLike, y: ArrayLike) -> Contingency:
    """
    Count the boolean agreement pattern of two vectors.

    Args:
        x: First vector
        y: Second vector

    Returns:
        Contingency with counts in the working dtype

    Raises:
        DimensionMismatchError: If the vectors differ in length

    Example:
        >>> c = contingency([1.0, 0.0, 1.0], [1.0, 1.0, 0.0])
        >>> int(c.tt), int(c.tf), int(c.ft), int(c.ff)
        (1, 1, 1, 0)
    """
    x, y = prepare_pair(x, y)
    x_true = x != 0
    y_true = y != 0
    dtype = x.dtype

    tt = np.count_nonzero(x_true & y_true)
    tf = np.count_nonzero(x_true & ~y_true)
    ft = np.count_nonzero(~x_true & y_true)
    ff = x.shape[0] - tt - tf - ft

    return Contingency(
        tt=literal(tt, dtype),
        tf=literal(tf, dtype),
        ft=literal(ft, dtype),
        ff=literal(ff, dtype),
    )


def jaccard(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Jaccard distance: (tf + ft) / (tt + tf + ft).

    0 when neither vector has a true entry.
    """
    c = contingency(x, y)
    if c.nonzero == 0:
        return zero(c.n.dtype)
    return (c.nonzero - c.tt) / c.nonzero


def dice(x: ArrayLike, y: ArrayLike) -> Scalar:
    """Dice dissimilarity: m / (2 tt + m); 0 when there are no mismatches."""
    c = contingency(x, y)
    m = c.mismatches
    if m == 0:
        return zero(m.dtype)
    return m / (literal(2.0, m.dtype) * c.tt + m)


def kulsinski(x: ArrayLike, y: ArrayLike) -> Scalar:
    """Kulsinski dissimilarity: (m - tt + n) / (m + n); 0 without mismatches."""
    c = contingency(x, y)
    m = c.mismatches
    if m == 0:
        return zero(m.dtype)
    return (m - c.tt + c.n) / (m + c.n)


def sokal_sneath(x: ArrayLike, y: ArrayLike) -> Scalar:
    """Sokal-Sneath dissimilarity: m / (0.5 tt + m); 0 without mismatches."""
    c = contingency(x, y)
    m = c.mismatches
    if m == 0:
        return zero(m.dtype)
    return m / (literal(0.5, m.dtype) * c.tt + m)


def matching(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Matching dissimilarity: m / n.

    Empty vectors give NaN.
    """
    c = contingency(x, y)
    with quiet_math():
        return c.mismatches / c.n


def rogers_tanimoto(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Rogers-Tanimoto dissimilarity: 2 m / (n + m).

    Empty vectors give NaN.
    """
    c = contingency(x, y)
    m = c.mismatches
    with quiet_math():
        return literal(2.0, m.dtype) * m / (c.n + m)


def sokal_michener(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Sokal-Michener dissimilarity.

    Shares the Rogers-Tanimoto closed form 2 m / (n + m); empty vectors
    give NaN.
    """
    return rogers_tanimoto(x, y)


def russell_rao(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Russell-Rao dissimilarity: (n - tt) / n.

    Forced to 0 when every true entry of each vector is matched by the
    other (which also covers empty vectors).
    """
    c = contingency(x, y)
    if c.tt == c.x_true and c.tt == c.y_true:
        return zero(c.n.dtype)
    return (c.n - c.tt) / c.n


def yule(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Yule dissimilarity: 2 tf ft / (tt ff + tf ft).

    0 when either off-diagonal count is zero.
    """
    c = contingency(x, y)
    if c.tf == 0 or c.ft == 0:
        return zero(c.n.dtype)
    return literal(2.0, c.n.dtype) * c.tf * c.ft / (c.tt * c.ff + c.tf * c.ft)


def hamming(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Normalised Hamming distance: fraction of positions where x_i != y_i.

    Unlike the measures above this compares values, not booleans. Empty
    vectors give NaN.

    Example:
        >>> float(hamming([1, 0, 1, 1, 0], [1, 1, 1, 0, 0]))
        0.4
    """
    x, y = prepare_pair(x, y)
    dtype = x.dtype
    with quiet_math():
        return literal(np.count_nonzero(x != y), dtype) / literal(x.shape[0], dtype)
