"""
Complex arithmetic primitives.

Amplitudes are plain Python/numpy complex values (two 64-bit floats), so
every function here is total and returns a new value. All of them work
elementwise on ``complex128`` arrays as well as on scalars, which is how the
gate engine and the Bloch projector use them.
"""

from __future__ import annotations

import numpy as np


def add(a, b):
    """a + b"""
    return a + b


def sub(a, b):
    """a - b"""
    return a - b


def mul(a, b):
    """a * b"""
    return a * b


def scale(s: float, z):
    """Multiply ``z`` by the real factor ``s``."""
    return s * z


def conj(z):
    """Complex conjugate."""
    return np.conj(z)


def norm_sq(z):
    """Squared magnitude |z|², without the square root of ``abs``."""
    return np.real(z) ** 2 + np.imag(z) ** 2
