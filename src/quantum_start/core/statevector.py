"""
State vector helpers.

A state is a flat ``complex128`` array of length 2^n. Bit k of an index is the
value of qubit k, so qubit 0 is the least-significant bit:

    index 0b01 -> |01⟩  (qubit 0 = 1, qubit 1 = 0)

Memory: 16 bytes * 2^n, at most 4 KB for the 8-qubit limit.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy import ndarray

from quantum_start.circuit import MAX_QUBITS, MIN_QUBITS
from quantum_start.core.complex_math import norm_sq

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 1e-10
"""Probability below which a basis term is left out of the ket string."""

_TOKEN_TOL = 1e-10
_POSITIONAL_MIN = 1e-6


def initial_state(n_qubits: int) -> ndarray:
    """
    Return the |0...0⟩ state for ``n_qubits`` qubits.

    Parameters
    ----------
    n_qubits : int
        Number of qubits, between MIN_QUBITS and MAX_QUBITS.

    Returns
    -------
    ndarray
        Amplitude 1 at index 0, 0 everywhere else.
    """
    if not MIN_QUBITS <= n_qubits <= MAX_QUBITS:
        raise ValueError(
            f"Qubit count must be between {MIN_QUBITS} and {MAX_QUBITS}, got {n_qubits}"
        )
    state = np.zeros(1 << n_qubits, dtype=np.complex128)
    state[0] = 1.0
    return state


def num_qubits(state: ndarray) -> int:
    """Number of qubits encoded by a vector of length 2^n."""
    dim = len(state)
    if dim < 2 or dim & (dim - 1):
        raise ValueError(f"State length {dim} is not a power of two")
    return dim.bit_length() - 1


def get_probabilities(state: ndarray) -> ndarray:
    """Squared magnitude of every amplitude, in index order."""
    return norm_sq(np.asarray(state, dtype=np.complex128))


def to_ket_string(state: ndarray, threshold: float = DEFAULT_THRESHOLD) -> str:
    """
    Render a state as a sum of kets, e.g. ``(0.7071067811865475)|00⟩ + ...``.

    Only basis states with probability above ``threshold`` are listed. The
    basis label is written most-significant qubit first. Coefficients equal
    to 1 are omitted; 1, -1, i and -i are written as tokens.

    If nothing clears the threshold the |0...0⟩ ket is returned and a warning
    is logged. A vector whose length is not a power of two renders as ``|?⟩``.
    """
    try:
        n = num_qubits(state)
    except ValueError:
        return "|?⟩"

    terms = []
    for i, amp in enumerate(state):
        if norm_sq(amp) <= threshold:
            continue
        basis = format(i, f"0{n}b")
        coeff = _format_complex(complex(amp))
        terms.append(f"|{basis}⟩" if coeff == "1" else f"({coeff})|{basis}⟩")

    if not terms:
        logger.warning(
            "No basis state above threshold %g; reporting |%s⟩", threshold, "0" * n
        )
        return f"|{'0' * n}⟩"
    return " + ".join(terms)


def _format_complex(z: complex) -> str:
    if abs(z.imag) < _TOKEN_TOL:
        return _format_real(z.real)
    if abs(z.real) < _TOKEN_TOL:
        return _format_imag(z.imag)
    sign = "+" if z.imag >= 0 else "-"
    return f"{_format_real(z.real)} {sign} {_format_real(abs(z.imag))}i"


def _format_real(r: float) -> str:
    if abs(r - 1) < _TOKEN_TOL:
        return "1"
    if abs(r + 1) < _TOKEN_TOL:
        return "-1"
    return _format_number(r)


def _format_imag(im: float) -> str:
    if abs(im - 1) < _TOKEN_TOL:
        return "i"
    if abs(im + 1) < _TOKEN_TOL:
        return "-i"
    return f"{_format_number(im)}i"


def _format_number(r: float) -> str:
    """Shortest round-trip digits, positional down to 1e-6 (0.00001, not 1e-05)."""
    r = float(r)
    if r != 0 and abs(r) < _POSITIONAL_MIN:
        return repr(r)
    return np.format_float_positional(r, unique=True, trim="-")
