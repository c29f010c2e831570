"""
Quantum gate definitions.

All gates are constant unitary matrices (read-only numpy arrays), built once
at import time.

Gate categories:
    - Single-qubit (2x2): H, X, Y, Z, S, T
    - Two-qubit (4x4): CNOT, CZ, in the basis order |control, target⟩ =
      |00⟩, |01⟩, |10⟩, |11⟩
"""

from __future__ import annotations

from types import MappingProxyType

import numpy as np
from numpy import ndarray

from quantum_start.circuit import GATE_TYPES

# Type alias
Matrix = ndarray


def _const(rows) -> Matrix:
    m = np.array(rows, dtype=np.complex128)
    m.setflags(write=False)
    return m


_SQRT2_INV = 1.0 / np.sqrt(2.0)

# ---------------------------------------------------------------------------
# Single-qubit gates
# ---------------------------------------------------------------------------

H = _const([[_SQRT2_INV, _SQRT2_INV], [_SQRT2_INV, -_SQRT2_INV]])
"""Hadamard gate."""

X = _const([[0, 1], [1, 0]])
"""Pauli-X (NOT) gate."""

Y = _const([[0, -1j], [1j, 0]])
"""Pauli-Y gate."""

Z = _const([[1, 0], [0, -1]])
"""Pauli-Z gate."""

S = _const([[1, 0], [0, 1j]])
"""S (phase) gate: sqrt(Z)."""

T = _const([[1, 0], [0, np.exp(1j * np.pi / 4)]])
"""T gate: sqrt(S)."""

# ---------------------------------------------------------------------------
# Two-qubit gates
# ---------------------------------------------------------------------------

CNOT = _const([
    [1, 0, 0, 0],
    [0, 1, 0, 0],
    [0, 0, 0, 1],
    [0, 0, 1, 0],
])
"""Controlled-NOT: swaps |10⟩ and |11⟩."""

CZ = _const([
    [1, 0, 0, 0],
    [0, 1, 0, 0],
    [0, 0, 1, 0],
    [0, 0, 0, -1],
])
"""Controlled-Z: phase -1 on |11⟩."""

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

SINGLE_QUBIT_GATES = MappingProxyType({"H": H, "X": X, "Y": Y, "Z": Z, "S": S, "T": T})
TWO_QUBIT_GATES = MappingProxyType({"CNOT": CNOT, "CZ": CZ})

SELF_INVERSE_GATES = ("H", "X", "Y", "Z", "CNOT", "CZ")


def get_matrix(name: str) -> Matrix:
    """
    Look up a gate matrix by tag.

    Raises
    ------
    KeyError
        If the tag is not a supported gate.
    """
    if name in SINGLE_QUBIT_GATES:
        return SINGLE_QUBIT_GATES[name]
    if name in TWO_QUBIT_GATES:
        return TWO_QUBIT_GATES[name]
    raise KeyError(f"Unknown gate: '{name}'. Available: {list(GATE_TYPES)}")


def is_unitary(m: Matrix, tol: float = 1e-9) -> bool:
    """Check U·U† = I within ``tol``."""
    product = m @ m.conj().T
    return np.allclose(product, np.eye(len(m)), atol=tol)
