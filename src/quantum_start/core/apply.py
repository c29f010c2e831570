"""
Gate application engine.

Key insight: never build the full 2^n x 2^n operator. A k-qubit gate only
mixes amplitudes whose indices differ in the k acted-on bits, so the 2^n
indices are partitioned by those bits and every partition is transformed
with the small 2x2 or 4x4 matrix. This is O(2^n) per gate instead of O(4^n).

Every function returns a new array; inputs are never modified.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy import ndarray

from quantum_start.circuit import Gate
from quantum_start.core.complex_math import add, mul
from quantum_start.core.gates import SINGLE_QUBIT_GATES, TWO_QUBIT_GATES, Matrix

logger = logging.getLogger(__name__)


class GateApplicationError(ValueError):
    """A gate record the engine refuses to apply in strict mode."""


class UnknownGateError(GateApplicationError):
    """Gate tag has no matrix in the gate library."""


class MissingControlError(GateApplicationError):
    """Two-qubit gate without a control qubit."""


def _indices_with_clear(dim: int, mask: int) -> ndarray:
    """All indices in [0, dim) whose ``mask`` bits are all zero, ascending."""
    idx = np.arange(dim)
    return idx[(idx & mask) == 0]


def _check_qubit(state: ndarray, qubit: int) -> None:
    n = len(state).bit_length() - 1
    if not 0 <= qubit < n:
        raise ValueError(f"Qubit {qubit} out of range for {n}-qubit state")


def apply_single_qubit_gate(state: ndarray, qubit_index: int, matrix: Matrix) -> ndarray:
    """
    Apply a 2x2 gate to one qubit.

    For every index i with bit ``qubit_index`` clear and j = i with that bit
    set, the pair (a[i], a[j]) becomes
    (m00·a[i] + m01·a[j], m10·a[i] + m11·a[j]).
    Each of the 2^(n-1) pairs is visited exactly once.

    Parameters
    ----------
    state : ndarray
        State vector of length 2^n.
    qubit_index : int
        Qubit acted on (0 = least-significant bit).
    matrix : ndarray
        2x2 unitary.

    Returns
    -------
    ndarray
        New state vector.
    """
    state = np.asarray(state, dtype=np.complex128)
    _check_qubit(state, qubit_index)

    bit = 1 << qubit_index
    i = _indices_with_clear(len(state), bit)
    j = i | bit
    a, b = state[i], state[j]

    new_state = state.copy()
    new_state[i] = add(mul(matrix[0][0], a), mul(matrix[0][1], b))
    new_state[j] = add(mul(matrix[1][0], a), mul(matrix[1][1], b))
    return new_state


def apply_two_qubit_gate(
    state: ndarray, control: int, target: int, matrix: Matrix
) -> ndarray:
    """
    Apply a 4x4 gate to a (control, target) pair.

    Indices with both bits clear ("rest" indices) each anchor a group of four:
    rest, rest|target, rest|control, rest|control|target, which are the
    |00⟩, |01⟩, |10⟩, |11⟩ columns of ``matrix``. There are 2^(n-2) groups.

    Rows are written in order, so when control == target the later rows win.
    """
    state = np.asarray(state, dtype=np.complex128)
    _check_qubit(state, control)
    _check_qubit(state, target)

    c_bit = 1 << control
    t_bit = 1 << target
    rest = _indices_with_clear(len(state), c_bit | t_bit)
    group = (rest, rest | t_bit, rest | c_bit, rest | c_bit | t_bit)
    amps = [state[idx] for idx in group]

    new_state = state.copy()
    for row, idx in enumerate(group):
        acc = mul(matrix[row][0], amps[0])
        for col in range(1, 4):
            acc = add(acc, mul(matrix[row][col], amps[col]))
        new_state[idx] = acc
    return new_state


def apply_gate(state: ndarray, qubit_count: int, gate: Gate, strict: bool = False) -> ndarray:
    """
    Apply one gate record to a state.

    Two-qubit gates use ``gate.control`` as control and ``gate.targets[0]`` as
    target. A two-qubit gate without a control falls back to its target as
    control, which degenerates the operator. An unknown gate tag returns the
    input unchanged. Both cases log a warning; with ``strict=True`` they raise
    :class:`MissingControlError` and :class:`UnknownGateError` instead.

    Raises
    ------
    ValueError
        If ``state`` does not have 2^qubit_count amplitudes or an index is out
        of range.
    """
    if len(state) != 1 << qubit_count:
        raise ValueError(
            f"State has {len(state)} amplitudes, expected {1 << qubit_count} "
            f"for {qubit_count} qubits"
        )

    if gate.type in TWO_QUBIT_GATES:
        target = gate.targets[0]
        control = gate.control
        if control is None:
            if strict:
                raise MissingControlError(f"{gate.type} gate on qubit {target} has no control")
            logger.warning(
                "%s gate has no control; using target %d as control", gate.type, target
            )
            control = target
        return apply_two_qubit_gate(state, control, target, TWO_QUBIT_GATES[gate.type])

    matrix = SINGLE_QUBIT_GATES.get(gate.type)
    if matrix is None:
        if strict:
            raise UnknownGateError(f"Unknown gate: '{gate.type}'")
        logger.warning("Ignoring unknown gate type %r", gate.type)
        return state
    return apply_single_qubit_gate(state, gate.targets[0], matrix)
