"""
Step replay.

The state at step k is recomputed from |0...0⟩ by applying gates 0..k in
order. There is no undo logic and no hidden current state: every call
rebuilds the vector, which is cheap at 256 amplitudes.

``ReplayCache`` is an opt-in LRU over (gate prefix, qubit count). It runs the
exact same fold, so cached vectors are bit-identical to a fresh replay.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Sequence

from numpy import ndarray

from quantum_start.circuit import Gate
from quantum_start.core.apply import apply_gate
from quantum_start.core.statevector import initial_state

logger = logging.getLogger(__name__)


def _last_step(circuit: Sequence[Gate], step_index: int) -> int:
    """Index of the last gate to replay, or -1 for the initial state."""
    if not circuit or step_index < 0:
        return -1
    return min(step_index, len(circuit) - 1)


def _replay(gates: Sequence[Gate], qubit_count: int) -> ndarray:
    state = initial_state(qubit_count)
    for gate in gates:
        state = apply_gate(state, qubit_count, gate)
    return state


def get_state_after_step(
    circuit: Sequence[Gate], qubit_count: int, step_index: int
) -> ndarray:
    """
    State after the gate at ``step_index`` (inclusive).

    Parameters
    ----------
    circuit : sequence of Gate
        Gates in execution order.
    qubit_count : int
        Number of qubits.
    step_index : int
        -1 (or any negative value) for the initial state; values past the end
        are clamped to the last gate.

    Returns
    -------
    ndarray
        Fresh state vector.
    """
    last = _last_step(circuit, step_index)
    logger.debug("Replaying %d of %d gates on %d qubits", last + 1, len(circuit), qubit_count)
    return _replay(circuit[: last + 1], qubit_count)


def get_all_steps(circuit: Sequence[Gate], qubit_count: int) -> list[ndarray]:
    """Initial state followed by the state after each gate."""
    state = initial_state(qubit_count)
    states = [state]
    for gate in circuit:
        state = apply_gate(state, qubit_count, gate)
        states.append(state)
    return states


class ReplayCache:
    """
    LRU cache of replayed states keyed by (gate prefix, qubit count).

    Parameters
    ----------
    maxsize : int
        Maximum number of cached prefixes.

    Example
    -------
    >>> cache = ReplayCache()
    >>> sv = cache.state_after_step(circuit, 2, 1)
    """

    def __init__(self, maxsize: int = 128) -> None:
        self.maxsize = maxsize
        self._replay = lru_cache(maxsize=maxsize)(self._compute)

    @staticmethod
    def _compute(prefix: tuple[Gate, ...], qubit_count: int) -> ndarray:
        state = _replay(prefix, qubit_count)
        state.setflags(write=False)
        return state

    def state_after_step(
        self, circuit: Sequence[Gate], qubit_count: int, step_index: int
    ) -> ndarray:
        """Same result as :func:`get_state_after_step`, served from the cache."""
        last = _last_step(circuit, step_index)
        prefix = tuple(circuit[: last + 1])
        return self._replay(prefix, qubit_count).copy()

    def info(self):
        """Hits, misses, maxsize and current size."""
        return self._replay.cache_info()

    def clear(self) -> None:
        self._replay.cache_clear()

    def __repr__(self) -> str:
        info = self.info()
        return f"ReplayCache(size={info.currsize}, maxsize={self.maxsize})"
