"""
Editor state and pure edit commands.

The circuit-authoring and step-navigation surfaces keep all of their state in
one serializable :class:`EditorState` value. Every command takes a state and
returns a new one; nothing is mutated, so a surface can keep history, diff
states, or send them over the wire as JSON.

Example
-------
>>> state = EditorState()
>>> state = add_gate(state, single_qubit_gate("H", 0))
>>> state = add_gate(state, two_qubit_gate("CNOT", 0, 1))
>>> state = go_to_end(state)
>>> current_state(state)  # Bell pair
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from numpy import ndarray

from quantum_start.circuit import (
    MAX_QUBITS,
    MIN_QUBITS,
    Circuit,
    Gate,
    circuit_from_list,
    circuit_to_list,
)
from quantum_start.core.replay import get_state_after_step
from quantum_start.validation import (
    ValidationError,
    is_integer,
    validate_circuit,
    validate_gate,
    validate_qubit_count,
)


@dataclass(frozen=True)
class EditorState:
    """
    Everything the editor needs to render.

    Attributes
    ----------
    qubit_count : int
        Number of qubits in the register.
    circuit : tuple of Gate
        Gates in execution order.
    step_index : int
        Last applied gate; -1 shows the initial state.
    """
    qubit_count: int = MIN_QUBITS
    circuit: Circuit = ()
    step_index: int = -1

    @property
    def num_steps(self) -> int:
        return len(self.circuit)

    @property
    def max_step_index(self) -> int:
        return len(self.circuit) - 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "qubit_count": self.qubit_count,
            "circuit": circuit_to_list(self.circuit),
            "step_index": self.step_index,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EditorState:
        """
        Rebuild a state from :meth:`to_dict` output.

        Missing keys take the defaults. The step index is clamped to the
        circuit so a stale client cannot point past the last gate.

        Raises
        ------
        ValueError
            If the qubit count is not an integer in [MIN_QUBITS, MAX_QUBITS],
            the step index is not an integer, or a gate record is malformed.
        """
        if not isinstance(data, dict):
            raise ValueError("Editor state must be an object")
        qubit_count = data.get("qubit_count", MIN_QUBITS)
        count_error = validate_qubit_count(qubit_count)
        if count_error is not None:
            raise ValueError(count_error.message)
        step_index = data.get("step_index", -1)
        if not is_integer(step_index):
            raise ValueError(f"Step index must be an integer, got {step_index!r}")
        state = cls(
            qubit_count=int(qubit_count),
            circuit=circuit_from_list(data.get("circuit", [])),
        )
        return go_to_step(state, int(step_index))


# ---------------------------------------------------------------------------
# Edit commands (each resets the step index)
# ---------------------------------------------------------------------------

def set_qubit_count(state: EditorState, n: int) -> EditorState:
    """Clamp ``n`` to the supported range and drop gates that no longer fit."""
    n = max(MIN_QUBITS, min(MAX_QUBITS, n))
    kept = tuple(
        gate for gate in state.circuit if all(0 <= q < n for q in gate.qubits)
    )
    return EditorState(qubit_count=n, circuit=kept, step_index=-1)


def add_gate(state: EditorState, gate: Gate) -> EditorState:
    """Append ``gate`` if it is valid for the current qubit count."""
    if validate_gate(gate, state.qubit_count, len(state.circuit)) is not None:
        return state
    return replace(state, circuit=state.circuit + (gate,), step_index=-1)


def remove_gate(state: EditorState, index: int) -> EditorState:
    if not 0 <= index < len(state.circuit):
        return state
    circuit = state.circuit[:index] + state.circuit[index + 1:]
    return replace(state, circuit=circuit, step_index=-1)


def move_gate(state: EditorState, from_index: int, to_index: int) -> EditorState:
    """Move a gate as list remove-then-insert; ``to_index`` is clamped by insert."""
    if not 0 <= from_index < len(state.circuit):
        return state
    gates = list(state.circuit)
    gate = gates.pop(from_index)
    gates.insert(to_index, gate)
    return replace(state, circuit=tuple(gates), step_index=-1)


def clear_circuit(state: EditorState) -> EditorState:
    return replace(state, circuit=(), step_index=-1)


# ---------------------------------------------------------------------------
# Step navigation
# ---------------------------------------------------------------------------

def go_to_step(state: EditorState, step_index: int) -> EditorState:
    step_index = max(-1, min(state.max_step_index, step_index))
    return replace(state, step_index=step_index)


def go_next(state: EditorState) -> EditorState:
    return go_to_step(state, state.step_index + 1)


def go_prev(state: EditorState) -> EditorState:
    return go_to_step(state, state.step_index - 1)


def go_to_start(state: EditorState) -> EditorState:
    return replace(state, step_index=-1)


def go_to_end(state: EditorState) -> EditorState:
    return replace(state, step_index=state.max_step_index)


def can_go_next(state: EditorState) -> bool:
    return state.step_index < state.max_step_index


def can_go_prev(state: EditorState) -> bool:
    return state.step_index >= 0


def is_at_start(state: EditorState) -> bool:
    return state.step_index == -1


def is_at_end(state: EditorState) -> bool:
    return bool(state.circuit) and state.step_index == state.max_step_index


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------

def current_state(state: EditorState) -> ndarray:
    """State vector at the current step."""
    return get_state_after_step(state.circuit, state.qubit_count, state.step_index)


def validation_errors(state: EditorState) -> list[ValidationError]:
    return validate_circuit(state.circuit, state.qubit_count)


def is_valid(state: EditorState) -> bool:
    return not validation_errors(state)
