"""
Structural validation of circuits.

Validation is advisory: problems are returned as a list of error values, never
raised, and every gate is checked so a caller can report all problems at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence

import numpy as np

from quantum_start.circuit import MAX_QUBITS, MIN_QUBITS, Gate, is_two_qubit_gate


@dataclass(frozen=True)
class ValidationError:
    """A single problem found in a circuit."""
    kind: ClassVar[str] = ""
    message: str
    gate_index: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.gate_index is not None:
            data["gate_index"] = self.gate_index
        return data


@dataclass(frozen=True)
class QubitCountError(ValidationError):
    kind: ClassVar[str] = "qubit_count"


@dataclass(frozen=True)
class GateTargetError(ValidationError):
    kind: ClassVar[str] = "gate_target"


@dataclass(frozen=True)
class DuplicateQubitError(ValidationError):
    kind: ClassVar[str] = "duplicate_qubit"


def is_integer(value: Any) -> bool:
    """True for Python and numpy integers; bools are not indices."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def validate_qubit_count(qubit_count: Any) -> Optional[QubitCountError]:
    if not is_integer(qubit_count):
        return QubitCountError("Qubit count must be an integer.")
    if not MIN_QUBITS <= qubit_count <= MAX_QUBITS:
        return QubitCountError(
            f"Qubit count must be between {MIN_QUBITS} and {MAX_QUBITS}."
        )
    return None


def validate_gate(gate: Gate, qubit_count: int, index: int) -> Optional[ValidationError]:
    """
    Check one gate against the qubit count.

    Every referenced index must be an integer in [0, qubit_count - 1]. A
    two-qubit gate must act on two different qubits; without an explicit
    control the engine uses the target as control, so that case is reported
    as a duplicate too.

    Returns
    -------
    ValidationError or None
        The first problem found, or None if the gate is valid.
    """
    if not gate.targets:
        return GateTargetError(f"Gate at index {index}: no target qubit.", index)

    limit = qubit_count if is_integer(qubit_count) else 0
    for q in gate.qubits:
        if not is_integer(q) or not 0 <= q < limit:
            return GateTargetError(
                f"Gate at index {index}: qubit index {q} is out of range "
                f"[0, {limit - 1}].",
                index,
            )

    if is_two_qubit_gate(gate.type):
        control = gate.targets[0] if gate.control is None else gate.control
        if control == gate.targets[0]:
            return DuplicateQubitError(
                f"Gate at index {index}: control and target must be different qubits.",
                index,
            )
    return None


def validate_circuit(circuit: Sequence[Gate], qubit_count: Any) -> list[ValidationError]:
    """Qubit-count error first (if any), then one error per invalid gate in order."""
    errors: list[ValidationError] = []
    count_error = validate_qubit_count(qubit_count)
    if count_error is not None:
        errors.append(count_error)
    for i, gate in enumerate(circuit):
        error = validate_gate(gate, qubit_count, i)
        if error is not None:
            errors.append(error)
    return errors


def is_circuit_valid(circuit: Sequence[Gate], qubit_count: Any) -> bool:
    return not validate_circuit(circuit, qubit_count)
