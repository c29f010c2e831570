"""
Circuit representation.

A circuit is an ordered, immutable sequence of :class:`Gate` records. Order
is execution order. Circuits carry no simulation state; they are snapshots
handed to the pure functions in :mod:`quantum_start.core`.

Example
-------
>>> from quantum_start.circuit import single_qubit_gate, two_qubit_gate
>>> bell = (single_qubit_gate("H", 0), two_qubit_gate("CNOT", 0, 1))
>>> circuit_to_list(bell)
[{'type': 'H', 'targets': [0]}, {'type': 'CNOT', 'targets': [1], 'control': 0}]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

MIN_QUBITS = 2
MAX_QUBITS = 8

SINGLE_QUBIT_GATE_TYPES: Tuple[str, ...] = ("H", "X", "Y", "Z", "S", "T")
TWO_QUBIT_GATE_TYPES: Tuple[str, ...] = ("CNOT", "CZ")
GATE_TYPES: Tuple[str, ...] = SINGLE_QUBIT_GATE_TYPES + TWO_QUBIT_GATE_TYPES


def is_two_qubit_gate(gate_type: str) -> bool:
    return gate_type in TWO_QUBIT_GATE_TYPES


# ---------------------------------------------------------------------------
# Gate: a single record in the circuit
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Gate:
    """
    A gate applied to specific qubits.

    Attributes
    ----------
    type : str
        Gate tag, one of GATE_TYPES for gates the engine understands.
    targets : tuple of int
        Target qubit indices. Every supported gate uses only ``targets[0]``.
    control : int, optional
        Control qubit for CNOT/CZ; ``None`` for single-qubit gates.
    """
    type: str
    targets: Tuple[int, ...]
    control: Optional[int] = None

    @property
    def qubits(self) -> Tuple[int, ...]:
        """All referenced qubit indices, targets first."""
        if self.control is None:
            return self.targets
        return self.targets + (self.control,)

    @property
    def is_two_qubit(self) -> bool:
        return is_two_qubit_gate(self.type)

    def __str__(self) -> str:
        if self.control is not None:
            return f"{self.type}({self.control}→{','.join(map(str, self.targets))})"
        return f"{self.type}({','.join(map(str, self.targets))})"


Circuit = Tuple[Gate, ...]


def single_qubit_gate(gate_type: str, target: int) -> Gate:
    """Build a single-qubit gate record."""
    return Gate(type=gate_type, targets=(target,))


def two_qubit_gate(gate_type: str, control: int, target: int) -> Gate:
    """Build a two-qubit gate record with control and target in their own fields."""
    return Gate(type=gate_type, targets=(target,), control=control)


# -- Serialization ----------------------------------------------------------

def gate_to_dict(gate: Gate) -> dict[str, Any]:
    data: dict[str, Any] = {"type": gate.type, "targets": list(gate.targets)}
    if gate.control is not None:
        data["control"] = gate.control
    return data


def gate_from_dict(data: dict[str, Any]) -> Gate:
    """
    Build a Gate from its JSON form.

    Indices are kept as given so that out-of-range or non-integer values
    reach the validator instead of being rejected here.

    Raises
    ------
    ValueError
        If the record is not a mapping, lacks ``type`` or ``targets``, or
        names a gate type outside GATE_TYPES.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Gate record must be an object, got {type(data).__name__}")
    try:
        gate_type = data["type"]
        targets = data["targets"]
    except KeyError as exc:
        raise ValueError(f"Gate record is missing {exc.args[0]!r}") from None
    if not isinstance(gate_type, str):
        raise ValueError(f"Gate type must be a string, got {gate_type!r}")
    gate_type = gate_type.upper()
    if gate_type not in GATE_TYPES:
        raise ValueError(
            f"Unknown gate type {gate_type!r}; expected one of {', '.join(GATE_TYPES)}"
        )
    if not isinstance(targets, (list, tuple)):
        raise ValueError(f"Gate targets must be a list, got {targets!r}")
    return Gate(type=gate_type, targets=tuple(targets), control=data.get("control"))


def circuit_to_list(circuit: Iterable[Gate]) -> list[dict[str, Any]]:
    return [gate_to_dict(gate) for gate in circuit]


def circuit_from_list(data: Iterable[dict[str, Any]]) -> Circuit:
    return tuple(gate_from_dict(item) for item in data)
