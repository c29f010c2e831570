"""
Text visualization of circuits and states.

Features:
- ASCII circuit diagrams
- State listing with probability bars and phases
- Bloch vector summary for one qubit
"""
from typing import List, Sequence

import numpy as np

from quantum_start.circuit import Gate
from quantum_start.core.bloch import BlochVector
from quantum_start.core.statevector import get_probabilities, num_qubits


class CircuitDrawer:
    """
    Draw circuits as ASCII art, one column per gate.

    Example output:
        q0: ─[H]───●────
        q1: ───────⊕────
    """

    def __init__(self, qubit_count: int):
        self.qubit_count = qubit_count
        self.columns: List[List[str]] = []

    def add_single_gate(self, gate: str, qubit: int) -> None:
        col = ['─'] * self.qubit_count
        col[qubit] = f'[{gate}]'
        self.columns.append(col)

    def add_controlled(self, control: int, target: int, target_symbol: str) -> None:
        """Add a controlled gate with a vertical wire between the two qubits."""
        col = ['│' if min(control, target) < i < max(control, target) else '─'
               for i in range(self.qubit_count)]
        col[control] = '●'
        col[target] = target_symbol
        self.columns.append(col)

    def add_gate(self, gate: Gate) -> None:
        if gate.type == 'CNOT' and gate.control is not None:
            self.add_controlled(gate.control, gate.targets[0], '⊕')
        elif gate.type == 'CZ' and gate.control is not None:
            self.add_controlled(gate.control, gate.targets[0], '●')
        else:
            self.add_single_gate(gate.type, gate.targets[0])

    def draw(self) -> str:
        if not self.columns:
            return "Empty circuit"

        lines = []
        for q in range(self.qubit_count):
            line = f'q{q}: '
            for col in self.columns:
                cell = col[q]
                if cell == '─':
                    line += '─────'
                elif cell == '│':
                    line += '──│──'
                elif cell.startswith('['):
                    line += cell.center(5, '─')
                else:
                    line += f'──{cell}──'
            line += '──'
            lines.append(line)
        return '\n'.join(lines)


class StateVisualizer:
    """Text rendering of state vectors."""

    @staticmethod
    def amplitudes_ascii(state: np.ndarray, threshold: float = 0.01) -> str:
        """Basis states with probability above ``threshold``, as a bar chart."""
        n = num_qubits(state)
        probs = get_probabilities(state)

        lines = ["State Vector:", "─" * 60]
        for i, amp in enumerate(state):
            prob = probs[i]
            if prob < threshold:
                continue

            bitstring = format(i, f'0{n}b')
            phase = np.angle(amp)
            if abs(phase) < 0.01:
                phase_str = ''
            elif abs(abs(phase) - np.pi) < 0.01:
                phase_str = ' (π)'
            else:
                phase_str = f' ({phase:.2f})'

            bar = '█' * int(prob * 30)
            lines.append(f"|{bitstring}⟩: {bar:30s} {abs(amp):.3f}{phase_str} ({prob*100:.1f}%)")
        return '\n'.join(lines)

    @staticmethod
    def probabilities_ascii(state: np.ndarray) -> str:
        """Every basis state with its probability, in index order."""
        n = num_qubits(state)
        lines = ["Probabilities:", "─" * 60]
        for i, prob in enumerate(get_probabilities(state)):
            bar = '█' * int(prob * 30)
            lines.append(f"|{format(i, f'0{n}b')}⟩: {bar:30s} {prob*100:5.1f}%")
        return '\n'.join(lines)


class BlochSummary:
    """Text summary of a single-qubit Bloch vector."""

    @staticmethod
    def ascii_bloch(qubit: int, vector: BlochVector) -> str:
        theta, phi = vector.angles()
        purity = "pure" if vector.is_pure else "mixed (entangled)"
        return '\n'.join([
            f"Qubit {qubit}:",
            f"  Coordinates: x={vector.x:+.3f}, y={vector.y:+.3f}, z={vector.z:+.3f}",
            f"  Angles: θ={theta:.3f} rad, φ={phi:.3f} rad",
            f"  Length: {vector.length:.3f} ({purity})",
        ])


# Convenience functions
def draw_circuit(circuit: Sequence[Gate], qubit_count: int) -> str:
    """Draw a circuit as ASCII."""
    drawer = CircuitDrawer(qubit_count)
    for gate in circuit:
        drawer.add_gate(gate)
    return drawer.draw()


def show_state(state: np.ndarray, threshold: float = 0.01) -> str:
    return StateVisualizer.amplitudes_ascii(state, threshold)


def show_probabilities(state: np.ndarray) -> str:
    return StateVisualizer.probabilities_ascii(state)


def show_bloch(qubit: int, vector: BlochVector) -> str:
    return BlochSummary.ascii_bloch(qubit, vector)
