"""Example: step through a Bell pair with quantum-start."""
import sys
sys.path.insert(0, 'src')

from quantum_start import (
    draw_circuit,
    get_all_steps,
    get_probabilities,
    single_qubit_gate,
    state_to_bloch_vector,
    to_ket_string,
    two_qubit_gate,
)

print("=" * 50)
print("quantum-start: Bell State Example")
print("=" * 50)

circuit = (single_qubit_gate("H", 0), two_qubit_gate("CNOT", 0, 1))
print()
print(draw_circuit(circuit, 2))

for step, state in enumerate(get_all_steps(circuit, 2), start=-1):
    print(f"\nStep {step:>2}: {to_ket_string(state)}")
    for i, p in enumerate(get_probabilities(state)):
        print(f"  |{i:02b}⟩: {p*100:5.1f}%")
    for q in range(2):
        b = state_to_bloch_vector(state, 2, q)
        print(f"  qubit {q}: length {b.length:.3f} ({'pure' if b.is_pure else 'mixed'})")

print("\nExpected: 50% |00⟩ and 50% |11⟩, both Bloch vectors shrink to 0 (entangled!)")
