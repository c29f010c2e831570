"""
Command-line interface for quantum-start.

Gates are written as TYPE:QUBITS tokens; two-qubit gates list control first.

Usage:
    quantum-start run H:0 CNOT:0,1
    quantum-start run X:0 CNOT:0,1 -n 3 --step 0
    quantum-start steps H:0 CNOT:0,1
    quantum-start validate H:5 CNOT:0,0
    quantum-start serve --port 8888
"""
import argparse
import logging
import sys

from quantum_start.circuit import (
    GATE_TYPES,
    MAX_QUBITS,
    MIN_QUBITS,
    Gate,
    is_two_qubit_gate,
    single_qubit_gate,
    two_qubit_gate,
)

logger = logging.getLogger(__name__)


def parse_gate(token: str) -> Gate:
    """
    Parse ``H:0`` or ``CNOT:0,1`` (control, target) into a Gate.

    Qubit indices are not range-checked here; the validator reports them.
    """
    name, sep, qubits = token.partition(':')
    name = name.strip().upper()
    if not sep or name not in GATE_TYPES:
        raise argparse.ArgumentTypeError(
            f"invalid gate {token!r}; expected TYPE:QUBITS with TYPE in {', '.join(GATE_TYPES)}"
        )
    try:
        indices = [int(q) for q in qubits.split(',')]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid qubit list in {token!r}") from None

    if is_two_qubit_gate(name):
        if len(indices) != 2:
            raise argparse.ArgumentTypeError(f"{name} needs control,target in {token!r}")
        return two_qubit_gate(name, indices[0], indices[1])
    if len(indices) != 1:
        raise argparse.ArgumentTypeError(f"{name} takes one qubit in {token!r}")
    return single_qubit_gate(name, indices[0])


def _check_circuit(circuit, n_qubits) -> bool:
    from quantum_start.validation import validate_circuit

    errors = validate_circuit(circuit, n_qubits)
    for error in errors:
        print(f"error [{error.kind}]: {error.message}", file=sys.stderr)
    return not errors


def cmd_run(args):
    """Replay a circuit to one step and show the state."""
    from quantum_start.core import get_state_after_step, state_to_bloch_vector, to_ket_string
    from quantum_start.visualization import draw_circuit, show_bloch, show_probabilities

    circuit = tuple(args.gates)
    if not _check_circuit(circuit, args.qubits):
        return 1

    step = len(circuit) - 1 if args.step is None else args.step
    state = get_state_after_step(circuit, args.qubits, step)

    print(draw_circuit(circuit, args.qubits))
    print()
    print(f"State after step {step}: {to_ket_string(state)}")
    print()
    print(show_probabilities(state))
    print()
    for q in range(args.qubits):
        print(show_bloch(q, state_to_bloch_vector(state, args.qubits, q)))
    return 0


def cmd_steps(args):
    """Show the state after every step."""
    from quantum_start.core import get_all_steps, get_probabilities, to_ket_string

    circuit = tuple(args.gates)
    if not _check_circuit(circuit, args.qubits):
        return 1

    for i, state in enumerate(get_all_steps(circuit, args.qubits)):
        label = "initial" if i == 0 else str(circuit[i - 1])
        probs = ' '.join(f"{p:.3f}" for p in get_probabilities(state))
        print(f"{i - 1:>3}  {label:<12} {to_ket_string(state)}")
        print(f"     probabilities: {probs}")
    return 0


def cmd_validate(args):
    """Print every validation error."""
    if _check_circuit(tuple(args.gates), args.qubits):
        print("Circuit is valid.")
        return 0
    return 1


def cmd_serve(args):
    """Launch the dashboard API."""
    from quantum_start.dashboard import launch

    launch(port=args.port, host=args.host, debug=args.debug)
    return 0


def cmd_info(args):
    """Show quantum-start information."""
    from quantum_start import __version__

    print(f"""
quantum-start v{__version__}
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Step-by-step state-vector simulator for small circuits.

Qubits: {MIN_QUBITS} to {MAX_QUBITS}
Gates:  {', '.join(GATE_TYPES)}

Usage:
  quantum-start run H:0 CNOT:0,1
  quantum-start steps X:0 CNOT:0,1
  quantum-start validate CNOT:0,0
  quantum-start serve
""")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='quantum-start',
        description='Step-by-step quantum circuit simulator'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    def add_circuit_args(sub):
        sub.add_argument('gates', nargs='*', type=parse_gate, metavar='GATE',
                         help='Gates such as H:0 or CNOT:0,1 (control,target)')
        sub.add_argument('-n', '--qubits', type=int, default=MIN_QUBITS,
                         help=f'Number of qubits (default {MIN_QUBITS})')

    run_parser = subparsers.add_parser('run', help='Show the state at one step')
    add_circuit_args(run_parser)
    run_parser.add_argument('--step', type=int, default=None,
                            help='Step index (-1 = initial state, default: last gate)')
    run_parser.set_defaults(func=cmd_run)

    steps_parser = subparsers.add_parser('steps', help='Show the state after every gate')
    add_circuit_args(steps_parser)
    steps_parser.set_defaults(func=cmd_steps)

    validate_parser = subparsers.add_parser('validate', help='Validate a circuit')
    add_circuit_args(validate_parser)
    validate_parser.set_defaults(func=cmd_validate)

    serve_parser = subparsers.add_parser('serve', help='Run the dashboard API')
    serve_parser.add_argument('--port', type=int, default=8888)
    serve_parser.add_argument('--host', type=str, default='127.0.0.1')
    serve_parser.add_argument('--debug', action='store_true')
    serve_parser.set_defaults(func=cmd_serve)

    info_parser = subparsers.add_parser('info', help='Show quantum-start info')
    info_parser.set_defaults(func=cmd_info)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
