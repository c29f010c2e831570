"""Tests for editor state and edit commands."""

import numpy as np
import pytest

from quantum_start import editor
from quantum_start.circuit import single_qubit_gate, two_qubit_gate
from quantum_start.core.statevector import get_probabilities, initial_state
from quantum_start.editor import EditorState


@pytest.fixture
def bell_state():
    state = EditorState()
    state = editor.add_gate(state, single_qubit_gate("H", 0))
    return editor.add_gate(state, two_qubit_gate("CNOT", 0, 1))


# ---------------------------------------------------------------------------
# Edit commands
# ---------------------------------------------------------------------------

class TestEditCommands:

    def test_defaults(self):
        state = EditorState()
        assert state.qubit_count == 2
        assert state.circuit == ()
        assert state.step_index == -1

    def test_add_gate_appends(self, bell_state):
        assert [g.type for g in bell_state.circuit] == ["H", "CNOT"]

    def test_add_invalid_gate_is_rejected(self):
        state = EditorState()
        assert editor.add_gate(state, single_qubit_gate("X", 2)) is state
        assert editor.add_gate(state, two_qubit_gate("CZ", 1, 1)) is state

    def test_commands_do_not_mutate(self, bell_state):
        before = bell_state.to_dict()
        editor.add_gate(bell_state, single_qubit_gate("Z", 1))
        editor.remove_gate(bell_state, 0)
        editor.move_gate(bell_state, 0, 1)
        editor.clear_circuit(bell_state)
        editor.set_qubit_count(bell_state, 5)
        editor.go_next(bell_state)
        assert bell_state.to_dict() == before

    def test_edits_reset_step(self, bell_state):
        state = editor.go_to_end(bell_state)
        assert editor.add_gate(state, single_qubit_gate("Z", 1)).step_index == -1
        assert editor.remove_gate(state, 1).step_index == -1
        assert editor.clear_circuit(state).step_index == -1

    def test_remove_gate(self, bell_state):
        state = editor.remove_gate(bell_state, 0)
        assert [g.type for g in state.circuit] == ["CNOT"]

    def test_remove_out_of_range_is_noop(self, bell_state):
        assert editor.remove_gate(bell_state, 7) is bell_state

    def test_move_gate(self, bell_state):
        state = editor.move_gate(bell_state, 1, 0)
        assert [g.type for g in state.circuit] == ["CNOT", "H"]

    def test_move_gate_clamps_destination(self, bell_state):
        state = editor.move_gate(bell_state, 0, 99)
        assert [g.type for g in state.circuit] == ["CNOT", "H"]

    def test_set_qubit_count_drops_gates(self):
        state = EditorState(qubit_count=3)
        state = editor.add_gate(state, single_qubit_gate("H", 0))
        state = editor.add_gate(state, two_qubit_gate("CNOT", 0, 2))
        state = editor.add_gate(state, single_qubit_gate("X", 1))
        smaller = editor.set_qubit_count(state, 2)
        assert smaller.qubit_count == 2
        assert [str(g) for g in smaller.circuit] == ["H(0)", "X(1)"]

    @pytest.mark.parametrize("n,expected", [(1, 2), (9, 8), (5, 5)])
    def test_set_qubit_count_clamps(self, n, expected):
        assert editor.set_qubit_count(EditorState(), n).qubit_count == expected

    def test_clear(self, bell_state):
        assert editor.clear_circuit(bell_state).circuit == ()


# ---------------------------------------------------------------------------
# Step navigation
# ---------------------------------------------------------------------------

class TestNavigation:

    def test_walk_forward_and_back(self, bell_state):
        state = bell_state
        assert editor.is_at_start(state)
        assert editor.can_go_next(state)
        assert not editor.can_go_prev(state)

        state = editor.go_next(editor.go_next(state))
        assert state.step_index == 1
        assert editor.is_at_end(state)
        assert not editor.can_go_next(state)

        state = editor.go_next(state)
        assert state.step_index == 1

        state = editor.go_prev(editor.go_prev(editor.go_prev(state)))
        assert state.step_index == -1

    def test_start_and_end(self, bell_state):
        assert editor.go_to_end(bell_state).step_index == 1
        assert editor.go_to_start(editor.go_to_end(bell_state)).step_index == -1

    @pytest.mark.parametrize("step,expected", [(-4, -1), (0, 0), (10, 1)])
    def test_go_to_step_clamps(self, bell_state, step, expected):
        assert editor.go_to_step(bell_state, step).step_index == expected

    def test_empty_circuit(self):
        state = EditorState()
        assert editor.go_to_end(state).step_index == -1
        assert not editor.can_go_next(state)
        assert not editor.is_at_end(state)


# ---------------------------------------------------------------------------
# Derived values and serialization
# ---------------------------------------------------------------------------

def test_current_state_follows_step(bell_state):
    np.testing.assert_array_equal(editor.current_state(bell_state), initial_state(2))
    probs = get_probabilities(editor.current_state(editor.go_to_end(bell_state)))
    np.testing.assert_allclose(probs, [0.5, 0, 0, 0.5], atol=1e-12)


def test_validation_helpers(bell_state):
    assert editor.is_valid(bell_state)
    broken = EditorState(qubit_count=2, circuit=(single_qubit_gate("H", 4),))
    assert [e.kind for e in editor.validation_errors(broken)] == ["gate_target"]


class TestSerialization:

    def test_round_trip(self, bell_state):
        state = editor.go_next(bell_state)
        assert EditorState.from_dict(state.to_dict()) == state

    def test_missing_keys_use_defaults(self):
        assert EditorState.from_dict({}) == EditorState()

    def test_stale_step_is_clamped(self, bell_state):
        data = bell_state.to_dict()
        data["step_index"] = 12
        assert EditorState.from_dict(data).step_index == 1

    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            EditorState.from_dict([1, 2])


@pytest.mark.parametrize("data", [
    {"qubit_count": 20},
    {"qubit_count": 1},
    {"qubit_count": 2.9},
    {"qubit_count": True},
    {"qubit_count": "3"},
    {"step_index": True},
    {"step_index": 0.5},
])
def test_from_dict_rejects_bad_values(data):
    with pytest.raises(ValueError):
        EditorState.from_dict(data)


def test_from_dict_keeps_qubit_range_for_later_edits():
    state = EditorState.from_dict({"qubit_count": 8})
    assert editor.add_gate(state, single_qubit_gate("H", 15)) is state
    assert len(editor.current_state(state)) == 256
