import pytest

from permgame.assembler import assemble
from permgame.errors import InvalidMoveError, PolicyViolation
from permgame.game import PuzzleState
from permgame.models import Move, PuzzleConfig
from permgame.operations import identity_permutation


def authoring_config(**flags) -> PuzzleConfig:
    """Free-authoring 4-position puzzle with the given policy flags."""
    return PuzzleConfig(length=4, initial_permutation=identity_permutation(4), **flags)


def test_initial_state(swap_and_rotate):
    state = PuzzleState(swap_and_rotate)
    assert state.snapshot_arrangement() == (1, 0, 2, 3)
    assert state.move_count == 0
    assert state.history == []
    assert not state.is_solved()


def test_apply_move_rotates_items(swap_and_rotate):
    state = PuzzleState(swap_and_rotate)
    state.apply_move(0)
    # item at 0 goes to 1, 1 to 2, 2 to 3, 3 to 0
    assert state.snapshot_arrangement() == (3, 1, 0, 2)
    assert state.move_count == 1
    assert state.history == [0]


@pytest.mark.parametrize("index", [1, 5, -1, "0", None, True])
def test_invalid_move_leaves_state_unchanged(swap_and_rotate, index):
    state = PuzzleState(swap_and_rotate)
    state.apply_move(0)
    before = state.snapshot_arrangement()
    with pytest.raises(InvalidMoveError):
        state.apply_move(index)
    assert state.snapshot_arrangement() == before
    assert state.move_count == 1


def test_apply_sequence_is_atomic(swap_and_rotate):
    state = PuzzleState(swap_and_rotate)
    before = state.snapshot_arrangement()
    with pytest.raises(InvalidMoveError):
        state.apply_sequence([0, 0, 3])
    assert state.snapshot_arrangement() == before
    assert state.history == []


def test_reaching_goal_solves():
    config = assemble({"length": 3, "initialItems": ["(0,1,2)"], "generatingSet": ["(0,1,2)"]})
    state = PuzzleState(config)
    state.apply_sequence([0, 0])
    assert state.is_solved()


def test_is_solved_is_pure(swap_and_rotate):
    state = PuzzleState(swap_and_rotate)
    snapshot = state.snapshot_arrangement()
    results = {state.is_solved() for _ in range(5)}
    assert len(results) == 1
    assert state.snapshot_arrangement() == snapshot


def test_custom_goal():
    config = assemble({"length": 3, "goal": ["(0,2)"], "generatingSet": ["(0,2)"]})
    state = PuzzleState(config)
    assert not state.is_solved()
    state.apply_move(0)
    assert state.is_solved()


def test_snapshot_is_read_only_copy(swap_and_rotate):
    state = PuzzleState(swap_and_rotate)
    snap = state.snapshot_arrangement()
    assert isinstance(snap, tuple)
    state.apply_move(0)
    assert snap == (1, 0, 2, 3)


def test_reset_gives_fresh_state(swap_and_rotate):
    state = PuzzleState(swap_and_rotate)
    state.apply_sequence([0, 0, 0])
    fresh = state.reset()
    assert fresh is not state
    assert fresh.snapshot_arrangement() == (1, 0, 2, 3)
    assert fresh.move_count == 0


def test_authoring_blocked_when_generating_set_present(swap_and_rotate):
    state = PuzzleState(swap_and_rotate)
    with pytest.raises(PolicyViolation):
        state.add_move("(0,1)")
    with pytest.raises(PolicyViolation):
        state.rearrange(0, 1)
    assert len(state.moves) == 1


@pytest.mark.parametrize("action", ["remove_move", "duplicate_move", "invert_move"])
def test_assembled_levels_forbid_move_mutation(swap_and_rotate, action):
    state = PuzzleState(swap_and_rotate)
    with pytest.raises(PolicyViolation):
        getattr(state, action)(0)
    assert len(state.moves) == 1


def test_add_move_in_free_mode():
    state = PuzzleState(authoring_config())
    move = state.add_move("(0 3)")
    assert move == Move(name="(0,3)", permutation=(3, 1, 2, 0))
    explicit = state.add_move([1, 0, 2, 3], name="swap")
    assert explicit.name == "swap"
    state.apply_sequence([0, 1])
    assert state.snapshot_arrangement() == (1, 3, 2, 0)
    assert state.move_count == 2


@pytest.mark.parametrize("bad", ["(0,1)(1,2)", "(0,9)", [0, 0, 1, 2], [0, 1, 2]])
def test_add_move_rejects_invalid_permutations(bad):
    state = PuzzleState(authoring_config())
    with pytest.raises(InvalidMoveError):
        state.add_move(bad)
    assert state.moves == []


def test_remove_duplicate_invert_when_allowed():
    state = PuzzleState(
        authoring_config(allowed_deletion=True, allowed_duplication=True, allowed_inversion=True)
    )
    state.add_move("(0,1,2)")
    inverse = state.invert_move(0)
    assert inverse.name == "(0,1,2)'"
    assert inverse.permutation == (2, 0, 1, 3)
    state.apply_sequence([0, 1])
    assert state.is_solved()

    state.duplicate_move(1)
    assert len(state.moves) == 3
    removed = state.remove_move(0)
    assert removed.name == "(0,1,2)"
    assert [m.name for m in state.moves] == ["(0,1,2)'", "(0,1,2)'"]


def test_policy_checked_before_index():
    state = PuzzleState(authoring_config())
    with pytest.raises(PolicyViolation):
        state.remove_move(42)


def test_allowed_action_with_bad_index():
    state = PuzzleState(authoring_config(allowed_inversion=True))
    with pytest.raises(InvalidMoveError):
        state.invert_move(0)


def test_rearrange_in_free_mode():
    state = PuzzleState(authoring_config())
    state.rearrange(0, 3)
    assert state.snapshot_arrangement() == (3, 1, 2, 0)
    with pytest.raises(InvalidMoveError):
        state.rearrange(0, 4)
    assert state.snapshot_arrangement() == (3, 1, 2, 0)


def test_applied_moves_survive_removal():
    state = PuzzleState(authoring_config(allowed_deletion=True))
    state.add_move("(0,1)")
    state.add_move("(2,3)")
    state.apply_sequence([1, 0])
    state.remove_move(0)
    assert state.history == [1, 0]
    assert [m.name for m in state.applied_moves] == ["(2,3)", "(0,1)"]
    assert [m.name for m in state.moves] == ["(2,3)"]
