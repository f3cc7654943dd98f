"""Tests for engine/session.py, observing the Qt signals with plain callables."""

import pytest

from krossplay.engine.session import SessionController
from krossplay.models.krossword import Direction


@pytest.fixture
def session(ikea_puzzle):
    controller = SessionController(ikea_puzzle)
    controller.start()
    return controller


@pytest.fixture
def recorder(session):
    events = []
    session.selection_changed.connect(lambda row, col: events.append(("selection", (row, col))))
    session.value_changed.connect(lambda: events.append(("value", None)))
    session.puzzle_completed.connect(lambda: events.append(("completed", None)))
    session.answers_checked.connect(lambda ok: events.append(("checked", ok)))
    return events


def _count(events, kind):
    return sum(1 for name, _ in events if name == kind)


def _solve_ikea(session):
    session.update_cell((1, 0), "I")
    for letter in "KEA":
        session.type_letter(letter)
    for letter in "SAL":
        session.type_letter(letter)


class TestStart:
    def test_selects_first_active_cell(self, session):
        snapshot = session.snapshot()
        assert snapshot.selection.cell_id == (0, 1)
        assert snapshot.selection.direction is Direction.DOWN
        assert not snapshot.complete

    def test_input_before_start_is_ignored(self, ikea_puzzle):
        controller = SessionController(ikea_puzzle)
        controller.update_cell((1, 0), "I")
        assert controller.state.grid.cell(1, 0).value == ""
        assert controller.check_answers() is False

    def test_start_emits_selection(self, ikea_puzzle):
        controller = SessionController(ikea_puzzle)
        seen = []
        controller.selection_changed.connect(lambda row, col: seen.append((row, col)))
        controller.start()
        assert seen == [(0, 1)]


class TestPlayThrough:
    def test_full_solve(self, session, recorder):
        session.update_cell((1, 0), "I")
        assert session.snapshot().selection.cell_id == (1, 1)
        for letter in "KEA":
            session.type_letter(letter)
        # IKEA solved, jump to the first open cell of SKAL
        selection = session.snapshot().selection
        assert selection.cell_id == (0, 1)
        assert selection.clue.solution == "SKAL"

        session.type_letter("S")
        # the K is already correct and gets skipped
        assert session.snapshot().selection.cell_id == (2, 1)
        session.type_letter("A")
        session.type_letter("L")

        assert session.is_complete
        assert session.snapshot().complete
        assert _count(recorder, "completed") == 1

    def test_completion_fires_once(self, session, recorder):
        _solve_ikea(session)
        session.check_answers()
        session.type_letter("L")
        assert _count(recorder, "completed") == 1
        assert ("checked", True) in recorder

    def test_reset_rearms_completion(self, session, recorder):
        _solve_ikea(session)
        session.reset()
        snapshot = session.snapshot()
        assert not snapshot.complete
        assert all(cell.value == "" for cell in snapshot.cells)
        _solve_ikea(session)
        assert _count(recorder, "completed") == 2

    def test_value_changed_on_entry(self, session, recorder):
        session.update_cell((1, 0), "Z")
        assert _count(recorder, "value") == 1
        assert ("selection", (1, 1)) in recorder


class TestUpdateCell:
    def test_non_letter_is_ignored(self, session, recorder):
        session.update_cell((1, 0), "7")
        assert session.state.grid.cell(1, 0).value == ""
        assert _count(recorder, "value") == 0
        # the click still moves the selection
        assert session.snapshot().selection.cell_id == (1, 0)

    def test_uses_last_character(self, session):
        session.update_cell((1, 0), "xi")
        assert session.state.grid.cell(1, 0).value == "I"

    def test_empty_string_clears(self, session):
        session.update_cell((1, 0), "Z")
        session.update_cell((1, 0), "")
        assert session.state.grid.cell(1, 0).value == ""
        assert session.snapshot().selection.cell_id == (1, 0)

    def test_blocked_cell_is_ignored(self, session, recorder):
        session.update_cell((4, 4), "A")
        assert recorder == []
        assert session.snapshot().selection.cell_id == (0, 1)

    def test_lowercase_is_stored_uppercase(self, session):
        session.update_cell((1, 0), "i")
        assert session.state.grid.cell(1, 0).value == "I"

    @pytest.mark.parametrize("char", ["\u00df", "\ufb01"])
    def test_letter_that_uppercases_to_two_is_ignored(self, session, recorder, char):
        session.update_cell((1, 0), char)
        assert session.state.grid.cell(1, 0).value == ""
        assert _count(recorder, "value") == 0

    def test_key_that_uppercases_to_two_is_ignored(self, session):
        session.select_cell((1, 0))
        session.handle_key("\u00df")
        assert session.state.grid.cell(1, 0).value == ""
        assert session.snapshot().selection.cell_id == (1, 0)


class TestCheckAnswers:
    def test_errors_hidden_until_checked(self, session):
        session.update_cell((1, 0), "Z")
        assert session.snapshot().errors == frozenset()
        assert session.check_answers() is False
        assert session.snapshot().errors == {(1, 0)}

    def test_check_emits_result(self, session, recorder):
        session.check_answers()
        assert recorder[-1] == ("checked", False)

    def test_check_without_error_display(self, session, recorder):
        session.update_cell((1, 0), "Z")
        assert session.check_answers(show_errors=False) is False
        assert session.snapshot().errors == frozenset()
        assert recorder[-1] == ("checked", False)

    def test_correct_cells_always_listed(self, session):
        session.update_cell((1, 0), "I")
        session.update_cell((1, 2), "Z")
        assert session.snapshot().correct == {(1, 0)}

    def test_restart_hides_errors(self, session):
        session.update_cell((1, 0), "Z")
        session.check_answers()
        session.reset()
        assert session.snapshot().errors == frozenset()


class TestHandleKey:
    def test_arrows(self, session):
        session.handle_key("ArrowDown")
        assert session.snapshot().selection.cell_id == (1, 1)
        session.handle_key("ArrowLeft")
        assert session.snapshot().selection.cell_id == (1, 0)

    def test_letters_and_backspace(self, session):
        session.select_cell((1, 0))
        session.handle_key("I")
        assert session.state.grid.cell(1, 0).value == "I"
        session.handle_key("Backspace")
        assert session.snapshot().selection.cell_id == (1, 0)
        session.handle_key("Delete")
        assert session.state.grid.cell(1, 0).value == ""

    def test_space_toggles_direction(self, session, recorder):
        session.select_cell((1, 1))
        recorder.clear()
        session.handle_key(" ")
        assert session.snapshot().selection.direction is Direction.ACROSS
        assert recorder == [("selection", (1, 1))]

    def test_tab_cycles_clues(self, session):
        session.handle_key("Tab")
        assert session.snapshot().selection.clue.solution == "IKEA"
        session.handle_key("Shift+Tab")
        assert session.snapshot().selection.clue.solution == "SKAL"

    def test_unknown_key_is_ignored(self, session, recorder):
        session.handle_key("F5")
        assert recorder == []


class TestLoadPuzzle:
    def test_switches_puzzle(self, session, cat_puzzle):
        session.update_cell((1, 0), "I")
        session.load_puzzle(cat_puzzle)
        snapshot = session.snapshot()
        assert len(snapshot.cells) == 9
        assert snapshot.selection.cell_id == (0, 0)
        assert snapshot.selection.clue.solution == "CAT"
