import pytest

from tetris_config import COLS, ROWS
from tetris_game import Action, State, TetrisGame
from tests.helpers import block_spawn, fill_row, make_game


def cells(board):
    return sum(1 for r in board for v in r if v)


def test_idle_until_started():
    game = TetrisGame(seed=3)
    assert game.state is State.IDLE
    game.move_left()
    game.update(5000)
    snap = game.snapshot()
    assert snap.current_piece is None
    assert not snap.paused and not snap.game_over


def test_start_initializes_session():
    game = make_game(["T", "I"], speed_factor=2.0)
    assert game.state is State.PLAYING
    assert (game.score, game.level, game.lines) == (0, 1, 0)
    assert game.interval == pytest.approx(400)
    assert game.current.kind.name == "T"
    assert game.next.kind.name == "I"
    assert (game.current.x, game.current.y) == (4, 0)


def test_o_piece_rests_after_18_drops_and_locks_on_the_19th():
    # a 2-high piece spawned at y=0 needs 18 moves to bring its bottom row to
    # row 19; the 19th move_down is the one that locks
    game = make_game(["O"])
    for _ in range(18):
        game.move_down()
    assert game.current.y == 18
    assert game.current.y + 1 == ROWS - 1  # bottom row resting on row 19
    assert cells(game.board) == 0

    game.move_down()
    assert cells(game.board) == 4
    assert game.board[19][4] == game.board[18][5] == 4
    assert game.score == 0 and game.lines == 0
    assert (game.current.x, game.current.y) == (4, 0)
    assert game.state is State.PLAYING


def test_blocked_horizontal_moves_keep_x():
    game = make_game(["O"])
    for _ in range(10):
        game.move_left()
    assert game.current.x == 0
    game.move_left()
    assert game.current.x == 0

    game.board[1][2] = 1
    game.move_right()
    game.move_right()
    assert game.current.x == 0


def test_right_wall():
    game = make_game(["O"])
    for _ in range(20):
        game.move_right()
    assert game.current.x == COLS - 2


def test_rotation_rejected_when_blocked():
    game = make_game(["T"])
    # clockwise T fills (5,2); block it
    game.board[2][5] = 3
    before = [r[:] for r in game.current.shape]
    game.rotate()
    assert game.current.shape == before
    game.board[2][5] = 0
    game.rotate()
    assert game.current.shape != before


def play_until_lock(game):
    # every lock draws exactly one new piece from the generator
    draws = game.generator.rng.calls
    while game.generator.rng.calls == draws:
        game.move_down()


def test_hard_drop_matches_soft_drops():
    seq = ["L", "S", "I", "Z"]
    a, b = make_game(seq), make_game(seq)
    for g in (a, b):
        fill_row(g.board, 19, value=2, holes=[3, 4])
        fill_row(g.board, 18, value=5, holes=[1, 3, 4, 5])
        g.move_left()
        g.rotate()
    a.hard_drop()
    play_until_lock(b)
    assert a.board == b.board
    assert (a.score, a.lines, a.level) == (b.score, b.lines, b.level)
    assert a.current.kind is b.current.kind


def test_hard_drop_is_one_action():
    game = make_game(["I", "O"])
    game.hard_drop()
    assert game.board[19][4:8] == [1, 1, 1, 1]
    assert game.current.kind.name == "O"


def test_two_lines_at_level_three():
    game = make_game(["O"])
    game.level, game.lines = 3, 20
    game.scheduler.level = 3
    fill_row(game.board, 19, holes=[4, 5])
    fill_row(game.board, 18, holes=[4, 5])
    game.hard_drop()
    assert game.score == 900
    assert game.lines == 22
    assert game.level == 3
    assert cells(game.board) == 0


def test_level_up_event_and_interval():
    game = make_game(["O"], speed_factor=1.0)
    seen = []
    game.on_level_up(seen.append)
    game.lines = 9
    fill_row(game.board, 19, holes=[4, 5])
    game.hard_drop()
    assert game.level == 2 == game.lines // 10 + 1
    assert seen == [2]
    assert game.interval == pytest.approx(750)


def test_level_invariant_over_many_locks():
    game = TetrisGame(seed=11)
    game.start()
    for _ in range(200):
        if game.state is State.GAME_OVER:
            break
        game.hard_drop()
        assert game.level == game.lines // 10 + 1


def test_spawn_collision_ends_game():
    game = make_game(["O"])
    over = []
    game.on_game_over(over.append)
    block_spawn(game)
    game.move_down()
    assert game.state is State.GAME_OVER
    assert game.snapshot().game_over
    assert game.snapshot().current_piece is None
    assert not game.scheduler.armed
    assert over == [0]

    frozen = [r[:] for r in game.board]
    game.update(10_000)
    game.hard_drop()
    game.toggle_pause()
    assert game.board == frozen
    assert game.state is State.GAME_OVER


def test_reset_after_game_over():
    game = make_game(["O"], speed_factor=0.5)
    block_spawn(game)
    game.move_down()
    game.reset()
    assert game.state is State.PLAYING
    assert cells(game.board) == 0
    assert (game.score, game.level, game.lines) == (0, 1, 0)
    assert game.interval == pytest.approx(1600)
    assert game.scheduler.armed


def test_pause_guards_actions_and_gravity():
    game = make_game(["O"])
    game.toggle_pause()
    assert game.state is State.PAUSED
    assert game.snapshot().paused
    game.move_left()
    game.move_down()
    game.update(5000)
    assert (game.current.x, game.current.y) == (4, 0)

    game.toggle_pause()
    assert game.state is State.PLAYING
    game.update(799)
    assert game.current.y == 0
    game.update(1)
    assert game.current.y == 1


def test_gravity_ticks_follow_speed_factor():
    game = make_game(["O"])
    game.update(800 * 3)
    assert game.current.y == 3
    game.set_speed_factor(2.0)
    game.update(400)
    assert game.current.y == 4


def test_bad_speed_factor_is_clamped():
    game = make_game(["O"])
    game.set_speed_factor(0)
    assert game.speed_factor > 0
    game.set_speed_factor(-3)
    assert game.interval > 0


def test_speed_factor_survives_reset_and_level_up():
    game = make_game(["O"], speed_factor=2.0)
    game.lines = 9
    fill_row(game.board, 19, holes=[4, 5])
    game.hard_drop()
    assert game.interval == pytest.approx(750 / 2)
    game.reset()
    assert game.speed_factor == 2.0


def test_stop_freezes_snapshot():
    game = make_game(["O"])
    game.move_down()
    game.stop()
    snap = game.snapshot()
    assert snap.state is State.IDLE
    assert snap.current_piece is not None and snap.current_piece.y == 1
    game.update(5000)
    game.move_down()
    assert game.snapshot() == snap


def test_stop_after_game_over_keeps_final_snapshot():
    game = make_game(["O"])
    block_spawn(game)
    game.move_down()
    before = game.snapshot()
    assert before.game_over

    game.stop()
    after = game.snapshot()
    assert after == before
    assert after.state is State.GAME_OVER and after.game_over
    assert after.current_piece is None
    game.reset()
    assert game.state is State.PLAYING


def test_snapshot_is_a_copy():
    game = make_game(["O"])
    snap = game.snapshot()
    game.board[19][0] = 7
    assert snap.board[19][0] == 0
    with pytest.raises(AttributeError):
        snap.score = 10
    assert snap.next_piece.kind == "O"
    assert snap.ghost_y == 18


def test_dispatch_rejects_unknown_actions():
    game = make_game(["O"])
    with pytest.raises(ValueError):
        game.dispatch("left")


def test_actions_from_listener_run_after_lock():
    game = make_game(["O"])
    order = []

    def on_level(level):
        order.append(("level", game.current.y))
        game.dispatch(Action.SOFT_DROP)
        order.append(("after", game.current.y))

    game.on_level_up(on_level)
    game.lines = 9
    fill_row(game.board, 19, holes=[4, 5])
    game.hard_drop()
    assert order == [("level", 0), ("after", 1)]


def test_failing_listener_does_not_break_game(caplog):
    game = make_game(["O"])

    def boom(_):
        raise RuntimeError("toast failed")

    game.on_level_up(boom)
    game.lines = 9
    fill_row(game.board, 19, holes=[4, 5])
    game.hard_drop()
    assert game.level == 2
    assert "level_up listener failed" in caplog.text
