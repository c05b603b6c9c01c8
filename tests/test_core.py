import random
import unittest

from tetris_rl.game import (
    CATALOG,
    Action,
    ActivePiece,
    GameConfig,
    Outcome,
    TetrisGame,
    TetrominoType,
    Timer,
    rotate,
    translate,
)


def new_game(kind: TetrominoType = TetrominoType.T, **kwargs) -> TetrisGame:
    game = TetrisGame(GameConfig(random_seed=42, **kwargs))
    game.spawn_piece(kind)
    return game


class TimerTests(unittest.TestCase):
    def test_fires_when_interval_accumulates(self):
        timer = Timer(0.45)
        self.assertFalse(timer.tick(0.2))
        self.assertFalse(timer.tick(0.2))
        self.assertTrue(timer.tick(0.1))
        self.assertAlmostEqual(timer.elapsed, 0.05)
        self.assertFalse(timer.tick(0.1))

    def test_zero_interval_fires_every_tick(self):
        timer = Timer(0.0)
        self.assertTrue(timer.tick(0.0))
        self.assertTrue(timer.tick(0.5))


class ConfigTests(unittest.TestCase):
    def test_rejects_bad_dimensions(self):
        with self.assertRaises(ValueError):
            GameConfig(width=0)
        with self.assertRaises(ValueError):
            GameConfig(height=-3)
        with self.assertRaises(ValueError):
            GameConfig(width=5)

    def test_rejects_negative_interval(self):
        with self.assertRaises(ValueError):
            GameConfig(soft_drop_interval=-0.1)


class TickTests(unittest.TestCase):
    def test_idle_tick_without_gravity_keeps_piece(self):
        game = new_game()
        before = game.piece
        result = game.tick(0.1)
        self.assertEqual(result.outcome, Outcome.MOVED)
        self.assertEqual(game.piece, before)

    def test_soft_drop_timer_moves_piece_down(self):
        game = new_game()
        before = game.piece
        game.tick(0.3)
        self.assertEqual(game.piece, before)
        game.tick(0.2)
        self.assertEqual(game.piece, translate(before, 0, -1))

    def test_horizontal_and_down_inputs_combine(self):
        game = new_game()
        before = game.piece
        game.tick(0.0, [Action.RIGHT, Action.SOFT_DROP])
        self.assertEqual(game.piece, translate(before, 1, -1))

    def test_left_and_right_cancel(self):
        game = new_game()
        before = game.piece
        game.tick(0.0, [Action.LEFT, Action.RIGHT])
        self.assertEqual(game.piece, before)

    def test_four_clockwise_rotations_restore_piece(self):
        game = new_game()
        before = game.piece
        for _ in range(4):
            result = game.tick(0.0, [Action.ROTATE_CW])
            self.assertEqual(result.outcome, Outcome.MOVED)
        self.assertEqual(game.piece.indices, before.indices)
        self.assertEqual(game.piece, before)

    def test_counter_clockwise_wins_when_both_pressed(self):
        game = new_game()
        before = game.piece
        game.tick(0.0, [Action.ROTATE_CW, Action.ROTATE_CCW])
        self.assertEqual(game.piece, rotate(before, clockwise=False))

    def test_blocked_drop_locks_atomically_and_respawns(self):
        game = new_game()
        game.piece = translate(game.piece, 0, -20)
        locked_cells = set(game.piece.positions)
        result = game.tick(0.0, [Action.SOFT_DROP])
        self.assertTrue(result.locked)
        self.assertEqual(result.outcome, Outcome.LOCK)
        self.assertEqual({(x, y) for x, y, _ in game.grid.occupied()}, locked_cells)
        self.assertEqual(game.pieces_locked, 1)
        self.assertEqual(game.piece, ActivePiece.spawn(game.piece.kind, 22))

    def test_failed_rotation_does_not_lock(self):
        game = new_game()
        game.piece = translate(game.piece, 0, -20)
        before = game.piece
        result = game.tick(0.0, [Action.ROTATE_CW])
        self.assertEqual(result.outcome, Outcome.ROTATION_REJECTED)
        self.assertFalse(result.locked)
        self.assertEqual(game.piece, before)
        self.assertEqual(game.grid.occupied(), [])

    def test_hard_drop_locks_and_ignores_other_inputs(self):
        game = new_game()
        result = game.tick(0.0, [Action.HARD_DROP, Action.LEFT, Action.ROTATE_CW])
        self.assertTrue(result.locked)
        cells = sorted((x, y) for x, y, _ in game.grid.occupied())
        self.assertEqual(cells, [(3, 0), (4, 0), (4, 1), (5, 0)])

    def test_lock_then_clear_in_same_tick(self):
        game = new_game()
        game.grid.place([(x, 0) for x in range(10) if x not in (3, 4, 5)], TetrominoType.O)
        result = game.tick(0.0, [Action.HARD_DROP])
        self.assertTrue(result.locked)
        self.assertEqual(result.rows_cleared, 1)
        self.assertEqual(game.lines_cleared_total, 1)
        self.assertEqual(game.grid.occupied(), [(4, 0, TetrominoType.T)])

    def test_line_clear_waits_for_its_timer(self):
        game = new_game(line_clear_interval=0.08)
        game.grid.place([(x, 0) for x in range(10)], TetrominoType.O)
        self.assertEqual(game.tick(0.05).rows_cleared, 0)
        self.assertEqual(game.tick(0.05).rows_cleared, 1)

    def test_step_maps_none_to_empty_tick(self):
        game = new_game()
        before = game.piece
        game.step(Action.NONE)
        self.assertEqual(game.piece, before)


class TopOutTests(unittest.TestCase):
    def test_blocked_spawn_ends_game(self):
        game = new_game()
        game.grid.place([(x, y) for y in (20, 21) for x in range(10)], TetrominoType.I)
        game.spawn_piece(TetrominoType.T)
        self.assertTrue(game.game_over)
        self.assertIsNone(game.piece)
        self.assertTrue(game.tick(1.0, [Action.LEFT]).game_over)

    def test_reset_restarts(self):
        game = new_game()
        game.grid.place([(x, y) for y in (20, 21) for x in range(10)], TetrominoType.I)
        game.spawn_piece(TetrominoType.T)
        game.reset()
        self.assertFalse(game.game_over)
        self.assertIsNotNone(game.piece)
        self.assertEqual(game.grid.occupied(), [])


class SnapshotTests(unittest.TestCase):
    def test_snapshot_and_state(self):
        game = new_game()
        game.tick(0.0, [Action.HARD_DROP])
        snap = game.snapshot()
        self.assertEqual((snap.width, snap.height), (10, 22))
        self.assertEqual(len(snap.locked), 4)
        self.assertEqual(len(snap.active), 4)
        for cell in snap.locked:
            self.assertEqual(cell.color, CATALOG[TetrominoType.T].color)

        state = game.get_state()
        self.assertEqual(state.shape, (22, 10))
        self.assertEqual(int((state > 0).sum()), 4)
        self.assertEqual(int((state < 0).sum()), 4)


class InvariantTests(unittest.TestCase):
    def test_random_play_keeps_bounds_and_no_overlap(self):
        game = TetrisGame(GameConfig(random_seed=7))
        rng = random.Random(3)
        actions = [a for a in Action if a != Action.NONE]
        locks = 0
        for _ in range(3000):
            events = [a for a in actions if rng.random() < 0.15]
            result = game.tick(rng.choice([0.0, 0.1, 0.5]), events)
            locks += int(result.locked)
            if game.game_over:
                game.reset()
                continue
            positions = game.piece.positions
            self.assertEqual(len(set(positions)), 4)
            for x, y in positions:
                self.assertTrue(0 <= x < 10 and 0 <= y < 22, (x, y))
                self.assertFalse(game.grid.is_occupied(x, y))
        self.assertGreater(locks, 0)


if __name__ == "__main__":
    unittest.main()
