"""
电脑玩家测试：局面评估与走法搜索
"""

import random
import sys
import unittest

from game.board import Board, Piece, BLACK, WHITE
from game.rule import CatPawRule
from game.shape import get_absolute_coordinates
from pawai import create_player
from pawai.evaluate import evaluate_board, line_score, WIN_SCORE
from pawai.search import find_best_move, Move, CatPawAIPlayer


def board_with(black=(), white=(), size=12):
    board = Board(size=size)
    for x, y in black:
        board.set_piece(x, y, Piece(BLACK))
    for x, y in white:
        board.set_piece(x, y, Piece(WHITE))
    return board


class TestEvaluate(unittest.TestCase):
    def test_empty_board(self):
        for difficulty in ('easy', 'hard', 'hell'):
            self.assertEqual(evaluate_board(Board(), BLACK, difficulty), 0)

    def test_line_score(self):
        self.assertEqual(line_score(7, 2), WIN_SCORE)
        self.assertEqual(line_score(6, 0), 5000000)
        self.assertEqual(line_score(6, 1), 500000)
        self.assertEqual(line_score(3, 0), 500)
        self.assertEqual(line_score(2, 0), 50)
        self.assertEqual(line_score(2, 1), 0)
        self.assertEqual(line_score(1, 0), 0)

    def test_run_is_scored_once(self):
        board = board_with(black=[(3, 5), (4, 5), (5, 5)])
        self.assertEqual(evaluate_board(board, BLACK, 'hard'), 500, "活三只从起点计分一次")

    def test_live_six_beats_dead_six(self):
        live = board_with(black=[(x, 5) for x in range(3, 9)])
        dead = board_with(black=[(x, 0) for x in range(6)], white=[(6, 0)])

        self.assertEqual(evaluate_board(live, BLACK, 'hard'), 5000000)
        self.assertEqual(evaluate_board(dead, BLACK, 'hard'), 0, "死线不计分")
        self.assertGreater(evaluate_board(live, BLACK, 'hell'), evaluate_board(dead, BLACK, 'hell'))

    def test_edge_blocked_six(self):
        board = board_with(black=[(x, 0) for x in range(6)])
        self.assertEqual(evaluate_board(board, BLACK, 'hard'), 500000)

    def test_short_dead_line(self):
        # 白子把这一行的空间截断到 6 格以内
        board = board_with(black=[(0, 0), (1, 0)], white=[(6, 0)])
        self.assertEqual(evaluate_board(board, BLACK, 'hard'), 0)

    def test_defense_multipliers(self):
        board = board_with(black=[(x, 5) for x in range(3, 9)])
        self.assertAlmostEqual(evaluate_board(board, WHITE, 'easy'), -1000000)
        self.assertAlmostEqual(evaluate_board(board, WHITE, 'hard'), -5000000)
        self.assertAlmostEqual(evaluate_board(board, WHITE, 'hell'), -25000000)

        three = board_with(black=[(3, 5), (4, 5), (5, 5)])
        self.assertAlmostEqual(evaluate_board(three, WHITE, 'hell'), -1250, msg="五连以下不额外加倍")

    def test_rotation_is_ignored(self):
        a = Board()
        b = Board()
        for x in range(3, 6):
            a.set_piece(x, 4, Piece(BLACK, 0))
            b.set_piece(x, 4, Piece(BLACK, 270))
        self.assertEqual(evaluate_board(a, BLACK, 'hard'), evaluate_board(b, BLACK, 'hard'))

    def test_unknown_difficulty(self):
        with self.assertRaises(ValueError):
            evaluate_board(Board(), BLACK, 'nightmare')


class TestFindBestMove(unittest.TestCase):
    def _cells(self, move):
        return get_absolute_coordinates(move.shape, move.anchor)

    def test_empty_board(self):
        board = Board()
        move = find_best_move(board, 3, BLACK, 'hell')

        self.assertIsInstance(move, Move)
        cells = self._cells(move)
        self.assertEqual(len(cells), 3)
        self.assertTrue(all(board.is_valid_position(x, y) for x, y in cells))
        self.assertTrue(board.can_place_shape(move.shape, move.anchor))

    def test_hell_is_deterministic(self):
        board = board_with(black=[(5, 5), (6, 6), (2, 9)], white=[(5, 6), (7, 7)])
        first = find_best_move(board, 2, WHITE, 'hell')
        second = find_best_move(board, 2, WHITE, 'hell')
        self.assertEqual(first, second)

    def test_seeded_noise_is_repeatable(self):
        board = board_with(black=[(5, 5), (6, 5)])
        first = find_best_move(board, 2, WHITE, 'easy', rng=random.Random(11))
        second = find_best_move(board, 2, WHITE, 'easy', rng=random.Random(11))
        self.assertEqual(first, second)

    def test_takes_instant_win(self):
        board = board_with(white=[(x, 5) for x in range(3, 9)],
                           black=[(x, 10) for x in range(6)])

        move = find_best_move(board, 1, WHITE, 'easy', rng=random.Random(0))
        self.assertEqual(move, Move((2, 5), ((0, 0),)), "行优先第一个获胜点")

        move = find_best_move(board, 2, WHITE, 'hard', rng=random.Random(0))
        placed = board.place_shape(move.shape, move.anchor, WHITE)
        self.assertTrue(placed.check_win(WHITE))

    def test_blocks_edge_six(self):
        board = board_with(black=[(x, 0) for x in range(6)])

        move = find_best_move(board, 1, WHITE, 'hell')
        self.assertEqual(move.anchor, (6, 0), "必须堵住六连")

        move = find_best_move(board, 3, WHITE, 'hell')
        self.assertIn((6, 0), self._cells(move))

    def test_no_legal_move(self):
        board = Board(size=3)
        for y in range(3):
            for x in range(3):
                if (x, y) != (1, 1):
                    board.set_piece(x, y, Piece(BLACK if (x + y) % 2 else WHITE))

        self.assertIsNone(find_best_move(board, 2, WHITE, 'hard'))
        self.assertEqual(find_best_move(board, 1, WHITE, 'hard').anchor, (1, 1))

    def test_board_is_not_modified(self):
        board = board_with(black=[(4, 4)])
        before = board.to_list()
        find_best_move(board, 2, WHITE, 'hard')
        self.assertEqual(board.to_list(), before)

    def test_unknown_difficulty(self):
        with self.assertRaises(ValueError):
            find_best_move(Board(), 1, WHITE, 'nightmare')


class TestCatPawAIPlayer(unittest.TestCase):
    def test_play(self):
        game = CatPawRule(game_mode='pve', difficulty='hell', rng=random.Random(5))
        game.turn_length = 1
        self.assertTrue(game.make_move([(6, 6)]))

        ai = create_player(player=WHITE, difficulty=game.difficulty, seed=1)
        game.turn_length = 2
        move = ai.play(game)

        self.assertIsNotNone(move)
        self.assertEqual(len(game.history), 2)
        self.assertEqual(game.history[-1], get_absolute_coordinates(move.shape, move.anchor))
        self.assertEqual(game.current_player, BLACK)

    def test_pass_when_no_move(self):
        game = CatPawRule(board_size=2, game_mode='pve')
        game.turn_length = 3
        self.assertTrue(game.make_move([(0, 0), (1, 0), (1, 1)]))

        game.turn_length = 2
        ai = CatPawAIPlayer(player=WHITE, difficulty='hard')
        self.assertIsNone(ai.play(game))
        self.assertEqual(game.current_player, BLACK)
        self.assertEqual(len(game.history), 1)

    def test_unknown_difficulty(self):
        with self.assertRaises(ValueError):
            CatPawAIPlayer(difficulty='medium')


def main():
    """
    运行所有测试
    """
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = main()
    exit(0 if success else 1)
