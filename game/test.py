import random
import sys
import unittest

from game.board import Board, Piece, BLACK, WHITE, EMPTY, BOARD_SIZE, place_shape, check_win
from game.rule import CatPawRule, PathDraft, calculate_rotation
from game.shape import (
    get_shapes_for_size, rotate_shape, normalize_shape, canonical_shape,
    get_absolute_coordinates, is_neighbor, random_turn_length,
)


def board_with(cells, player, size=BOARD_SIZE):
    """在空棋盘上放置一组脚印"""
    board = Board(size=size)
    for x, y in cells:
        board.set_piece(x, y, Piece(player))
    return board


class TestShapeCatalog(unittest.TestCase):
    def test_sizes(self):
        """
        测试各个大小的形状数量
        """
        self.assertEqual(get_shapes_for_size(1), [((0, 0),)], "一步只有单格形状")
        self.assertEqual(len(get_shapes_for_size(2)), 4, "两步有横、竖和两条斜线")
        self.assertEqual(len(get_shapes_for_size(3)), 8, "三步有两条直线、四个L形和两条斜线")

    def test_shapes_are_normalized_and_unique(self):
        for size in (1, 2, 3):
            shapes = get_shapes_for_size(size)
            keys = [canonical_shape(shape) for shape in shapes]
            self.assertEqual(len(keys), len(set(keys)), "形状不应重复")
            for shape in shapes:
                self.assertEqual(len(shape), size)
                self.assertEqual(min(x for x, _ in shape), 0)
                self.assertEqual(min(y for _, y in shape), 0)

    def test_contains_base_shapes(self):
        shapes = get_shapes_for_size(3)
        self.assertIn(((0, 0), (0, 1), (0, 2)), shapes)
        self.assertIn(((0, 0), (0, 1), (1, 1)), shapes)
        self.assertIn(((0, 0), (1, 1), (2, 2)), shapes)
        self.assertIn(((0, 0), (0, 1)), get_shapes_for_size(2))
        self.assertIn(((0, 0), (1, 1)), get_shapes_for_size(2))

    def test_rotation(self):
        """
        测试旋转
        """
        self.assertEqual(canonical_shape(rotate_shape(((0, 0), (0, 1), (0, 2)))),
                         ((0, 0), (1, 0), (2, 0)), "竖线旋转后应为横线")
        self.assertEqual(canonical_shape(rotate_shape(((0, 0), (1, 1)))),
                         ((1, 0), (0, 1)), "主对角线旋转后应为副对角线")

        shape = ((0, 0), (0, 1), (1, 1))
        current = shape
        for _ in range(4):
            current = rotate_shape(current)
        self.assertEqual(canonical_shape(current), canonical_shape(shape), "旋转四次应回到原形")

    def test_normalize(self):
        self.assertEqual(normalize_shape([(3, 5), (4, 6)]), ((0, 0), (1, 1)))
        self.assertEqual(normalize_shape([(-1, 0), (0, 0)]), ((0, 0), (1, 0)))
        self.assertEqual(normalize_shape([]), ())

    def test_helpers(self):
        self.assertEqual(get_absolute_coordinates(((0, 0), (1, 1)), (4, 2)), [(4, 2), (5, 3)])
        self.assertTrue(is_neighbor((1, 1), (2, 2)))
        self.assertTrue(is_neighbor((1, 1), (1, 0)))
        self.assertFalse(is_neighbor((1, 1), (1, 1)))
        self.assertFalse(is_neighbor((1, 1), (3, 1)))

        rng = random.Random(7)
        lengths = {random_turn_length(rng) for _ in range(200)}
        self.assertEqual(lengths, {1, 2, 3})


class TestBoard(unittest.TestCase):
    def setUp(self):
        self.board = Board()

    def test_initial_state(self):
        board_state = self.board.to_list()
        self.assertEqual(len(board_state), 12, "棋盘应该是12x12")
        self.assertEqual(len(board_state[0]), 12, "棋盘应该是12x12")
        self.assertTrue(all(cell == EMPTY for row in board_state for cell in row))

    def test_invalid_position(self):
        with self.assertRaises(ValueError, msg="超出棋盘范围应该抛出异常"):
            self.board.get_piece(12, 0)
        with self.assertRaises(ValueError):
            self.board.set_piece(-1, 3, Piece(BLACK))

    def test_can_place_shape(self):
        line = ((0, 0), (1, 0), (2, 0))
        self.assertTrue(self.board.can_place_shape(line, (0, 0)))
        self.assertTrue(self.board.can_place_shape(line, (9, 11)))
        self.assertFalse(self.board.can_place_shape(line, (10, 0)), "越过东边界")
        self.assertFalse(self.board.can_place_shape(line, (0, 12)), "越过南边界")
        self.assertFalse(self.board.can_place_shape(line, (-1, 0)), "越过西边界")
        self.assertFalse(self.board.can_place_shape(((1, 0), (0, 1)), (0, -1)), "越过北边界")

        self.board.set_piece(1, 0, Piece(WHITE))
        self.assertFalse(self.board.can_place_shape(line, (0, 0)), "不能覆盖已有脚印")
        self.assertTrue(self.board.can_place_shape(line, (2, 0)))

    def test_place_shape_copy_on_write(self):
        shape = ((0, 0), (1, 1))
        placed = self.board.place_shape(shape, (3, 4), BLACK, rotations=[45, 135])

        self.assertEqual(placed.get_piece(3, 4).color, BLACK)
        self.assertEqual(placed.get_piece(4, 5).color, BLACK)
        self.assertEqual(placed.get_piece(4, 5).rotation, 135)
        self.assertEqual(self.board.get_piece(3, 4).color, EMPTY, "原棋盘不应被修改")

        placed = place_shape(self.board, shape, (0, 0), WHITE)
        self.assertEqual(placed.get_piece(0, 0).rotation, 0, "默认朝向为0")

    def test_row_major_layout(self):
        self.board.set_piece(5, 2, Piece(BLACK))
        self.assertEqual(self.board.to_list()[2][5], BLACK, "to_list 按 [y][x] 存储")

    def test_empty_board_has_no_winner(self):
        self.assertFalse(self.board.check_win(BLACK))
        self.assertFalse(self.board.check_win(WHITE))
        self.assertIsNone(self.board.find_winning_run(BLACK))

    def test_win_in_every_direction(self):
        lines = {
            '横向': [(x, 3) for x in range(2, 9)],
            '纵向': [(4, y) for y in range(0, 7)],
            '正对角线': [(i, i) for i in range(5, 12)],
            '反对角线': [(i, 10 - i) for i in range(2, 9)],
        }
        for name, cells in lines.items():
            board = board_with(cells, WHITE)
            self.assertTrue(board.check_win(WHITE), f"{name}七连应该获胜")
            self.assertFalse(board.check_win(BLACK))
            self.assertEqual(sorted(board.find_winning_run(WHITE)), sorted(cells))

    def test_six_is_not_a_win(self):
        board = board_with([(x, 0) for x in range(6)], BLACK)
        self.assertFalse(check_win(board, BLACK), "六连不应获胜")

        board.set_piece(7, 0, Piece(BLACK))
        self.assertFalse(board.check_win(BLACK), "中间有空格不算连线")

        board.set_piece(6, 0, Piece(WHITE))
        self.assertFalse(board.check_win(BLACK))

    def test_winning_run_longer_than_seven(self):
        cells = [(x, 6) for x in range(1, 10)]
        board = board_with(cells, BLACK)
        self.assertEqual(board.find_winning_run(BLACK), cells, "返回从起点开始的完整连线")

    def test_full_board(self):
        board = Board(size=2)
        self.assertEqual(board.empty_count(), 4)
        for x, y in [(0, 0), (0, 1), (1, 0), (1, 1)]:
            board.set_piece(x, y, Piece(BLACK))
        self.assertTrue(board.is_full())


class TestCatPawRule(unittest.TestCase):
    def setUp(self):
        """
        在每个测试方法之前创建一个新的游戏实例
        """
        self.game = CatPawRule(game_mode='pvp', rng=random.Random(3))
        self.events = []
        self.game.add_listener(lambda event, payload: self.events.append((event, payload)))

    def _play_line(self, cells):
        self.game.turn_length = len(cells)
        return self.game.make_move(cells)

    def test_initial_state(self):
        self.assertEqual(self.game.current_player, BLACK, "初始玩家应该是黑猫")
        self.assertIn(self.game.turn_length, (1, 2, 3))
        self.assertFalse(self.game.game_over)
        self.assertEqual(self.game.history, [])

    def test_make_move(self):
        self.assertTrue(self._play_line([(5, 5), (6, 5)]), "应该可以画两步直线")

        board_state = self.game.get_board_state()
        self.assertEqual(board_state[5][5], BLACK)
        self.assertEqual(board_state[5][6], BLACK)
        self.assertEqual(self.game.current_player, WHITE, "下一个应该是白猫")
        self.assertEqual(self.game.history, [[(5, 5), (6, 5)]])
        self.assertEqual(self.events[-1][0], 'move')

        self.assertFalse(self._play_line([(5, 5)]), "不能在已有脚印的位置落子")

    def test_invalid_paths(self):
        self.game.turn_length = 3
        self.assertFalse(self.game.make_move([(0, 0), (1, 0)]), "步数不对")
        self.assertFalse(self.game.make_move([(0, 0), (2, 0), (3, 0)]), "不相邻")
        self.assertFalse(self.game.make_move([(0, 0), (1, 0), (0, 0)]), "重复格子")
        self.assertFalse(self.game.make_move([(10, 0), (11, 0), (12, 0)]), "越界")
        self.assertTrue(self.game.make_move([(0, 0), (1, 1), (1, 2)]), "斜着拐弯也可以")

    def test_rotation_follows_path(self):
        self._play_line([(2, 2), (3, 2)])
        self.assertAlmostEqual(self.game.board.get_piece(2, 2).rotation, 90)
        self.assertAlmostEqual(self.game.board.get_piece(3, 2).rotation, 90)

        self.assertEqual(calculate_rotation((0, 0)), 0)
        self.assertAlmostEqual(calculate_rotation((0, 0), next_cell=(0, 1)), 180)
        self.assertAlmostEqual(calculate_rotation((0, 1), prev_cell=(0, 0)), 180)

    def test_winner_detection(self):
        """
        测试获胜判定
        """
        self.assertTrue(self._play_line([(0, 0), (1, 0), (2, 0)]))
        self.assertTrue(self._play_line([(0, 1), (1, 1), (2, 1)]))
        self.assertTrue(self._play_line([(3, 0), (4, 0), (5, 0)]))
        self.assertTrue(self._play_line([(3, 1), (4, 1), (5, 1)]))
        turn_length = self.game.turn_length = 1
        self.assertTrue(self.game.make_move([(6, 0)]))

        self.assertTrue(self.game.game_over, "游戏应该结束")
        self.assertEqual(self.game.winner, BLACK, "黑猫应该获胜")
        self.assertEqual(self.game.check_winner(), BLACK)
        self.assertEqual(self.game.current_player, BLACK, "获胜后不换人")
        self.assertEqual(self.game.turn_length, turn_length)
        self.assertEqual(self.game.winning_run(), [(x, 0) for x in range(7)])
        self.assertEqual(self.events[-1][0], 'win')

        self.assertFalse(self.game.make_move([(11, 11)]), "游戏结束后不应该继续落子")
        self.assertFalse(self.game.pass_turn())

    def test_make_shape_move(self):
        self.game.turn_length = 2
        self.assertFalse(self.game.make_shape_move(((0, 0),), (0, 0)), "形状大小必须等于步数")
        self.assertFalse(self.game.make_shape_move(((0, 0), (1, 0)), (11, 0)), "越界")
        self.assertTrue(self.game.make_shape_move(((0, 0), (1, 1)), (4, 4)))
        self.assertEqual(self.game.history[-1], [(4, 4), (5, 5)])
        self.assertAlmostEqual(self.game.board.get_piece(4, 4).rotation, 135)

    def test_pass_turn(self):
        self.assertTrue(self.game.pass_turn())
        self.assertEqual(self.game.current_player, WHITE)
        self.assertEqual(self.events[-1], ('pass', {'player': BLACK}))

    def test_draw_on_full_board(self):
        game = CatPawRule(board_size=2, game_mode='pvp')
        game.turn_length = 2
        self.assertTrue(game.make_move([(0, 0), (1, 0)]))
        game.turn_length = 2
        self.assertTrue(game.make_move([(0, 1), (1, 1)]))
        self.assertTrue(game.game_over)
        self.assertEqual(game.winner, EMPTY)

    def test_reset(self):
        self._play_line([(5, 5)])
        self.game.reset(game_mode='pve', difficulty='hell')
        self.assertEqual(self.game.game_mode, 'pve')
        self.assertEqual(self.game.difficulty, 'hell')
        self.assertEqual(self.game.current_player, BLACK)
        self.assertEqual(self.game.history, [])
        self.assertEqual(self.game.get_board_state()[5][5], EMPTY)
        self.assertEqual(self.events[-1][0], 'reset')

    def test_modes_and_difficulty(self):
        with self.assertRaises(ValueError):
            CatPawRule(game_mode='online')
        with self.assertRaises(ValueError):
            self.game.set_difficulty('nightmare')

        game = CatPawRule(game_mode='pve')
        self.assertFalse(game.is_ai_turn())
        game.pass_turn()
        self.assertTrue(game.is_ai_turn())


class TestPathDraft(unittest.TestCase):
    def setUp(self):
        self.board = board_with([(3, 3)], WHITE)
        self.draft = PathDraft(self.board, 3)

    def test_draw_and_backtrack(self):
        self.assertFalse(self.draft.start((3, 3)), "不能从已有脚印开始")
        self.assertTrue(self.draft.start((2, 2)))
        self.assertFalse(self.draft.extend((3, 3)), "不能踩到已有脚印")
        self.assertFalse(self.draft.extend((4, 4)), "必须相邻")
        self.assertTrue(self.draft.extend((2, 3)))
        self.assertTrue(self.draft.extend((2, 2)), "拖回上一格撤销")
        self.assertEqual(self.draft.cells, [(2, 2)])

        self.assertTrue(self.draft.extend((1, 1)))
        self.assertTrue(self.draft.extend((0, 0)))
        self.assertTrue(self.draft.is_complete())
        self.assertFalse(self.draft.extend((0, 1)), "步数已满")

        self.draft.cancel()
        self.assertEqual(self.draft.cells, [])
        self.assertFalse(self.draft.extend((0, 1)))


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
