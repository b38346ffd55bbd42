from game.board import Board, Piece, BLACK, WHITE
from game.rule import CatPawRule


def test_board_display():
    """
    测试棋盘显示功能
    """
    print("控制台棋盘显示测试:")
    board = Board()
    board.console_visualize()

    # 在不同位置放置脚印
    test_positions = [
        (0, 0, BLACK),
        (6, 6, BLACK),
        (11, 11, WHITE),
        (11, 0, WHITE),
        (0, 6, BLACK),
        (6, 0, WHITE),
    ]

    for x, y, color in test_positions:
        board.set_piece(x, y, Piece(color))

    print("\n放置特定位置的脚印后的棋盘:")
    board.console_visualize()

    rendered = str(board).splitlines()
    assert len(rendered) == board.size + 1
    # 行号占 2 列，每个格子占 2 列
    assert rendered[1 + 6][2 + 2 * 0] == "@"
    assert rendered[1 + 0][2 + 2 * 6] == "O"


def test_win_visualization():
    """
    测试获胜情况的棋盘显示
    """
    print("\n测试获胜情况的棋盘显示:")
    game = CatPawRule(game_mode='pvp')

    # 黑猫沿第 5 行连成七个，白猫在第 6 行陪走
    for black_path, white_path in [
        ([(2, 5), (3, 5), (4, 5)], [(2, 6), (3, 6), (4, 6)]),
        ([(5, 5), (6, 5), (7, 5)], [(5, 6), (6, 6), (7, 6)]),
    ]:
        game.turn_length = 3
        game.make_move(black_path)
        game.turn_length = 3
        game.make_move(white_path)
    game.turn_length = 1
    game.make_move([(8, 5)])

    print("黑猫横向七连获胜局面:")
    print(game)
    print(f"游戏结束: {game.game_over}, 获胜方: {'黑猫' if game.winner == BLACK else '白猫' if game.winner == WHITE else '无'}")
    print(f"获胜连线: {game.winning_run()}")
    assert game.winning_run() == [(x, 5) for x in range(2, 9)]


if __name__ == "__main__":
    test_board_display()
    test_win_visualization()
