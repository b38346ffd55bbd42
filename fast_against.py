#!/usr/bin/env python3

import argparse
import time

from game.board import BLACK, WHITE
from game.rule import CatPawRule, PathDraft, DIFFICULTIES, GAME_MODES
from pawai import create_player

PLAYER_NAMES = {BLACK: "黑猫X", WHITE: "白猫O"}


def display_board(game, last_move=None, highlight=None):
    """美化显示棋盘"""
    board_state = game.get_board_state()
    size = len(board_state)
    last_move = set(last_move or [])
    highlight = set(highlight or [])

    # 打印列坐标
    print("  ", end="")
    for x in range(size):
        print(f"{x:2d}", end="")
    print()

    # 打印棋盘和行坐标
    for y in range(size):
        print(f"{y:2d}", end="")
        for x in range(size):
            color = board_state[y][x]
            symbol = "X" if color == BLACK else "O" if color == WHITE else "."
            if (x, y) in highlight:
                print(f"\033[1;33m{symbol}\033[0m ", end="")  # 黄色高亮获胜连线
            elif (x, y) in last_move:
                if color == BLACK:
                    print(f"\033[1;32m{symbol}\033[0m ", end="")  # 绿色高亮黑猫
                else:
                    print(f"\033[1;31m{symbol}\033[0m ", end="")  # 红色高亮白猫
            else:
                print(f"{symbol} ", end="")
        print()
    print()


def parse_path(text):
    """
    解析输入的路径

    Args:
        text: 形如 "3,4 4,5 5,6" 的字符串

    Returns:
        list: 坐标列表
    """
    path = []
    for token in text.split():
        parts = token.split(',')
        if len(parts) != 2:
            raise ValueError(f"无效的坐标: {token}")
        path.append((int(parts[0]), int(parts[1])))
    return path


def get_player_move(game):
    """获取玩家画出的路径"""
    while True:
        try:
            text = input(f"请输入 {game.turn_length} 个相邻的坐标 (格式: x,y x,y ...): ")
            if text.strip().lower() in ['q', 'quit', 'exit']:
                return None

            draft = PathDraft(game.board, game.turn_length)
            cells = parse_path(text)
            if not cells or not draft.start(cells[0]):
                print("无效的起点。该位置已被占用或超出棋盘范围。")
                continue

            for cell in cells[1:]:
                if not draft.extend(cell):
                    break

            if not draft.is_complete() or draft.cells != cells:
                print("无效的路径。每一步都必须相邻、为空，且步数等于本回合步数。")
                continue

            return draft.cells
        except ValueError as e:
            print(f"无效的输入: {e}")


def print_event(event, payload):
    """在控制台播报游戏事件"""
    if event == 'move':
        cells = " ".join(f"{x},{y}" for x, y in payload['cells'])
        print(f"{PLAYER_NAMES[payload['player']]} 踩下: {cells}")
    elif event == 'win':
        print(f"喵！{PLAYER_NAMES[payload['player']]} 连成七个！")
    elif event == 'draw':
        print("棋盘已满。")
    elif event == 'pass':
        print(f"{PLAYER_NAMES[payload['player']]} 无处落脚，跳过本回合。")


def main():
    parser = argparse.ArgumentParser(description='Cat Paw Connect-7')
    parser.add_argument('--mode', choices=GAME_MODES, default='pve',
                        help='pve: play against the computer, pvp: two players')
    parser.add_argument('--difficulty', choices=DIFFICULTIES, default='hard',
                        help='Computer difficulty')
    parser.add_argument('--first', choices=['human', 'ai'], default='human',
                        help='Who plays black (moves first) in pve mode')
    parser.add_argument('--delay', type=float, default=1.0,
                        help='Seconds to wait before the computer moves')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed')
    args = parser.parse_args()

    print("欢迎来到猫爪棋！")
    print("黑白猫咪轮流踩下脚印，每回合随机走 1-3 步，横、竖、斜连成 7 个获胜。")
    print("输入格式: x,y x,y ... （相邻的格子，可以直走也可以斜走）")
    print("输入 q, quit 或 exit 退出游戏\n")

    game = CatPawRule(game_mode=args.mode, difficulty=args.difficulty)
    game.add_listener(print_event)

    ai = None
    ai_color = None
    if args.mode == 'pve':
        ai_color = BLACK if args.first == 'ai' else WHITE
        ai = create_player(player=ai_color, difficulty=args.difficulty, seed=args.seed)

    last_move = None

    # 游戏主循环
    while not game.game_over:
        display_board(game, last_move)

        current_player = game.current_player
        print(f"轮到{PLAYER_NAMES[current_player]}，本回合 {game.turn_length} 步")

        if current_player == ai_color:
            print("电脑思考中...")
            time.sleep(args.delay)
            move = ai.play(game)
            if move is not None:
                last_move = game.history[-1]
        else:
            path = get_player_move(game)
            if path is None:
                print("游戏已退出。")
                return

            if game.make_move(path):
                last_move = path

    # 游戏结束，显示最终棋盘和结果
    display_board(game, last_move, highlight=game.winning_run())

    if game.winner == 0:
        print("平局！")
    elif ai_color is None:
        print(f"{PLAYER_NAMES[game.winner]} 赢了！")
    elif game.winner == ai_color:
        print("电脑赢了！再接再厉！")
    else:
        print("恭喜！你赢了！")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n游戏已中断。")
