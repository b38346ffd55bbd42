"""
电脑走法搜索：单层穷举 + 启发式评估
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from game.board import WHITE
from game.shape import get_shapes_for_size
from .evaluate import evaluate_board, DEFENSE_MULTIPLIERS

# 评估分数上叠加的随机扰动范围 [0, noise)
NOISE_RANGES = {
    'easy': 5000,
    'hard': 20,
    'hell': 0,
}


@dataclass
class Move:
    """电脑选出的一步：形状放在锚点上"""
    anchor: Tuple[int, int]
    shape: Tuple[Tuple[int, int], ...]


def find_best_move(board, turn_length, player, difficulty, rng=None) -> Optional[Move]:
    """
    寻找最佳落子

    按 形状 -> 行优先锚点 的顺序枚举所有合法落点。能直接获胜的落点立即返回；
    其余落点用 evaluate_board 打分并加上随机扰动，取最高分，同分时保留先找到的。

    Args:
        board: 当前棋盘，不会被修改
        turn_length: 本回合步数
        player: 电脑一方
        difficulty: 'easy'、'hard' 或 'hell'
        rng: 可选的 random.Random 实例

    Returns:
        Move: 最佳落子，没有合法落点时为 None
    """
    if difficulty not in NOISE_RANGES:
        raise ValueError(f"未知的难度: {difficulty}")
    rng = rng or random
    noise_range = NOISE_RANGES[difficulty]

    best_score = float('-inf')
    best_move = None

    for shape in get_shapes_for_size(turn_length):
        for y in range(board.size):
            for x in range(board.size):
                anchor = (x, y)
                if not board.can_place_shape(shape, anchor):
                    continue

                # 模拟落子，电脑的朝向统一为 0
                simulated = board.place_shape(shape, anchor, player)

                if simulated.check_win(player):
                    return Move(anchor, shape)

                score = evaluate_board(simulated, player, difficulty)
                if noise_range > 0:
                    score += rng.random() * noise_range

                if score > best_score:
                    best_score = score
                    best_move = Move(anchor, shape)

    return best_move


class CatPawAIPlayer:
    def __init__(self, player=WHITE, difficulty='hard', rng=None):
        """
        初始化电脑玩家

        Args:
            player: 电脑执哪一方，默认白猫
            difficulty: 'easy'、'hard' 或 'hell'
            rng: 可选的 random.Random 实例
        """
        if difficulty not in DEFENSE_MULTIPLIERS:
            raise ValueError(f"未知的难度: {difficulty}")
        self.player = player
        self.difficulty = difficulty
        self.rng = rng or random.Random()

    def choose_move(self, board, turn_length):
        return find_best_move(board, turn_length, self.player, self.difficulty, rng=self.rng)

    def play(self, game):
        """
        让电脑走一步

        Args:
            game: CatPawRule 实例

        Returns:
            Move: 电脑的落子，无处可下而弃权时为 None
        """
        move = self.choose_move(game.board, game.turn_length)
        if move is None:
            game.pass_turn()
            return None

        game.make_shape_move(move.shape, move.anchor)
        return move
