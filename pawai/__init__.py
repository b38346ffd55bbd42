"""
猫爪棋电脑玩家

基本用法:
    from game import CatPawRule
    from pawai import create_player

    game = CatPawRule(difficulty='hell')
    ai = create_player(difficulty=game.difficulty)

    # 轮到电脑时
    move = ai.play(game)
"""

import random

from .evaluate import evaluate_board, evaluate_grid, DEFENSE_MULTIPLIERS, SCORE_TABLE, WIN_SCORE
from .search import find_best_move, Move, CatPawAIPlayer, NOISE_RANGES


def create_player(player=-1, difficulty='hard', seed=None):
    """
    创建电脑玩家

    Args:
        player: 电脑执哪一方（1 黑猫，-1 白猫）
        difficulty: 'easy'、'hard' 或 'hell'
        seed: 随机种子，None 表示不固定

    Returns:
        CatPawAIPlayer: 电脑玩家
    """
    return CatPawAIPlayer(player=player, difficulty=difficulty, rng=random.Random(seed))


__all__ = [
    'evaluate_board', 'evaluate_grid', 'DEFENSE_MULTIPLIERS', 'SCORE_TABLE', 'WIN_SCORE',
    'find_best_move', 'Move', 'CatPawAIPlayer', 'NOISE_RANGES', 'create_player',
]

__version__ = "1.0.0"
