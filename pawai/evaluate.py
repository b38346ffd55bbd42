"""
局面评估

对棋盘上每一条连线打分：己方连线为正，对方连线为负。评估是纯函数，
不包含任何随机性。
"""

from game.board import DIRECTIONS, WIN_LENGTH, EMPTY

WIN_SCORE = 100000000

# (连子数, 被堵端数) -> 分数，缺省为 0
SCORE_TABLE = {
    (6, 0): 5000000,   # 活六
    (6, 1): 500000,    # 冲六，必须堵
    (5, 0): 100000,
    (5, 1): 10000,
    (4, 0): 5000,
    (4, 1): 1000,
    (3, 0): 500,
    (3, 1): 100,
    (2, 0): 50,
}

# 对方连线的权重
DEFENSE_MULTIPLIERS = {
    'easy': 0.2,
    'hard': 1.0,
    'hell': 2.5,
}

# 地狱难度下，对方五连以上再加倍
HELL_THREAT_LENGTH = 5
HELL_THREAT_MULTIPLIER = 2.0


def line_score(consecutive, blocked_ends):
    """
    单条连线的分数

    Args:
        consecutive: 连子数（最多计到 7）
        blocked_ends: 被棋盘边缘或对方堵住的端数

    Returns:
        int: 分数
    """
    if consecutive >= WIN_LENGTH:
        return WIN_SCORE
    return SCORE_TABLE.get((consecutive, blocked_ends), 0)


def _space(grid, x, y, dx, dy, color):
    # 沿方向数空格和己方格子，遇到对方或边缘停止
    size = len(grid)
    space = 0
    nx, ny = x + dx, y + dy
    while 0 <= nx < size and 0 <= ny < size:
        cell = grid[ny][nx]
        if cell != EMPTY and cell != color:
            break
        space += 1
        nx, ny = nx + dx, ny + dy
    return space


def _is_blocked(grid, x, y, color):
    size = len(grid)
    if not (0 <= x < size and 0 <= y < size):
        return True
    cell = grid[y][x]
    return cell != EMPTY and cell != color


def evaluate_grid(grid, player, difficulty):
    """
    评估颜色矩阵

    Args:
        grid: 按行存储的颜色矩阵 grid[y][x]
        player: 评估视角的玩家
        difficulty: 'easy'、'hard' 或 'hell'

    Returns:
        float: 分数，越高对 player 越有利
    """
    if difficulty not in DEFENSE_MULTIPLIERS:
        raise ValueError(f"未知的难度: {difficulty}")
    defense_multiplier = DEFENSE_MULTIPLIERS[difficulty]

    size = len(grid)
    score = 0

    for y in range(size):
        for x in range(size):
            color = grid[y][x]
            if color == EMPTY:
                continue
            is_me = color == player

            for dx, dy in DIRECTIONS:
                # 只从连线的起点计分，避免重复
                px, py = x - dx, y - dy
                if 0 <= px < size and 0 <= py < size and grid[py][px] == color:
                    continue

                consecutive = 1
                nx, ny = x + dx, y + dy
                while (consecutive < WIN_LENGTH and 0 <= nx < size and 0 <= ny < size
                       and grid[ny][nx] == color):
                    consecutive += 1
                    nx, ny = nx + dx, ny + dy

                # 死线：这条线上无论如何都连不到七个
                back_space = _space(grid, x, y, -dx, -dy, color)
                forward_space = _space(grid, x, y, dx, dy, color)
                if back_space + forward_space + 1 < WIN_LENGTH:
                    continue

                blocked_ends = 0
                if _is_blocked(grid, x + dx * consecutive, y + dy * consecutive, color):
                    blocked_ends += 1
                if _is_blocked(grid, px, py, color):
                    blocked_ends += 1

                value = line_score(consecutive, blocked_ends)

                if is_me:
                    score += value
                else:
                    value *= defense_multiplier
                    if difficulty == 'hell' and consecutive >= HELL_THREAT_LENGTH:
                        value *= HELL_THREAT_MULTIPLIER
                    score -= value

    return score


def evaluate_board(board, player, difficulty):
    """
    评估棋盘

    Args:
        board: game.Board 实例
        player: 评估视角的玩家
        difficulty: 'easy'、'hard' 或 'hell'

    Returns:
        float: 分数，越高对 player 越有利
    """
    return evaluate_grid(board.to_list(), player, difficulty)
