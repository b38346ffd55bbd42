import math
import random

from .board import Board, Piece, BOARD_SIZE, BLACK, WHITE, EMPTY
from .shape import get_absolute_coordinates, is_neighbor, random_turn_length

GAME_MODES = ('pvp', 'pve')
DIFFICULTIES = ('easy', 'hard', 'hell')


def calculate_rotation(current, next_cell=None, prev_cell=None):
    """
    计算脚印朝向

    朝向指向路径上的下一格；最后一格沿用从上一格过来的方向。

    Args:
        current: 当前格 (x, y)
        next_cell: 下一格，可为 None
        prev_cell: 上一格，可为 None

    Returns:
        float: 朝向角度
    """
    if next_cell is None and prev_cell is None:
        return 0
    if next_cell is not None:
        dx = next_cell[0] - current[0]
        dy = next_cell[1] - current[1]
    else:
        dx = current[0] - prev_cell[0]
        dy = current[1] - prev_cell[1]
    return math.degrees(math.atan2(dy, dx)) + 90


def path_rotations(path):
    """路径上每一格的朝向"""
    rotations = []
    for i, cell in enumerate(path):
        next_cell = path[i + 1] if i + 1 < len(path) else None
        prev_cell = path[i - 1] if i > 0 else None
        rotations.append(calculate_rotation(cell, next_cell, prev_cell))
    return rotations


class CatPawRule:
    def __init__(self, board_size=BOARD_SIZE, game_mode='pve', difficulty='hard', rng=None):
        """
        初始化猫爪棋规则

        Args:
            board_size: 棋盘大小，默认12x12
            game_mode: 'pvp' 双人对战，'pve' 人机对战
            difficulty: 电脑难度 'easy'、'hard' 或 'hell'
            rng: 可选的 random.Random，用于回合步数
        """
        self._check_mode(game_mode)
        self._check_difficulty(difficulty)
        self.board_size = board_size
        self.game_mode = game_mode
        self.difficulty = difficulty
        self.rng = rng or random.Random()
        self._listeners = []
        self._new_game()

    @staticmethod
    def _check_mode(game_mode):
        if game_mode not in GAME_MODES:
            raise ValueError(f"未知的游戏模式: {game_mode}")

    @staticmethod
    def _check_difficulty(difficulty):
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"未知的难度: {difficulty}")

    def _new_game(self):
        self.board = Board(size=self.board_size)
        self.current_player = BLACK  # 黑猫先手
        self.turn_length = random_turn_length(self.rng)
        self.history = []
        self.game_over = False
        self.winner = EMPTY

    def add_listener(self, callback):
        """
        订阅游戏事件

        回调参数为 (event, payload)，事件有 'move'、'win'、'draw'、'pass'、'reset'。
        """
        self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, event, **payload):
        for callback in list(self._listeners):
            callback(event, payload)

    def reset(self, game_mode=None, difficulty=None):
        """
        重新开始

        Args:
            game_mode: 新的游戏模式，None 表示不变
            difficulty: 新的难度，None 表示不变
        """
        if game_mode is not None:
            self._check_mode(game_mode)
            self.game_mode = game_mode
        if difficulty is not None:
            self._check_difficulty(difficulty)
            self.difficulty = difficulty
        self._new_game()
        self._notify('reset', game_mode=self.game_mode, difficulty=self.difficulty)

    def set_difficulty(self, difficulty):
        self._check_difficulty(difficulty)
        self.difficulty = difficulty

    def is_ai_turn(self):
        return self.game_mode == 'pve' and self.current_player == WHITE and not self.game_over

    def is_valid_path(self, path):
        """
        检查玩家画出的路径是否合法

        Args:
            path: 坐标列表

        Returns:
            bool: 是否可以落子
        """
        if self.game_over:
            return False

        if len(path) != self.turn_length:
            return False

        if len(set(path)) != len(path):
            return False

        for x, y in path:
            if not self.board.is_valid_position(x, y):
                return False
            if not self.board.is_empty(x, y):
                return False

        for a, b in zip(path, path[1:]):
            if not is_neighbor(a, b):
                return False

        return True

    def make_move(self, path):
        """
        按玩家画出的路径落子

        Args:
            path: 坐标列表

        Returns:
            bool: 落子是否成功
        """
        path = [tuple(cell) for cell in path]
        if not self.is_valid_path(path):
            return False

        self._commit(path)
        return True

    def make_shape_move(self, shape, anchor):
        """
        按形状和锚点落子（电脑使用）

        Args:
            shape: 相对坐标序列
            anchor: 锚点 (x, y)

        Returns:
            bool: 落子是否成功
        """
        if self.game_over:
            return False
        if len(shape) != self.turn_length:
            return False
        if not self.board.can_place_shape(shape, anchor):
            return False

        self._commit(get_absolute_coordinates(shape, anchor))
        return True

    def _commit(self, coords):
        player = self.current_player
        rotations = path_rotations(coords)

        board = self.board.copy()
        for (x, y), rotation in zip(coords, rotations):
            board.set_piece(x, y, Piece(player, rotation))
        self.board = board

        self.history.append(list(coords))
        self._notify('move', player=player, cells=list(coords))

        # 每次落子后检查整个棋盘
        if self.board.check_win(player):
            self.game_over = True
            self.winner = player
            self._notify('win', player=player, run=self.winning_run())
            return

        if self.board.is_full():
            self.game_over = True
            self._notify('draw')
            return

        self._next_turn()

    def pass_turn(self):
        """
        当前方无法落子，直接换人

        Returns:
            bool: 是否成功换人
        """
        if self.game_over:
            return False

        player = self.current_player
        self._next_turn()
        self._notify('pass', player=player)
        return True

    def _next_turn(self):
        self.current_player = -self.current_player
        self.turn_length = random_turn_length(self.rng)

    def check_winner(self):
        """
        检查是否有玩家获胜

        Returns:
            int: 获胜玩家（1为黑猫，-1为白猫，0为未分出胜负）
        """
        for player in (BLACK, WHITE):
            if self.board.check_win(player):
                return player
        return EMPTY

    def winning_run(self):
        """
        获胜连线的坐标，用于高亮

        Returns:
            list: 坐标列表，没有胜者时为 None
        """
        if self.winner == EMPTY:
            return None
        return self.board.find_winning_run(self.winner)

    def get_board_state(self):
        """
        获取当前棋盘状态

        Returns:
            list: 当前棋盘状态的二维列表
        """
        return self.board.to_list()

    def __str__(self):
        """
        返回棋盘的字符串表示

        Returns:
            str: 棋盘的文本可视化
        """
        return str(self.board)


class PathDraft:
    """
    正在画的路径

    只在一次拖拽期间存在，提交或取消后丢弃，不会写入棋盘。
    """

    def __init__(self, board, turn_length):
        self.board = board
        self.turn_length = turn_length
        self.cells = []

    def start(self, cell):
        """
        从一个空格开始画

        Returns:
            bool: 是否开始成功
        """
        x, y = cell
        if not self.board.is_valid_position(x, y) or not self.board.is_empty(x, y):
            return False
        self.cells = [(x, y)]
        return True

    def extend(self, cell):
        """
        拖到新的格子

        拖回倒数第二格时撤销最后一格，否则在满足条件时追加。

        Returns:
            bool: 路径是否发生变化
        """
        if not self.cells:
            return False

        cell = tuple(cell)
        if len(self.cells) > 1 and self.cells[-2] == cell:
            self.cells.pop()
            return True

        if len(self.cells) >= self.turn_length:
            return False
        if not is_neighbor(self.cells[-1], cell):
            return False
        if not self.board.is_valid_position(*cell) or not self.board.is_empty(*cell):
            return False
        if cell in self.cells:
            return False

        self.cells.append(cell)
        return True

    def is_complete(self):
        return len(self.cells) == self.turn_length

    def cancel(self):
        self.cells = []
