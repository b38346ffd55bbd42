from .shape import get_absolute_coordinates

BOARD_SIZE = 12
WIN_LENGTH = 7

BLACK = 1    # 黑猫，先手
WHITE = -1   # 白猫
EMPTY = 0

# 东、南、东南、东北
DIRECTIONS = [
    (1, 0),
    (0, 1),
    (1, 1),
    (1, -1),
]


class Piece:
    def __init__(self, color=EMPTY, rotation=0):
        """
        初始化脚印

        Args:
            color: 脚印颜色
            0: 空白
            1: 黑猫
            -1: 白猫
            rotation: 脚印朝向（角度），仅用于显示
        """
        self.color = color
        self.rotation = rotation

    def is_empty(self):
        return self.color == EMPTY

    def __str__(self):
        """
        返回脚印的字符串表示

        Returns:
            str: 脚印的符号
        """
        if self.color == BLACK:
            return "@"
        elif self.color == WHITE:
            return "O"
        else:
            return "+"

    def __repr__(self):
        """
        返回脚印的开发者友好表示

        Returns:
            str: 脚印的详细描述
        """
        return f"Piece(color={self.color}, rotation={self.rotation})"


EMPTY_PIECE = Piece()


class Board:
    def __init__(self, size=BOARD_SIZE):
        """
        初始化棋盘

        棋盘按行存储，self.board[y][x] 是坐标 (x, y) 的格子，
        x 向东增长，y 向南增长。

        Args:
            size: 棋盘大小，默认为12x12
        """
        self.size = size
        self.board = [[EMPTY_PIECE for _ in range(size)] for _ in range(size)]

    def is_valid_position(self, x, y):
        """
        检查坐标是否在棋盘范围内

        Args:
            x: x坐标
            y: y坐标

        Returns:
            bool: 坐标是否有效
        """
        return 0 <= x < self.size and 0 <= y < self.size

    def get_piece(self, x, y):
        """
        获取指定位置的脚印

        Args:
            x: x坐标
            y: y坐标

        Returns:
            Piece: 指定位置的脚印
        """
        if not self.is_valid_position(x, y):
            raise ValueError(f"无效的棋盘坐标: ({x}, {y})")
        return self.board[y][x]

    def set_piece(self, x, y, piece):
        """
        在指定位置放置脚印

        Args:
            x: x坐标
            y: y坐标
            piece: 要放置的脚印
        """
        if not self.is_valid_position(x, y):
            raise ValueError(f"无效的棋盘坐标: ({x}, {y})")
        self.board[y][x] = piece

    def is_empty(self, x, y):
        return self.get_piece(x, y).color == EMPTY

    def copy(self):
        """
        复制棋盘

        只复制行列表，Piece 对象在棋盘之间共享且不会被修改。
        """
        new_board = Board.__new__(Board)
        new_board.size = self.size
        new_board.board = [row[:] for row in self.board]
        return new_board

    def can_place_shape(self, shape, anchor):
        """
        检查形状能否放在锚点上

        Args:
            shape: 相对坐标序列
            anchor: 锚点 (x, y)

        Returns:
            bool: 所有格子都在棋盘内且为空时为 True
        """
        for x, y in get_absolute_coordinates(shape, anchor):
            if not self.is_valid_position(x, y):
                return False
            if self.board[y][x].color != EMPTY:
                return False
        return True

    def place_shape(self, shape, anchor, player, rotations=None):
        """
        放置形状，返回新的棋盘

        原棋盘保持不变。调用前必须先通过 can_place_shape 检查。

        Args:
            shape: 相对坐标序列
            anchor: 锚点 (x, y)
            player: 落子方
            rotations: 每个格子的朝向，缺省为 0

        Returns:
            Board: 放置后的新棋盘
        """
        coords = get_absolute_coordinates(shape, anchor)
        if rotations is None:
            rotations = [0] * len(coords)

        new_board = self.copy()
        for (x, y), rotation in zip(coords, rotations):
            new_board.board[y][x] = Piece(player, rotation)
        return new_board

    def find_winning_run(self, player):
        """
        查找玩家的七连

        按行优先顺序扫描每个属于玩家的格子，并依次检查东、南、东南、东北
        四个方向，返回第一个满足条件的连线。

        Args:
            player: 玩家

        Returns:
            list: 连线上的坐标（从起点开始），没有七连时为 None
        """
        grid = self.to_list()
        size = self.size

        for y in range(size):
            for x in range(size):
                if grid[y][x] != player:
                    continue

                for dx, dy in DIRECTIONS:
                    run = [(x, y)]
                    nx, ny = x + dx, y + dy
                    while 0 <= nx < size and 0 <= ny < size and grid[ny][nx] == player:
                        run.append((nx, ny))
                        nx, ny = nx + dx, ny + dy
                    if len(run) >= WIN_LENGTH:
                        return run

        return None

    def check_win(self, player):
        """
        检查玩家是否已连成七个

        Args:
            player: 玩家

        Returns:
            bool: 是否获胜
        """
        return self.find_winning_run(player) is not None

    def empty_count(self):
        return sum(1 for row in self.board for piece in row if piece.color == EMPTY)

    def is_full(self):
        return self.empty_count() == 0

    def __str__(self):
        """
        生成棋盘的简洁字符串表示

        Returns:
            str: 棋盘的简化文本可视化
        """
        row_width = 2  # 行号宽度
        col_width = 2  # 脚印宽度

        header = " " * row_width
        for i in range(self.size):
            header += f"{i:^{col_width}}"

        rows = [header]
        for y in range(self.size):
            row = f"{y:{row_width}d}"
            for x in range(self.size):
                row += f"{str(self.board[y][x]):^{col_width}}"
            rows.append(row)

        return "\n".join(rows)

    def to_list(self):
        """
        将棋盘转换为二维列表，每个元素是脚印的颜色

        Returns:
            list: 按行存储的颜色矩阵，result[y][x]
        """
        return [[piece.color for piece in row] for row in self.board]

    def console_visualize(self):
        """
        在控制台打印棋盘
        """
        print(str(self))


def can_place_shape(board, shape, anchor):
    return board.can_place_shape(shape, anchor)


def place_shape(board, shape, anchor, player, rotations=None):
    return board.place_shape(shape, anchor, player, rotations)


def check_win(board, player):
    return board.check_win(player)


def find_winning_run(board, player):
    return board.find_winning_run(player)
