"""
脚印形状（多联骨牌）目录

每回合落下的 1-3 个脚印构成一个形状。形状用相对坐标 (x, y) 的元组表示，
并被规范化到自身包围盒的原点，即最小 x 与最小 y 均为 0。
"""

import random

# 基础形状，其余形态由 90 度旋转得到
BASE_SHAPES = {
    1: [
        ((0, 0),),
    ],
    2: [
        ((0, 0), (0, 1)),           # 正交
        ((0, 0), (1, 1)),           # 斜向
    ],
    3: [
        ((0, 0), (0, 1), (0, 2)),   # 直线
        ((0, 0), (0, 1), (1, 1)),   # L 形
        ((0, 0), (1, 1), (2, 2)),   # 斜线
    ],
}

MIN_TURN_LENGTH = 1
MAX_TURN_LENGTH = 3


def normalize_shape(shape):
    """
    平移形状，使最小 x 与最小 y 均为 0

    Args:
        shape: 坐标序列

    Returns:
        tuple: 规范化后的坐标元组，保持原有顺序
    """
    if not shape:
        return tuple()
    min_x = min(x for x, _ in shape)
    min_y = min(y for _, y in shape)
    return tuple((x - min_x, y - min_y) for x, y in shape)


def rotate_shape(shape):
    """
    将形状旋转 90 度：(x, y) -> (-y, x)，然后重新规范化

    Args:
        shape: 坐标序列

    Returns:
        tuple: 旋转后的形状
    """
    return normalize_shape([(-y, x) for x, y in shape])


def canonical_shape(shape):
    """按行优先（先 y 后 x）排序的规范形式，用于去重"""
    return tuple(sorted(normalize_shape(shape), key=lambda p: (p[1], p[0])))


def get_shapes_for_size(size):
    """
    生成给定大小的所有旋转不同的形状

    对每个基础形状连续旋转 4 次，取规范形式，按首次出现顺序保留。
    只对 size 为 1、2、3 定义。

    Args:
        size: 形状包含的格子数

    Returns:
        list: 形状列表
    """
    shapes = []
    seen = set()

    for base in BASE_SHAPES.get(size, []):
        current = base
        for _ in range(4):
            current = rotate_shape(current)
            key = canonical_shape(current)
            if key not in seen:
                seen.add(key)
                shapes.append(key)

    return shapes


def get_absolute_coordinates(shape, anchor):
    """
    将形状放到锚点上，得到棋盘坐标

    Args:
        shape: 相对坐标序列
        anchor: 锚点 (x, y)，对应形状的 (0, 0)

    Returns:
        list: 棋盘坐标列表，顺序与形状一致
    """
    ax, ay = anchor
    return [(ax + x, ay + y) for x, y in shape]


def is_neighbor(a, b):
    """两个格子是否相邻（正交或斜向，不含自身）"""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return dx <= 1 and dy <= 1 and not (dx == 0 and dy == 0)


def random_turn_length(rng=None):
    """
    随机生成本回合的步数（1、2 或 3，均匀分布）

    Args:
        rng: 可选的 random.Random 实例

    Returns:
        int: 本回合步数
    """
    rng = rng or random
    return rng.randint(MIN_TURN_LENGTH, MAX_TURN_LENGTH)
