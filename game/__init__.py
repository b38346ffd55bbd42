"""
猫爪棋（七连棋）游戏模块
"""

from .board import (
    Board, Piece, BOARD_SIZE, WIN_LENGTH, BLACK, WHITE, EMPTY,
    can_place_shape, place_shape, check_win, find_winning_run,
)
from .rule import CatPawRule, PathDraft, calculate_rotation, DIFFICULTIES, GAME_MODES
from .shape import get_shapes_for_size, get_absolute_coordinates, random_turn_length

__all__ = [
    'Board', 'Piece', 'BOARD_SIZE', 'WIN_LENGTH', 'BLACK', 'WHITE', 'EMPTY',
    'can_place_shape', 'place_shape', 'check_win', 'find_winning_run',
    'CatPawRule', 'PathDraft', 'calculate_rotation', 'DIFFICULTIES', 'GAME_MODES',
    'get_shapes_for_size', 'get_absolute_coordinates', 'random_turn_length',
]
