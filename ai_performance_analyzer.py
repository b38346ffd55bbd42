#!/usr/bin/env python3

import numpy as np
import matplotlib.pyplot as plt
import os
import random
from tqdm import tqdm
import seaborn as sns
import argparse

# 设置Matplotlib使用Agg后端以解决显示问题
import matplotlib
matplotlib.use('Agg')

from game.board import BLACK, WHITE, EMPTY
from game.rule import CatPawRule, DIFFICULTIES
from pawai import create_player


class CatPawAnalyzer:
    def __init__(self, black_difficulty='hard', white_difficulty='hard', seed=None,
                 output_dir="analysis_output"):
        """
        初始化分析器

        Args:
            black_difficulty: 黑猫电脑的难度
            white_difficulty: 白猫电脑的难度
            seed: 随机种子，None 表示不固定
            output_dir: 图表输出目录
        """
        self.black_difficulty = black_difficulty
        self.white_difficulty = white_difficulty
        self.rng = random.Random(seed)

        self.players = {
            BLACK: create_player(player=BLACK, difficulty=black_difficulty, seed=self.rng.random()),
            WHITE: create_player(player=WHITE, difficulty=white_difficulty, seed=self.rng.random()),
        }

        # 存储所有的游戏记录
        self.all_games = []

        self.output_dir = output_dir
        os.makedirs(self.output_dir, exist_ok=True)

    def self_play_game(self, max_turns=200):
        """
        进行一场电脑对电脑的对局

        Args:
            max_turns: 最多回合数（含跳过的回合）

        Returns:
            game_record: 游戏记录
        """
        game = CatPawRule(game_mode='pvp', rng=random.Random(self.rng.random()))
        size = game.board.size

        game_record = {
            'moves': [],
            'passes': 0,
            'board_states': [np.zeros((size, size), dtype=int)],
        }

        turns = 0
        while not game.game_over and turns < max_turns:
            current_player = game.current_player
            move = self.players[current_player].play(game)

            if move is None:
                game_record['passes'] += 1
            else:
                game_record['moves'].append((current_player, game.history[-1]))
                game_record['board_states'].append(np.array(game.get_board_state()))
            turns += 1

        game_record['winner'] = game.winner
        game_record['winning_run'] = game.winning_run()

        self.all_games.append(game_record)

        return game_record

    def visualize_game(self, game_idx=None):
        """
        可视化一局游戏

        Args:
            game_idx: 游戏索引，None表示最新的游戏
        """
        if not self.all_games:
            print("没有游戏记录")
            return

        if game_idx is None:
            game_idx = len(self.all_games) - 1

        game = self.all_games[game_idx]
        size = game['board_states'][0].shape[0]

        game_dir = os.path.join(self.output_dir, f"game_{game_idx}")
        os.makedirs(game_dir, exist_ok=True)

        # 为每一回合生成图像
        for step in range(len(game['moves']) + 1):
            plt.figure(figsize=(8, 8))

            board = game['board_states'][step]
            last_move = game['moves'][step - 1][1] if step > 0 else []

            # 绘制棋盘网格
            for i in range(size):
                plt.axhline(i - 0.5, color='black', alpha=0.3)
                plt.axvline(i - 0.5, color='black', alpha=0.3)

            # 绘制脚印，board[y, x]
            for y in range(size):
                for x in range(size):
                    if board[y, x] == BLACK:
                        plt.plot(x, y, 'o', markersize=18, markerfacecolor='black', markeredgecolor='black')
                    elif board[y, x] == WHITE:
                        plt.plot(x, y, 'o', markersize=18, markerfacecolor='white', markeredgecolor='black')

            # 高亮本回合落下的脚印
            for x, y in last_move:
                plt.plot(x, y, 'X', markersize=8, markerfacecolor='red', markeredgecolor='red')

            # 最后一步画出获胜连线
            if step == len(game['moves']) and game['winning_run']:
                xs, ys = zip(*game['winning_run'])
                plt.plot(xs, ys, '-', color='gold', linewidth=4)

            plt.xticks(range(size))
            plt.yticks(range(size))
            plt.xlim(-0.5, size - 0.5)
            plt.ylim(size - 0.5, -0.5)

            plt.title(f"Game {game_idx}, Turn {step}")

            plt.savefig(os.path.join(game_dir, f"step_{step:03d}.png"))
            plt.close()

        print(f"已生成游戏 {game_idx} 的所有回合图像")
        print(f"输出目录: {game_dir}")

    def run_multiple_games(self, num_games=20, max_turns=200, show_progress=True):
        """
        运行多场对局

        Args:
            num_games: 游戏数量
            max_turns: 每局最多回合数
            show_progress: 是否显示进度条

        Returns:
            统计信息
        """
        self.all_games = []

        game_iter = tqdm(range(num_games)) if show_progress else range(num_games)

        for _ in game_iter:
            self.self_play_game(max_turns=max_turns)

        return self.analyze_games()

    def analyze_games(self, plots=True):
        """
        分析所有游戏的统计信息

        Args:
            plots: 是否生成图表

        Returns:
            统计信息字典
        """
        if not self.all_games:
            return {}

        stats = {}

        # 胜率统计
        wins_black = sum(1 for game in self.all_games if game['winner'] == BLACK)
        wins_white = sum(1 for game in self.all_games if game['winner'] == WHITE)
        draws = sum(1 for game in self.all_games if game['winner'] == EMPTY)

        stats['win_rate_black'] = wins_black / len(self.all_games)
        stats['win_rate_white'] = wins_white / len(self.all_games)
        stats['draw_rate'] = draws / len(self.all_games)

        # 游戏长度统计（按回合）
        game_lengths = [len(game['moves']) for game in self.all_games]
        stats['avg_game_length'] = float(np.mean(game_lengths))
        stats['min_game_length'] = min(game_lengths)
        stats['max_game_length'] = max(game_lengths)
        stats['game_lengths'] = game_lengths
        stats['total_passes'] = sum(game['passes'] for game in self.all_games)

        if plots:
            self._create_stats_plots(stats, game_lengths)

        return stats

    def _create_stats_plots(self, stats, game_lengths):
        """
        创建统计图表

        Args:
            stats: 统计信息
            game_lengths: 游戏长度列表
        """
        # 1. 胜率饼图
        plt.figure(figsize=(10, 6))
        plt.pie([stats['win_rate_black'], stats['win_rate_white'], stats['draw_rate']],
                labels=[f'Black ({self.black_difficulty})', f'White ({self.white_difficulty})', 'Draw'],
                autopct='%1.1f%%',
                colors=['#333333', '#DDDDDD', '#AAAAFF'])
        plt.title('Win Rate Distribution')
        plt.savefig(os.path.join(self.output_dir, 'win_rate_pie.png'))
        plt.close()

        # 2. 游戏长度分布
        plt.figure(figsize=(10, 6))
        sns.histplot(game_lengths, kde=len(set(game_lengths)) > 1, bins=20)
        plt.axvline(stats['avg_game_length'], color='r', linestyle='--',
                    label=f"Avg: {stats['avg_game_length']:.1f}")
        plt.title('Game Length Distribution')
        plt.xlabel('Number of Turns')
        plt.ylabel('Frequency')
        plt.legend()
        plt.savefig(os.path.join(self.output_dir, 'game_length_dist.png'))
        plt.close()

        # 3. 落脚热图
        self._create_move_heatmaps()

    def move_heatmaps(self):
        """
        统计每个位置的落脚次数

        Returns:
            (black_heatmap, white_heatmap): 归一化到 [0, 1] 的矩阵，[y, x]
        """
        size = self.all_games[0]['board_states'][0].shape[0]
        black_heatmap = np.zeros((size, size))
        white_heatmap = np.zeros((size, size))

        for game in self.all_games:
            for player, cells in game['moves']:
                heatmap = black_heatmap if player == BLACK else white_heatmap
                for x, y in cells:
                    heatmap[y, x] += 1

        # 归一化
        if np.max(black_heatmap) > 0:
            black_heatmap = black_heatmap / np.max(black_heatmap)
        if np.max(white_heatmap) > 0:
            white_heatmap = white_heatmap / np.max(white_heatmap)

        return black_heatmap, white_heatmap

    def _create_move_heatmaps(self):
        """生成落脚热图"""
        if not self.all_games:
            return

        black_heatmap, white_heatmap = self.move_heatmaps()

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 6))

        sns.heatmap(black_heatmap, cmap='Blues', square=True, ax=ax1)
        ax1.set_title('Black Moves Heatmap')

        sns.heatmap(white_heatmap, cmap='Reds', square=True, ax=ax2)
        ax2.set_title('White Moves Heatmap')

        plt.tight_layout()
        plt.savefig(os.path.join(self.output_dir, 'move_heatmaps.png'))
        plt.close()


def main():
    parser = argparse.ArgumentParser(description='Cat Paw AI Analysis Tool')
    parser.add_argument('--num-games', type=int, default=20,
                        help='Number of AI vs AI games')
    parser.add_argument('--black', choices=DIFFICULTIES, default='hard',
                        help='Difficulty of the black (first) player')
    parser.add_argument('--white', choices=DIFFICULTIES, default='hard',
                        help='Difficulty of the white (second) player')
    parser.add_argument('--max-turns', type=int, default=200,
                        help='Turn limit per game')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed')
    parser.add_argument('--visualize-game', action='store_true',
                        help='Visualize a game after analysis')
    parser.add_argument('--output', type=str, default='analysis_output',
                        help='Output directory')

    args = parser.parse_args()

    analyzer = CatPawAnalyzer(black_difficulty=args.black, white_difficulty=args.white,
                              seed=args.seed, output_dir=args.output)

    print(f"Running {args.num_games} games: black={args.black} vs white={args.white}...")
    stats = analyzer.run_multiple_games(num_games=args.num_games, max_turns=args.max_turns)

    print("\nStatistics:")
    print(f"Black Win Rate: {stats['win_rate_black']:.1%}")
    print(f"White Win Rate: {stats['win_rate_white']:.1%}")
    print(f"Draw Rate: {stats['draw_rate']:.1%}")
    print(f"Average Game Length: {stats['avg_game_length']:.1f} turns")
    print(f"Shortest Game: {stats['min_game_length']} turns")
    print(f"Longest Game: {stats['max_game_length']} turns")
    print(f"Passed Turns: {stats['total_passes']}")

    if args.visualize_game:
        print("\nVisualizing a game...")
        analyzer.visualize_game()

    print(f"\nAnalysis complete! Results saved to: {args.output}")


if __name__ == "__main__":
    main()
