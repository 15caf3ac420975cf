from __future__ import annotations

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import FallingBlocksEnv
from falling_blocks.game import Command, GameConfig
from falling_blocks.rl.random_agent import run_random
from falling_blocks.visualization.human_play import build_parser


def test_reset_observation():
    env = FallingBlocksEnv(GameConfig(random_seed=0))
    obs, info = env.reset(seed=0)
    assert obs.shape == (20, 9)
    assert obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert info["lines_cleared_total"] == 0
    assert info["max_height"] == 0


def test_step_applies_gravity_after_commands():
    env = FallingBlocksEnv(GameConfig(random_seed=0))
    env.reset(seed=0)
    start = env.game.state.piece.pos
    obs, reward, terminated, truncated, info = env.step(int(Command.NONE))
    assert env.game.state.piece.pos == (start[0], start[1] + 1)
    assert reward == 0.0
    assert not terminated and not truncated
    assert env.observation_space.contains(obs)


def test_down_action_ticks_once():
    env = FallingBlocksEnv(GameConfig(random_seed=0))
    env.reset(seed=0)
    start = env.game.state.piece.pos
    env.step(int(Command.DOWN))
    assert env.game.state.piece.pos == (start[0], start[1] + 1)


def test_overflow_terminates_episode():
    # On a 4-wide board the spawn anchor pushes pieces past the right wall,
    # so the first piece lands inside the spawn buffer.
    env = FallingBlocksEnv(GameConfig(cols=4, rows=5, random_seed=0))
    env.reset(seed=0)
    _, _, terminated, _, info = env.step(int(Command.DOWN))
    assert terminated
    assert info["landed"]


def test_truncation():
    env = FallingBlocksEnv(GameConfig(random_seed=0), max_episode_steps=3)
    env.reset(seed=0)
    truncated = False
    for _ in range(3):
        _, _, _, truncated, _ = env.step(int(Command.NONE))
    assert truncated


def test_rgb_render():
    env = FallingBlocksEnv(GameConfig(random_seed=0), render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (20 * 12, 9 * 12, 3)
    assert img.dtype == np.uint8


def test_registered_env_runs():
    env = gym.make("FallingBlocks-9x20-v0")
    obs, _ = env.reset(seed=1)
    for _ in range(20):
        obs, _, terminated, truncated, _ = env.step(env.action_space.sample())
        if terminated or truncated:
            obs, _ = env.reset()
    assert obs.shape == (20, 9)
    env.close()


def test_random_agent(capsys):
    total = run_random(steps=50, seed=0)
    assert total >= 0.0
    assert "Random agent total reward" in capsys.readouterr().out


def test_human_play_parser():
    args = build_parser().parse_args(["--cols", "10", "--seed", "4", "--log-level", "DEBUG"])
    assert (args.cols, args.rows, args.seed, args.log_level) == (10, 20, 4, "DEBUG")


def test_env_package_star_import():
    namespace: dict = {}
    exec("from falling_blocks.env import *", namespace)
