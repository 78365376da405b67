import random
from typing import List

import pytest

from tank_battle.core.game import Game
from tank_battle.core.savegame import SaveData
from tank_battle.core.session import GameSession
from tank_battle.core.world import GameRules, World


@pytest.fixture
def rules() -> GameRules:
    """Default rules with a fixed seed."""

    return GameRules(seed=1234)


@pytest.fixture
def quiet_rules() -> GameRules:
    """Rules whose enemies never move or fire, for predictable scenarios."""

    return GameRules(seed=1234, enemy_move_chance=0.0, enemy_fire_chance=0.0)


@pytest.fixture
def empty_world(quiet_rules: GameRules) -> World:
    return World(quiet_rules)


@pytest.fixture
def game(quiet_rules: GameRules) -> Game:
    return Game(1, quiet_rules, random.Random(7))


@pytest.fixture
def open_game(game: Game) -> Game:
    """Level one with every wall and enemy removed."""

    game.world.walls.clear()
    game.enemies.clear()
    game.enemies_remaining = 0
    return game


@pytest.fixture
def saved() -> List[SaveData]:
    return []


@pytest.fixture
def session(quiet_rules: GameRules, saved: List[SaveData]) -> GameSession:
    return GameSession(quiet_rules, SaveData(), rng=random.Random(7), persist=saved.append)
