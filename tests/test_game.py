import random

import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from tank_battle.core.entities import Bullet, Owner
from tank_battle.core.game import Game
from tank_battle.core.geometry import Direction
from tank_battle.core.input import IDLE, InputSnapshot
from tank_battle.core.tank import Tank
from tank_battle.core.world import GameRules, Wall, WallMaterial

FIRE = InputSnapshot(fire=True)


def test_new_game_loads_level_one(game):
    assert game.level_number == 1
    assert len(game.enemies) == 4
    assert game.enemies_remaining == 4
    assert (game.player.x, game.player.y) == (40, 520)
    assert game.player.alive
    assert len(game.bullets) == 0


def test_player_moves_on_both_axes_in_one_frame(open_game):
    open_game.step(InputSnapshot(up=True, left=True))

    assert (open_game.player.x, open_game.player.y) == (38, 518)
    assert open_game.player.direction is Direction.LEFT


def test_player_bullet_cap(open_game):
    open_game.rules.fire_cooldown = 0

    shots = sum(open_game.step(FIRE).shots_fired for _ in range(10))

    assert shots == 3
    assert open_game.active_player_bullets() == 3


def test_cooldown_spaces_out_held_fire(open_game):
    shots = sum(open_game.step(FIRE).shots_fired for _ in range(60))

    assert shots == 2


def test_bullets_leave_the_playfield(open_game):
    open_game.step(FIRE)
    assert len(open_game.bullets) == 1

    for _ in range(120):
        open_game.step(IDLE)

    assert len(open_game.bullets) == 0


def test_player_bullet_destroys_brick(open_game):
    brick_id = open_game.world.walls.add(Wall(200, 200, WallMaterial.BRICK))
    bullet = Bullet(216, 243, Direction.UP, Owner.PLAYER)
    open_game.bullets.add(bullet)

    report = open_game.step(IDLE)

    assert report.walls_destroyed == 1
    assert brick_id not in open_game.world.walls
    assert bullet.active is False


def test_steel_stops_bullet_without_breaking(open_game):
    steel_id = open_game.world.walls.add(Wall(200, 200, WallMaterial.STEEL))
    bullet = Bullet(216, 243, Direction.UP, Owner.ENEMY)
    open_game.bullets.add(bullet)

    report = open_game.step(IDLE)

    assert report.walls_destroyed == 0
    assert steel_id in open_game.world.walls
    assert bullet.active is False


def test_bricks_survive_when_not_destructible(open_game):
    open_game.rules.destructible_bricks = False
    brick_id = open_game.world.walls.add(Wall(200, 200, WallMaterial.BRICK))
    bullet = Bullet(216, 243, Direction.UP, Owner.PLAYER)
    open_game.bullets.add(bullet)

    open_game.step(IDLE)

    assert brick_id in open_game.world.walls
    assert bullet.active is False


def test_bullets_fly_over_water(open_game):
    open_game.world.walls.add(Wall(200, 200, WallMaterial.WATER))
    bullet = Bullet(216, 243, Direction.UP, Owner.PLAYER)
    open_game.bullets.add(bullet)

    open_game.step(IDLE)

    assert bullet.active is True
    assert bullet.y == 238


def test_player_bullet_kills_enemy(open_game):
    enemy = Tank.spawn(40, 400, Owner.ENEMY, open_game.rules)
    open_game.enemies.add(enemy)

    reports = [open_game.step(FIRE)]
    reports += [open_game.step(IDLE) for _ in range(30)]

    assert enemy.alive is False
    assert sum(report.enemies_destroyed for report in reports) == 1
    assert open_game.enemies_remaining == 0
    assert len(open_game.enemies) == 0


def test_enemy_bullet_kills_player(open_game):
    open_game.bullets.add(Bullet(52, 480, Direction.DOWN, Owner.ENEMY))

    reports = [open_game.step(IDLE) for _ in range(10)]

    assert open_game.player.alive is False
    assert sum(1 for report in reports if report.player_destroyed) == 1
    assert len(open_game.explosions) == 1


def test_no_friendly_fire(open_game):
    first = Tank.spawn(300, 300, Owner.ENEMY, open_game.rules)
    second = Tank.spawn(400, 300, Owner.ENEMY, open_game.rules)
    open_game.enemies.add(first)
    open_game.enemies.add(second)
    enemy_bullet = Bullet(412, 312, Direction.UP, Owner.ENEMY)
    player_bullet = Bullet(52, 532, Direction.UP, Owner.PLAYER)
    open_game.bullets.add(enemy_bullet)
    open_game.bullets.add(player_bullet)

    report = open_game.step(IDLE)

    assert second.alive and first.alive
    assert open_game.player.alive
    assert report.enemies_destroyed == 0
    assert report.player_destroyed is False
    assert enemy_bullet.active and player_bullet.active


def test_explosion_lasts_eight_frames(open_game):
    enemy = Tank.spawn(40, 400, Owner.ENEMY, open_game.rules)
    open_game.enemies.add(enemy)
    open_game.bullets.add(Bullet(52, 420, Direction.UP, Owner.PLAYER))

    open_game.step(IDLE)
    assert not enemy.alive
    explosion = next(iter(open_game.explosions))
    assert explosion.frame == 0
    assert explosion.center == enemy.rect.center

    for _ in range(open_game.rules.explosion_frames - 1):
        open_game.step(IDLE)
    assert explosion.frame == 7
    assert len(open_game.explosions) == 1

    open_game.step(IDLE)
    assert explosion.active is False
    assert len(open_game.explosions) == 0


def test_render_marks_entities(game):
    board = game.render().splitlines()

    assert len(board) == 15
    assert board[13][1] == "P"
    assert board[1][18] == "E"


@pytest.mark.property
@settings(max_examples=25, deadline=None)
@given(
    seed=st.integers(min_value=0, max_value=5_000),
    controls=st.lists(
        st.builds(
            InputSnapshot,
            up=st.booleans(),
            down=st.booleans(),
            left=st.booleans(),
            right=st.booleans(),
            fire=st.booleans(),
        ),
        max_size=120,
    ),
)
def test_tanks_never_overlap_blocking_walls(seed: int, controls) -> None:
    rules = GameRules(seed=seed, enemy_move_chance=0.5)
    game = Game(1, rules, random.Random(seed))

    for snapshot in controls:
        game.step(snapshot)
        assert game.active_player_bullets() <= rules.max_player_bullets
        for tank in game.tanks():
            if tank.alive:
                assert not game.world.blocks_tank(tank.rect)
                assert tank.rect.within(rules.width, rules.height)
