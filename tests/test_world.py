import pytest

from tank_battle.core.geometry import Rect
from tank_battle.core.world import (
    LEVEL_LAYOUTS,
    GameRules,
    LayoutError,
    Wall,
    WallMaterial,
    World,
    layout_for_level,
)


def test_level_one_layout_dimensions():
    layout = LEVEL_LAYOUTS[0]

    assert len(layout) == 17
    assert all(len(row) == 20 for row in layout)


def test_walls_are_placed_on_the_tile_grid(rules):
    layout = layout_for_level(1)
    world = World.from_layout(layout, rules)

    expected = sum(1 for row in layout for code in row if code != 0)
    assert len(world.walls) == expected
    for wall in world.walls:
        assert wall.x % rules.tile_size == 0
        assert wall.y % rules.tile_size == 0
        assert wall.size == rules.tile_size
        assert layout[int(wall.y) // 40][int(wall.x) // 40] == wall.material.value


def test_level_one_material_counts(rules):
    world = World.from_layout(layout_for_level(1), rules)

    layout = layout_for_level(1)
    grass = sum(1 for row in layout for code in row if code == 3)
    assert world.count(WallMaterial.GRASS) == grass
    assert world.count(WallMaterial.STEEL) == 0
    assert world.count(WallMaterial.WATER) == 0


def test_levels_without_layout_reuse_first_grid():
    assert layout_for_level(4) is LEVEL_LAYOUTS[0]


def test_ragged_layout_is_rejected(rules):
    with pytest.raises(LayoutError, match="row 1"):
        World.from_layout([[1, 0, 1], [1, 0]], rules)


def test_unknown_tile_code_is_rejected(rules):
    with pytest.raises(LayoutError, match="unknown tile code 9"):
        World.from_layout([[0, 9]], rules)


def test_empty_layout_is_rejected(rules):
    with pytest.raises(LayoutError):
        World.from_layout([], rules)


def test_grass_blocks_neither_tanks_nor_bullets(empty_world):
    empty_world.walls.add(Wall(0, 0, WallMaterial.GRASS))
    probe = Rect(10, 10, 8, 8)

    assert empty_world.blocks_tank(probe) is False
    assert empty_world.bullet_hits(probe) == []


def test_water_blocks_tanks_but_not_bullets(empty_world):
    empty_world.walls.add(Wall(0, 0, WallMaterial.WATER))
    probe = Rect(10, 10, 8, 8)

    assert empty_world.blocks_tank(probe) is True
    assert empty_world.bullet_hits(probe) == []


def test_bullet_hits_report_wall_ids(empty_world):
    brick_id = empty_world.walls.add(Wall(0, 0, WallMaterial.BRICK))
    empty_world.walls.add(Wall(200, 0, WallMaterial.STEEL))

    hits = empty_world.bullet_hits(Rect(36, 10, 8, 8))

    assert [wall_id for wall_id, _ in hits] == [brick_id]
    assert empty_world.remove_wall(brick_id) is True
    assert empty_world.bullet_hits(Rect(36, 10, 8, 8)) == []


def test_iter_rows_draws_visible_rows_only():
    world = World.from_layout(layout_for_level(1), GameRules())

    rows = list(world.iter_rows())

    assert len(rows) == 600 // 40
    assert rows[0] == "#" * 20
    assert rows[3][2] == '"'
    assert rows[1][1] == " "
