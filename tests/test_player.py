import math

import pytest

from raycaster.player import (
    MOVE_SPEED,
    PLANE,
    PRECISION,
    ROTATION_SPEED,
    Key,
    Keys,
    spawn_player,
)

GRID = [
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]


@pytest.mark.parametrize(
    "facing, direction, plane",
    [
        ("N", (0, -1), (PLANE, 0)),
        ("E", (1, 0), (0, -PLANE)),
        ("S", (0, 1), (-PLANE, 0)),
        ("W", (-1, 0), (0, PLANE)),
    ],
)
def test_spawn_player_orientation(facing, direction, plane):
    player = spawn_player(facing, 2, 3)
    assert (player.dir_x, player.dir_y) == direction
    assert (player.plane_x, player.plane_y) == plane
    assert player.facing == facing


def test_spawn_player_centres_in_cell():
    player = spawn_player("N", 2, 3)
    assert (player.x, player.y) == (2.5, 3.5)


def test_spawn_player_invalid_facing():
    with pytest.raises(ValueError):
        spawn_player("Q", 1, 1)


def test_key_from_keysym():
    assert Key.from_keysym(0xFF1B) is Key.ESCAPE
    assert Key.from_keysym(ord("w")) is Key.W
    assert Key.from_keysym(ord("W")) is Key.W
    assert Key.from_keysym(ord("z")) is None


def test_keys_press_and_release():
    keys = Keys()
    keys.press(Key.UP)
    keys.press(ord("d"))
    assert Key.UP in keys
    assert Key.D in keys
    keys.release(Key.UP)
    keys.release(ord("D"))
    assert Key.UP not in keys
    assert keys.pressed == set()


def test_keys_ignore_unknown_codes():
    keys = Keys()
    keys.press(ord("z"))
    keys.release(ord("q"))
    assert keys.pressed == set()


def test_turn_and_back_restores_direction():
    player = spawn_player("E", 2, 2)
    player.turn(0.3)
    player.turn(-0.3)
    assert player.dir_x == pytest.approx(1.0)
    assert player.dir_y == pytest.approx(0.0, abs=1e-12)
    assert player.plane_y == pytest.approx(-PLANE)


def test_turn_keeps_lengths():
    player = spawn_player("N", 2, 2)
    player.turn(1.234)
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert math.hypot(player.plane_x, player.plane_y) == pytest.approx(PLANE)


def test_move_blocked_by_wall():
    player = spawn_player("N", 2, 1)
    player.move(GRID, 0.0, -1.0, 1)
    assert player.y == 1.5
    assert player.x == pytest.approx(2.5 - PRECISION)


def test_move_into_open_cell():
    player = spawn_player("N", 2, 2)
    player.move(GRID, 0.0, -0.5, 1)
    assert player.y < 2.5
    assert int(player.y) == 1


def test_move_backwards_blocked():
    player = spawn_player("N", 2, 3)
    player.move(GRID, 0.0, -1.0, -1)
    assert player.y == 3.5


def test_move_rejects_bad_sign():
    player = spawn_player("N", 2, 2)
    with pytest.raises(ValueError):
        player.move(GRID, 0.1, 0.1, 0)


def test_update_forward_moves_north():
    player = spawn_player("N", 2, 2)
    keys = Keys()
    keys.press(Key.W)
    player.update(keys, GRID)
    assert player.y < 2.5
    assert player.dir_y == -1


def test_update_backward_moves_south():
    player = spawn_player("N", 2, 2)
    keys = Keys()
    keys.press(Key.DOWN)
    player.update(keys, GRID)
    assert player.y > 2.5


def test_update_left_and_right_cancel():
    player = spawn_player("N", 2, 2)
    keys = Keys()
    keys.press(Key.LEFT)
    keys.press(Key.RIGHT)
    player.update(keys, GRID)
    assert player.dir_x == pytest.approx(0.0, abs=1e-12)
    assert player.dir_y == pytest.approx(-1.0)


def test_update_turn_direction_depends_on_facing():
    north = spawn_player("N", 2, 2)
    east = spawn_player("E", 2, 2)
    keys = Keys()
    keys.press(Key.LEFT)
    north.update(keys, GRID)
    east.update(keys, GRID)
    assert north.dir_x == pytest.approx(math.sin(ROTATION_SPEED))
    assert east.dir_y == pytest.approx(-math.sin(ROTATION_SPEED))


def test_update_without_keys_changes_nothing():
    player = spawn_player("S", 2, 2)
    before = (player.x, player.y, player.dir_x, player.dir_y)
    player.update(Keys(), GRID)
    assert (player.x, player.y, player.dir_x, player.dir_y) == before


def test_update_strafe_moves_along_plane():
    player = spawn_player("N", 2, 2)
    keys = Keys()
    keys.press(Key.D)
    player.update(keys, GRID)
    assert player.x > 2.5
    assert player.x < 2.5 + MOVE_SPEED