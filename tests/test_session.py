import random

import pytest

from tank_battle.core.entities import Bullet, Owner
from tank_battle.core.geometry import Direction
from tank_battle.core.input import IDLE
from tank_battle.core.savegame import SaveData
from tank_battle.core.session import GameSession, Phase, SoundCue


def _hit_player(session: GameSession) -> None:
    player = session.game.player
    session.game.bullets.add(Bullet(player.x + 12, player.y + 12, Direction.DOWN, Owner.ENEMY))


def _clear_enemies(session: GameSession) -> None:
    for enemy in session.game.enemies:
        enemy.destroy()


def test_session_starts_on_title_screen(session):
    assert session.phase is Phase.START
    assert session.game is None
    assert session.tick(IDLE) is None
    assert session.enemies_remaining == 0


def test_start_game_loads_level_one(session):
    assert session.start_game() is True

    assert session.phase is Phase.PLAYING
    assert session.current_level == 1
    assert session.score == 0
    assert session.lives == 3
    assert session.enemies_remaining == 4


@pytest.mark.parametrize(
    "action",
    ["pause", "resume", "restart", "quit_to_start", "acknowledge_game_over", "back_to_start"],
)
def test_invalid_transitions_from_start_are_ignored(session, action):
    assert getattr(session, action)() is False
    assert session.phase is Phase.START


def test_menus_cannot_open_mid_game(session):
    session.start_game()

    assert session.open_settings() is False
    assert session.open_level_select() is False
    assert session.start_game() is False
    assert session.phase is Phase.PLAYING


def test_pause_freezes_simulation(session):
    session.start_game()
    player = session.game.player
    position = (player.x, player.y)

    assert session.pause() is True
    assert session.tick(IDLE) is None
    assert (player.x, player.y) == position
    assert session.pause() is False


def test_resume_is_idempotent(session):
    session.start_game()
    session.pause()

    assert session.resume() is True
    assert session.resume() is False
    assert session.phase is Phase.PLAYING


def test_toggle_pause_round_trip(session):
    session.start_game()

    session.toggle_pause()
    assert session.phase is Phase.PAUSED
    session.toggle_pause()
    assert session.phase is Phase.PLAYING


def test_kill_awards_score_and_explode_cue(session):
    session.start_game()
    session.drain_sound_cues()
    enemy = next(iter(session.game.enemies))
    session.game.bullets.add(Bullet(enemy.x + 12, enemy.y + 12, Direction.UP, Owner.PLAYER))

    session.tick(IDLE)

    assert session.score == 100
    assert session.enemies_remaining == 3
    assert SoundCue.EXPLODE in session.drain_sound_cues()
    assert session.drain_sound_cues() == []


def test_player_respawns_while_lives_remain(session):
    session.start_game()
    first_player = session.game.player
    _hit_player(session)

    session.tick(IDLE)

    assert session.lives == 2
    assert session.phase is Phase.PLAYING
    assert first_player.alive is False
    assert session.game.player is not first_player
    assert session.game.player.alive
    assert (session.game.player.x, session.game.player.y) == (40, 520)


def test_losing_last_life_ends_game(session, saved):
    session.start_game()
    session.lives = 1
    session.drain_sound_cues()
    _hit_player(session)

    session.tick(IDLE)

    assert session.lives == 0
    assert session.phase is Phase.GAME_OVER
    assert session.victory is False
    assert session.outcome_label == "Game Over"
    cues = session.drain_sound_cues()
    assert cues[-1] == SoundCue.GAME_OVER
    assert SoundCue.EXPLODE in cues
    assert saved and saved[-1].lives == 0


def test_clearing_level_advances_with_fresh_entities(session):
    session.start_game()
    session.game.bullets.add(Bullet(400, 300, Direction.LEFT, Owner.ENEMY))
    _clear_enemies(session)

    session.tick(IDLE)

    assert session.phase is Phase.PLAYING
    assert session.current_level == 2
    assert session.enemies_remaining == 5
    assert len(session.game.bullets) == 0
    assert len(session.game.explosions) == 0
    assert all(enemy.alive for enemy in session.game.enemies)
    assert SoundCue.LEVEL_UP in session.drain_sound_cues()


def test_clearing_final_level_is_victory(quiet_rules, saved):
    session = GameSession(
        quiet_rules,
        SaveData(current_level=5, score=0),
        rng=random.Random(3),
        persist=saved.append,
    )
    assert session.open_level_select() is True
    assert session.start_at_level(5) is True
    assert session.enemies_remaining == 8
    _clear_enemies(session)

    session.tick(IDLE)

    assert session.phase is Phase.GAME_OVER
    assert session.victory is True
    assert session.outcome_label == "Victory!"
    assert saved[-1].current_level == 5


def test_last_life_lost_while_clearing_final_level_is_defeat(quiet_rules, saved):
    session = GameSession(
        quiet_rules,
        SaveData(current_level=5, score=0),
        rng=random.Random(3),
        persist=saved.append,
    )
    session.open_level_select()
    session.start_at_level(5)
    session.lives = 1
    enemies = list(session.game.enemies)
    for enemy in enemies[1:]:
        enemy.destroy()
    last = enemies[0]
    session.game.bullets.add(Bullet(last.x + 12, last.y + 12, Direction.UP, Owner.PLAYER))
    _hit_player(session)

    session.tick(IDLE)

    assert session.enemies_remaining == 0
    assert session.lives == 0
    assert session.phase is Phase.GAME_OVER
    assert session.victory is False
    assert session.outcome_label == "Game Over"
    assert len(saved) == 1


def test_respawn_waits_until_spawn_is_clear(session):
    session.start_game()
    game = session.game
    blocker = next(iter(game.enemies))
    blocker.x, blocker.y = 40, 500
    first_player = game.player
    _hit_player(session)

    session.tick(IDLE)

    assert session.lives == 2
    assert game.player is first_player
    assert game.player.alive is False
    assert game.respawn_pending is True

    blocker.x, blocker.y = 300, 300
    session.tick(IDLE)

    assert game.respawn_pending is False
    assert game.player is not first_player
    assert game.player.alive
    assert not game.player.rect.overlaps(blocker.rect)


def test_restart_and_quit_after_game_over(session):
    session.start_game()
    session.lives = 1
    _hit_player(session)
    session.tick(IDLE)
    assert session.phase is Phase.GAME_OVER

    assert session.restart() is True
    assert session.phase is Phase.PLAYING
    assert session.lives == 3

    session.pause()
    assert session.quit_to_start() is True
    assert session.phase is Phase.START


def test_level_unlock_rule(quiet_rules):
    fresh = GameSession(quiet_rules, SaveData(current_level=2, score=0), persist=lambda _d: None)

    assert fresh.is_level_unlocked(1)
    assert fresh.is_level_unlocked(2)
    assert not fresh.is_level_unlocked(3)
    assert not fresh.is_level_unlocked(0)
    assert not fresh.is_level_unlocked(6)

    scored = GameSession(quiet_rules, SaveData(current_level=1, score=50), persist=lambda _d: None)
    assert all(scored.is_level_unlocked(n) for n in range(1, 6))


def test_start_at_level_validation(session):
    with pytest.raises(ValueError):
        session.start_at_level(0)
    with pytest.raises(ValueError):
        session.start_at_level(6)

    # Only valid from the level select screen.
    assert session.start_at_level(1) is False

    session.open_level_select()
    assert session.start_at_level(2) is False
    assert session.phase is Phase.LEVEL_SELECT
    assert session.start_at_level(1) is True


def test_saving_settings_persists_and_returns_to_start(session, saved):
    assert session.open_settings() is True

    assert session.save_settings(False) is True

    assert session.phase is Phase.START
    assert session.sound_enabled is False
    assert saved[-1].sound_enabled is False


def test_back_to_start_discards_settings(session, saved):
    session.open_settings()

    assert session.back_to_start() is True
    assert session.phase is Phase.START
    assert saved == []


def test_saved_level_is_clamped(quiet_rules):
    session = GameSession(quiet_rules, SaveData(current_level=9), persist=lambda _d: None)

    assert session.current_level == quiet_rules.max_level
