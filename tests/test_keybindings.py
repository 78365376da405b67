import pygame
import pytest

from tank_battle.pygame.keybindings import KeybindingManager


@pytest.fixture
def manager(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    try:
        yield KeybindingManager()
    finally:
        pygame.quit()


def test_default_and_alternate_keys(manager):
    assert manager.keys_for("up") == (pygame.K_UP, pygame.K_w)
    assert manager.keys_for("fire") == (pygame.K_SPACE, pygame.K_j)
    assert manager.keys_for("pause") == (pygame.K_ESCAPE, pygame.K_p)


def test_rebinding_updates_primary_key(manager):
    manager.start_rebinding("fire")

    message = manager.finish_rebinding(pygame.K_f)

    assert manager.bindings.fire == pygame.K_f
    assert manager.rebinding_target is None
    assert message.startswith("Fire bound to")


def test_duplicate_binding_is_refused(manager):
    manager.start_rebinding("fire")

    message = manager.finish_rebinding(pygame.K_UP)

    assert "already bound to Move Up" in message
    assert manager.bindings.fire == pygame.K_SPACE
    assert manager.rebinding_target == "fire"
    assert manager.cancel_rebinding() == "Rebinding cancelled."


def test_config_round_trip_and_reset(manager):
    manager.start_rebinding("left")
    manager.finish_rebinding(pygame.K_q)
    config = manager.to_config()

    other = KeybindingManager()
    other.load_from_config(config)
    assert other.bindings.left == pygame.K_q

    other.reset_to_defaults()
    assert other.bindings.left == pygame.K_LEFT


def test_config_with_duplicates_is_ignored(manager):
    config = manager.to_config()
    config["down"] = config["up"]

    manager.load_from_config(config)

    assert manager.bindings.down == pygame.K_DOWN


def test_menu_options_list_every_action(manager):
    entries = manager.build_menu_options(lambda _f: None, lambda: None, lambda: None)

    labels = [label for label, _ in entries]
    assert labels[0].startswith("Move Up: ")
    assert labels[-2:] == ["Reset to Defaults", "Back to Settings"]
    assert len(labels) == len(manager.binding_fields) + 2


def test_alternate_key_of_another_action_is_refused(manager):
    manager.start_rebinding("up")

    message = manager.finish_rebinding(pygame.K_s)

    assert "already bound to Move Down" in message
    assert manager.bindings.up == pygame.K_UP
    assert manager.rebinding_target == "up"


def test_own_alternate_key_can_become_primary(manager):
    manager.start_rebinding("up")

    manager.finish_rebinding(pygame.K_w)

    assert manager.bindings.up == pygame.K_w
    assert manager.keys_for("up") == (pygame.K_w,)


def test_config_clashing_with_alternate_layout_is_ignored(manager):
    config = manager.to_config()
    config["fire"] = pygame.K_p

    manager.load_from_config(config)

    assert manager.bindings.fire == pygame.K_SPACE
