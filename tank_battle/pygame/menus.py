"""Menu and HUD rendering helpers for the pygame client."""

from __future__ import annotations

import pygame

from tank_battle.pygame.input import MENU_STATES


def _draw_touch_controls(app, surface: pygame.Surface) -> None:
    touch = app.input.touch
    idle = pygame.Color(60, 66, 84)
    active = pygame.Color(120, 200, 120)
    outline = pygame.Color(150, 158, 176)
    arrows = {"up": "^", "down": "v", "left": "<", "right": ">", "fire": "FIRE"}
    for name, rect in touch.buttons.items():
        color = active if touch.held[name] else idle
        pygame.draw.rect(surface, color, rect, border_radius=6)
        pygame.draw.rect(surface, outline, rect, width=1, border_radius=6)
        font = app.font_small
        label = font.render(arrows[name], True, pygame.Color(230, 230, 230))
        surface.blit(label, label.get_rect(center=rect.center))


def draw_hud(app) -> None:
    surface = app.screen
    panel = app.display.hud_rect
    session = app.session

    pygame.draw.rect(surface, pygame.Color(10, 12, 20), panel)
    pygame.draw.line(surface, pygame.Color(60, 66, 84), panel.topleft, panel.topright, 2)

    text_color = pygame.Color(230, 230, 230)
    text_muted = pygame.Color(180, 188, 200)

    stats = [
        f"Lives: {session.lives}",
        f"Score: {session.score}",
        f"Enemies: {session.enemies_remaining}",
        f"Level: {session.current_level}",
    ]
    stats_surface = app.font_regular.render("    ".join(stats), True, text_color)
    stats_rect = stats_surface.get_rect(center=(panel.centerx, panel.top + 22))
    surface.blit(stats_surface, stats_rect)

    message = app.message or session.message
    if message:
        message_surface = app.font_small.render(message, True, text_muted)
        message_rect = message_surface.get_rect(center=(panel.centerx, stats_rect.bottom + 16))
        surface.blit(message_surface, message_rect)

    if app.show_touch_controls:
        _draw_touch_controls(app, surface)
    else:
        hint = app.font_small.render(
            "Arrows/WASD move   Space/J fire   Esc/P pause", True, text_muted
        )
        surface.blit(hint, hint.get_rect(center=(panel.centerx, panel.bottom - 14)))


def draw_menu_overlay(app) -> None:
    if app.state not in MENU_STATES:
        return
    surface = app.screen
    alpha = 200 if app.state in {"start_menu", "settings_menu", "level_select", "keybind_menu"} else 160
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    surface.blit(overlay, (0, 0))

    center_x = surface.get_width() // 2
    center_y = surface.get_height() // 2

    title_surface = app.font_large.render(app.menu.title, True, pygame.Color("white"))
    title_rect = title_surface.get_rect(center=(center_x, center_y - 150))
    surface.blit(title_surface, title_rect)
    title_bottom = title_rect.bottom

    if app.menu.message:
        message_surface = app.font_regular.render(
            app.menu.message, True, pygame.Color(220, 220, 220)
        )
        message_rect = message_surface.get_rect(center=(center_x, title_bottom + 36))
        surface.blit(message_surface, message_rect)
        options_start_y = message_rect.bottom + 32
    else:
        options_start_y = title_bottom + 40

    option_font = app.font_regular
    option_spacing = 40
    if app.state == "keybind_menu":
        option_spacing = max(option_font.get_height() + 8, 30)

    total_options_height = len(app.menu.options) * option_spacing
    max_start = surface.get_height() - 80 - total_options_height
    options_start_y = max(min(options_start_y, max_start), title_bottom + 16)

    for idx, option in enumerate(app.menu.options):
        is_selected = idx == app.menu.selection
        if not option.enabled:
            color = pygame.Color(110, 110, 110)
        elif is_selected:
            color = pygame.Color("white")
        else:
            color = pygame.Color(200, 200, 200)
        text_surface = option_font.render(option.label, True, color)
        text_rect = text_surface.get_rect(center=(center_x, options_start_y + idx * option_spacing))
        if is_selected and option.enabled:
            highlight = pygame.Surface((text_rect.width + 36, text_rect.height + 12), pygame.SRCALPHA)
            highlight.fill((255, 255, 255, 50))
            surface.blit(highlight, highlight.get_rect(center=text_rect.center))
        surface.blit(text_surface, text_rect)

    footer_text = None
    if app.state == "start_menu":
        footer_text = "Esc exits the game"
    elif app.state == "pause_menu":
        footer_text = "Esc resumes"
    elif app.state == "keybind_menu":
        footer_text = "Esc returns to Settings"
    elif app.state == "settings_menu":
        footer_text = "Left/Right adjust   Esc discards changes"
    elif app.state in {"level_select", "game_over_menu"}:
        footer_text = "Esc returns to the start menu"

    if footer_text:
        footer_surface = app.font_small.render(footer_text, True, pygame.Color(180, 180, 180))
        footer_rect = footer_surface.get_rect(center=(center_x, surface.get_height() - 36))
        surface.blit(footer_surface, footer_rect)


__all__ = ["draw_hud", "draw_menu_overlay"]
