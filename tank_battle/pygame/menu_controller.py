"""Menu state management for the pygame client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional


@dataclass(frozen=True)
class MenuOption:
    """Entry rendered in a menu overlay; disabled entries are shown but skipped."""

    label: str
    action: Callable[[], None]
    enabled: bool = True


MessageProvider = Callable[[], Optional[str]]
OptionBuilder = Callable[[], List[MenuOption]]
TitleProvider = Callable[[], str]


@dataclass
class MenuDefinition:
    """Declarative description of a menu screen."""

    title: TitleProvider
    build_options: OptionBuilder
    default_message: Optional[MessageProvider] = None


@dataclass
class MenuController:
    """Track active menu, selection, and status messaging."""

    definitions: Dict[str, MenuDefinition] = field(default_factory=dict)
    state: Optional[str] = None
    title: str = "Tank Battle"
    message: Optional[str] = None
    selection: int = 0
    options: List[MenuOption] = field(default_factory=list)

    def register(self, name: str, definition: MenuDefinition) -> None:
        self.definitions[name] = definition

    def activate(self, name: str, *, message: Optional[str] = None) -> None:
        if name not in self.definitions:
            raise KeyError(f"Unknown menu '{name}'")
        self.state = name
        definition = self.definitions[name]
        self.title = definition.title()
        self.options = definition.build_options()
        self.selection = self._first_enabled(0)
        if message is not None:
            self.message = message
        else:
            self.message = definition.default_message() if definition.default_message else None

    def close(self) -> None:
        self.state = None
        self.options = []
        self.selection = 0
        self.message = None

    def update_options(self) -> None:
        if self.state is None:
            return
        definition = self.definitions[self.state]
        self.options = definition.build_options()
        self.selection = self._first_enabled(min(self.selection, max(len(self.options) - 1, 0)))

    def set_message(self, text: Optional[str]) -> None:
        self.message = text

    def change_selection(self, delta: int) -> None:
        if not self.options:
            return
        index = self.selection
        for _ in range(len(self.options)):
            index = (index + delta) % len(self.options)
            if self.options[index].enabled:
                self.selection = index
                return

    def execute_current(self) -> bool:
        if not self.options:
            return False
        option = self.current_option
        if not option.enabled:
            return False
        option.action()
        return True

    @property
    def current_option(self) -> MenuOption:
        return self.options[self.selection]

    def _first_enabled(self, start: int) -> int:
        if not self.options:
            return 0
        for offset in range(len(self.options)):
            index = (start + offset) % len(self.options)
            if self.options[index].enabled:
                return index
        return start


__all__ = ["MenuController", "MenuDefinition", "MenuOption"]
