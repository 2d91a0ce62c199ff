"""Light/dark theme: root style classes and the rich palette derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .settings import SettingsStore


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


# Mutually exclusive class pairs applied to the root of the view.
ROOT_CLASSES: dict[Theme, tuple[str, str]] = {
    Theme.LIGHT: ("bg-light", "text-dark"),
    Theme.DARK: ("bg-dark", "text-white"),
}


def apply_root_classes(classes: set[str], theme: Theme) -> set[str]:
    """Swap the root class pair in place so only ``theme``'s pair remains."""
    for other, pair in ROOT_CLASSES.items():
        if other is not theme:
            classes.difference_update(pair)
    classes.update(ROOT_CLASSES[theme])
    return classes


@dataclass(frozen=True)
class Palette:
    root: str
    card: str
    card_border: str
    link: str
    muted: str
    accent: str
    error: str


PALETTES: dict[Theme, Palette] = {
    Theme.LIGHT: Palette(
        root="black on grey93",
        card="black on white",
        card_border="grey50",
        link="bold blue",
        muted="grey42",
        accent="bold dark_orange3",
        error="bold white on red3",
    ),
    Theme.DARK: Palette(
        root="white on grey11",
        card="white on grey19",
        card_border="grey62",
        link="bold sky_blue1",
        muted="grey70",
        accent="bold orange1",
        error="bold white on dark_red",
    ),
}


def palette_for(theme: Theme) -> Palette:
    return PALETTES[theme]


@dataclass
class ThemeSettings:
    """The active theme, handed explicitly to everything that renders."""

    theme: Theme = Theme.LIGHT
    root_classes: set[str] = field(default_factory=set)

    def __post_init__(self):
        apply_root_classes(self.root_classes, self.theme)

    @classmethod
    def from_store(cls, store: "SettingsStore") -> "ThemeSettings":
        from .settings import load_theme

        return cls(theme=load_theme(store))

    @property
    def dark(self) -> bool:
        return self.theme is Theme.DARK

    @property
    def palette(self) -> Palette:
        return palette_for(self.theme)

    def toggle(self, store: "SettingsStore") -> Theme:
        from .settings import save_theme

        theme = self.theme.toggled()
        # Persist first so a failed write leaves the current theme intact.
        save_theme(store, theme)
        self.theme = theme
        apply_root_classes(self.root_classes, theme)
        return theme
