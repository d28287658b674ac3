"""Colour themes and the persisted theme choice."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.application.interfaces.local_store import IKeyValueStore
from storefront.core.constants import LOCAL_KEY_THEME
from storefront.domain.enums import ThemeName
from storefront.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Theme:
    name: ThemeName
    label: str
    colors: tuple[str, ...]


THEMES: tuple[Theme, ...] = (
    Theme(ThemeName.DEFAULT, "Indigo", ("#6366f1", "#8b5cf6", "#a855f7")),
    Theme(ThemeName.OCEAN, "Ocean", ("#0ea5e9", "#06b6d4", "#14b8a6")),
    Theme(ThemeName.SUNSET, "Sunset", ("#f97316", "#ef4444", "#ec4899")),
    Theme(ThemeName.FOREST, "Forest", ("#22c55e", "#10b981", "#059669")),
    Theme(ThemeName.ROYAL, "Royal", ("#8b5cf6", "#a855f7", "#d946ef")),
    Theme(ThemeName.CHERRY, "Cherry", ("#f43f5e", "#ec4899", "#db2777")),
    Theme(ThemeName.GOLD, "Gold", ("#eab308", "#f59e0b", "#d97706")),
    Theme(ThemeName.MIDNIGHT, "Midnight", ("#3b82f6", "#6366f1", "#8b5cf6")),
    Theme(ThemeName.NEON, "Neon", ("#10b981", "#06b6d4", "#a855f7")),
    Theme(ThemeName.ROSE, "Rose", ("#f43f5e", "#fb7185", "#f472b6")),
    Theme(ThemeName.EMBER, "Ember", ("#f97316", "#ea580c", "#dc2626")),
)
_BY_NAME = {theme.name: theme for theme in THEMES}


class ThemeService:
    """Reads and writes the selected theme in the local store."""

    def __init__(self, local: IKeyValueStore) -> None:
        self._local = local

    @property
    def themes(self) -> tuple[Theme, ...]:
        return THEMES

    def current(self) -> Theme:
        """Selected theme; a missing or unknown stored value gives the default."""
        raw = self._local.get(LOCAL_KEY_THEME)
        if raw:
            try:
                return _BY_NAME[ThemeName(raw)]
            except ValueError:
                logger.warning("Unknown stored theme %r; using default", raw)
        return _BY_NAME[ThemeName.DEFAULT]

    def set_theme(self, name: ThemeName | str) -> Theme:
        try:
            theme = _BY_NAME[ThemeName(name)]
        except ValueError:
            raise ValidationException(f"Unknown theme: {name}", field="theme") from None
        self._local.set(LOCAL_KEY_THEME, theme.name.value)
        return theme
