from typing import Generic, Optional, Type, TypeVar
import json
import os
from loguru import logger

from settingsbinder.settings.model import ObservableSettings

S = TypeVar('S', bound=ObservableSettings)


class SettingsStore(Generic[S]):
    """
    Loads and saves an ObservableSettings instance as JSON (TOML is read too).

    Args:
        settings_type: The settings class to instantiate.
        filepath: Location of the settings file.
        autosave: Save after every property change.
    """
    def __init__(self, settings_type: Type[S], filepath: str = "settings.json", autosave: bool = False):
        self.settings_type = settings_type
        self.filepath = filepath
        self.autosave = autosave
        self._settings: Optional[S] = None

    @property
    def settings(self) -> S:
        if self._settings is None:
            self.load()
        return self._settings

    def load(self) -> S:
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        data = None
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                data = self.settings_type.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load settings from {self.filepath}: {e}")

        created = data is None
        if created:
            data = self.settings_type()

        if self._settings is not None:
            self._settings.property_changed.disconnect(self._on_changed)
        self._settings = data
        if self.autosave:
            data.property_changed.connect(self._on_changed)

        if created:
            self.save()
        return data

    def save(self) -> bool:
        """Persist current settings to JSON file. Returns False if writing failed."""
        if self._settings is None:
            return False
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._settings.model_dump(mode="json"), f, indent=4)
            return True
        except Exception as e:
            logger.error(f"Failed to save settings to {self.filepath}: {e}")
            return False

    def _on_changed(self, name: str, *args):
        self.save()
