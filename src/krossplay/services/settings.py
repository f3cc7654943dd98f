from typing import Optional

from PySide6.QtCore import QSettings

ORGANIZATION = "KrossPlay"
APPLICATION = "KrossPlay"


class AppSettings:
    """Persistent user preferences backed by QSettings"""

    def __init__(self, settings: Optional[QSettings] = None):
        self.settings = settings if settings is not None else QSettings(ORGANIZATION, APPLICATION)

    @classmethod
    def from_file(cls, path: str) -> "AppSettings":
        return cls(QSettings(path, QSettings.Format.IniFormat))

    @property
    def puzzles_dir(self) -> str:
        return self.settings.value("puzzles_dir", "") or ""

    @puzzles_dir.setter
    def puzzles_dir(self, path: str) -> None:
        self.settings.setValue("puzzles_dir", path)

    @property
    def last_puzzle_id(self) -> str:
        return self.settings.value("last_puzzle_id", "") or ""

    @last_puzzle_id.setter
    def last_puzzle_id(self, puzzle_id: str) -> None:
        self.settings.setValue("last_puzzle_id", puzzle_id)

    @property
    def show_errors_on_check(self) -> bool:
        value = self.settings.value("show_errors_on_check", True)
        # INI files hand booleans back as strings
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    @show_errors_on_check.setter
    def show_errors_on_check(self, enabled: bool) -> None:
        self.settings.setValue("show_errors_on_check", enabled)

    def sync(self) -> None:
        self.settings.sync()
