from typing import Optional

from PySide6.QtCore import Qt

_NAMED_KEYS = {
    int(Qt.Key_Left): "ArrowLeft",
    int(Qt.Key_Right): "ArrowRight",
    int(Qt.Key_Up): "ArrowUp",
    int(Qt.Key_Down): "ArrowDown",
    int(Qt.Key_Backspace): "Backspace",
    int(Qt.Key_Delete): "Delete",
    int(Qt.Key_Tab): "Tab",
    int(Qt.Key_Backtab): "Shift+Tab",
    int(Qt.Key_Space): " ",
}


def key_name(key: int, text: str = "", shift: bool = False) -> Optional[str]:
    """Translate a Qt key press into the name SessionController.handle_key expects"""
    key = int(key)
    if key == int(Qt.Key_Tab) and shift:
        return "Shift+Tab"
    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    if int(Qt.Key_A) <= key <= int(Qt.Key_Z):
        return chr(key).upper()
    if len(text) == 1 and text.isalpha():
        return text.upper()
    return None
