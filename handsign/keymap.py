"""Keyboard bindings for the live sign trainer."""

from enum import Enum

from .hand_gestures.labels import Label
from .service import SignRecognizer

KEY_ESC = 27
KEY_BACKSPACE = (8, 127)
KEY_NONE_LABEL = "/"
KEY_UNDO = "."
KEY_PREDICT = " "
KEY_RECORD = ("-", "_")
KEY_RELEASE = ","
KEY_EXPORT = "1"
KEY_IMPORT = "0"

HELP = """
==================================================
Hand Sign Trainer
==================================================

Controls:
  A-Z        - Add example for that letter (in record mode: capture it)
  /          - Add example for NONE (in record mode: capture it)
  .          - Undo last add
  SPACE      - Prediction on/off
  -          - Record mode on/off
  ,          - Record mode: stop capturing the held label
  BACKSPACE  - Clear dataset
  1          - Export dataset JSON
  0          - Import dataset JSON
  ESC        - Quit
"""


class KeyAction(Enum):
    NONE = "none"
    QUIT = "quit"
    EXPORT = "export"
    IMPORT = "import"


def label_for_key(ch: str) -> Label | None:
    """Map a typed character to its label, if it names one."""
    if ch == KEY_NONE_LABEL:
        return Label.NONE
    if len(ch) == 1 and ch.isascii() and ch.isalpha():
        return Label.from_name(ch)
    return None


def handle_key(recognizer: SignRecognizer, key: int) -> KeyAction:
    """
    Apply one key press to the recognizer.

    Args:
        recognizer: Target recognizer
        key: Key code from cv2.waitKey (-1 when no key)

    Returns:
        Action the caller must perform (quit, export, import), or NONE
    """
    if key < 0:
        return KeyAction.NONE
    key &= 0xFF
    if key == KEY_ESC:
        return KeyAction.QUIT
    if key in KEY_BACKSPACE:
        recognizer.clear()
        return KeyAction.NONE

    ch = chr(key)
    if ch in KEY_RECORD:
        recognizer.set_record_mode(not recognizer.record.enabled)
        return KeyAction.NONE

    label = label_for_key(ch)
    if label is not None:
        if recognizer.record.enabled:
            # Auto-repeat presses of the held label keep capturing at the record pace.
            if recognizer.record.held_label is not label:
                recognizer.set_held_label(label)
        else:
            recognizer.add_example(label)
        return KeyAction.NONE

    if ch == KEY_RELEASE:
        recognizer.set_held_label(None)
    elif ch == KEY_UNDO:
        recognizer.undo()
    elif ch == KEY_PREDICT:
        recognizer.toggle_predicting()
    elif ch == KEY_EXPORT:
        return KeyAction.EXPORT
    elif ch == KEY_IMPORT:
        return KeyAction.IMPORT
    return KeyAction.NONE
