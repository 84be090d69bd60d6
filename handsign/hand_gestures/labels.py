"""Closed set of gesture labels: the 26 letters plus the reject class."""

from enum import Enum


class Label(Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"
    I = "I"
    J = "J"
    K = "K"
    L = "L"
    M = "M"
    N = "N"
    O = "O"
    P = "P"
    Q = "Q"
    R = "R"
    S = "S"
    T = "T"
    U = "U"
    V = "V"
    W = "W"
    X = "X"
    Y = "Y"
    Z = "Z"
    NONE = "NONE"
    # Alias: the "no recognizable gesture" class.
    REJECT = "NONE"

    @property
    def is_reject(self) -> bool:
        return self is Label.NONE

    @classmethod
    def from_name(cls, name) -> "Label | None":
        """Look up a label by its serialized name, or None if unknown."""
        if not isinstance(name, str):
            return None
        try:
            return cls(name.strip().upper())
        except ValueError:
            return None


# Canonical iteration order: letters A-Z, then the reject class.
ALL_LABELS: tuple[Label, ...] = tuple(Label)
LETTER_LABELS: tuple[Label, ...] = tuple(l for l in ALL_LABELS if not l.is_reject)
