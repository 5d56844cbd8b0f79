from __future__ import annotations


class RandomSourceExhaustedError(RuntimeError):
    """A scripted source was asked for more draws than it was programmed with."""


class ScriptMismatchError(RuntimeError):
    """A scripted draw does not fit the range the engine asked for."""


class ClassificationError(ValueError):
    def __init__(self, label: str, message: str | None = None) -> None:
        super().__init__(message or f"cannot classify segment type '{label}' as match or promo")
        self.label = label


class PolicyError(ValueError):
    pass
