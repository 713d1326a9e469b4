# engine_py/src/dalmuti_engine/errors.py

from .constants import ERROR_CATEGORIES


class GameError(Exception):
    """Base exception for rejected actions. The match carries on."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

    @property
    def category(self) -> str:
        return ERROR_CATEGORIES.get(self.code, 'rule')


class InvariantViolation(Exception):
    """Raised when the match state is structurally broken (a programming defect)."""
