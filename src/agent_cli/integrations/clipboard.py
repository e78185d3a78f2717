"""Clipboard sink used by `agent prompt copy`."""

from abc import ABC, abstractmethod

import pyperclip


class Clipboard(ABC):
    """Abstract interface for copying text to the system clipboard."""

    @abstractmethod
    def copy(self, text: str) -> None:
        """Place text on the clipboard.

        Raises:
            RuntimeError: If no clipboard mechanism is available
        """
        ...


class SystemClipboard(Clipboard):
    """Production clipboard backed by pyperclip."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise RuntimeError(f"Clipboard is not available: {e}") from e
