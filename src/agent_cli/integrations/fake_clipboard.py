"""In-memory clipboard for tests."""

from agent_cli.integrations.clipboard import Clipboard


class FakeClipboard(Clipboard):
    """Records copied text instead of touching the system clipboard."""

    def __init__(self) -> None:
        self._copied: list[str] = []

    @property
    def copied(self) -> list[str]:
        """Every text passed to copy, oldest first."""
        return list(self._copied)

    def copy(self, text: str) -> None:
        self._copied.append(text)
