"""Abstract interface (port) for asking the user to confirm a destructive action."""

from abc import ABC, abstractmethod


class Confirmation(ABC):
    """Port for a synchronous yes/no prompt."""

    @abstractmethod
    def confirm(self, prompt_context: str) -> bool:
        """Return True if the user accepts the action described by the prompt."""
        ...
