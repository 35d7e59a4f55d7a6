"""Confirmation adapter for callers that collect the answer before the call."""

from crm.application.interfaces import Confirmation


class StaticConfirmation(Confirmation):
    """Answers every prompt with a fixed decision taken by the caller upfront.

    Used by the HTTP delete endpoint, where the client sends ``confirm=true``
    after showing its own dialog. Prompts are kept for logging and tests.
    """

    def __init__(self, confirmed: bool):
        self._confirmed = confirmed
        self.prompts: list[str] = []

    def confirm(self, prompt_context: str) -> bool:
        self.prompts.append(prompt_context)
        return self._confirmed
