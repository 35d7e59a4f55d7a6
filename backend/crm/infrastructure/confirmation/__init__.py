from .static_confirmation import StaticConfirmation

__all__ = ["StaticConfirmation"]
