from .text_output import PasteDispatcher

__all__ = ["PasteDispatcher"]
