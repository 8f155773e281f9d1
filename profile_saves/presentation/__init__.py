from .signals import ProfileSignals

__all__ = ["ProfileSignals"]
