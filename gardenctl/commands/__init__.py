from . import target

__all__ = ['target']
