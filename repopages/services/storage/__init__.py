from .entity_storage import EntityStorage

__all__ = ['EntityStorage']
