from .trigger import ZohoDeskTrigger

__all__ = ["ZohoDeskTrigger"]
