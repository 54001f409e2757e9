from .node import ZohoDeskNode, RATE_LIMIT_MESSAGE

__all__ = ["ZohoDeskNode", "RATE_LIMIT_MESSAGE"]
