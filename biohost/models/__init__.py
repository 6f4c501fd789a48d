from .base import Base
from .page import Page, PageType
from .block import Block

__all__ = [
    "Base",
    "Page",
    "PageType",
    "Block",
]
