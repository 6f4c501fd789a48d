import enum
from sqlalchemy import JSON, Boolean, Enum, String
from sqlalchemy.orm import mapped_column, relationship
from .base import Base, UUIDMixin, TimestampMixin
from ..services.ruleset import RuleSet, parse_ruleset


class PageType(str, enum.Enum):
    BIOLINK = "biolink"
    LINK = "link"


class Page(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "pages"

    url = mapped_column(String(256), unique=True, nullable=False)
    type = mapped_column(Enum(PageType, name="pagetype"), default=PageType.BIOLINK, nullable=False)
    location_url = mapped_column(String(2048), nullable=True)
    is_enabled = mapped_column(Boolean, default=True, nullable=False)
    settings = mapped_column(JSON, default=dict, nullable=False)

    blocks = relationship(
        "Block", back_populates="page", order_by="Block.order", cascade="all, delete-orphan"
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("is_enabled", True)
        kwargs.setdefault("settings", {})
        super().__init__(**kwargs)

    def get_setting(self, key: str, default=None):
        return (self.settings or {}).get(key, default)

    def targeting_rules(self) -> RuleSet:
        return parse_ruleset(self.get_setting("targeting"))

    def redirect_status(self) -> int:
        return 301 if str(self.get_setting("redirect_type", 302)) == "301" else 302
