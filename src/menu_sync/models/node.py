"""Domain models for pages, menu items, and sync results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from menu_sync.core.identity_map import IdentityMap


class PageStatus(str, Enum):
    """Publication status of a page. Only published pages are mirrored."""

    PUBLISHED = "publish"
    DRAFT = "draft"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "PageStatus":
        """Coerce a raw status string, mapping anything unknown to OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class SourceNode:
    """A single page in the source tree."""

    id: int
    title: str
    parent_id: int | None
    order_key: int = 0
    status: PageStatus = PageStatus.PUBLISHED

    @property
    def is_published(self) -> bool:
        return self.status is PageStatus.PUBLISHED

    @property
    def is_root(self) -> bool:
        # The host platform stores "no parent" as 0.
        return not self.parent_id


@dataclass(frozen=True)
class MenuItem:
    """A single item in the derived menu, pointing back at its page."""

    id: int
    menu_id: int
    title: str
    object_id: int
    parent_item_id: int | None
    position: int
    object_type: str = "page"
    item_type: str = "post_type"
    status: str = "publish"


class SyncOutcome(str, Enum):
    """What a sync call did, or why it did nothing."""

    CREATED = "created"
    UPDATED = "updated"
    FULL_SYNC = "full_sync"
    SKIPPED_UNPUBLISHED = "skipped_unpublished"
    SKIPPED_NO_STRUCTURE = "skipped_no_structure"
    SKIPPED_NO_IDENTITY_MAP = "skipped_no_identity_map"
    SKIPPED_UNKNOWN_PAGE = "skipped_unknown_page"

    @property
    def is_noop(self) -> bool:
        return self.value.startswith("skipped_")


@dataclass(frozen=True)
class SyncResult:
    """Result of a full or incremental sync.

    ``identity_map`` is the map the caller should persist. For skipped
    outcomes it is the exact object that was passed in (possibly None).
    """

    outcome: SyncOutcome
    identity_map: "IdentityMap | None"
    created: tuple[int, ...] = ()
    updated: tuple[int, ...] = ()
    unresolved_parents: tuple[int, ...] = ()

    @property
    def changed(self) -> bool:
        """True when new associations were added to the identity map."""
        return bool(self.created)


@dataclass(frozen=True)
class BootstrapResult:
    """Summary of a bootstrap check."""

    menu_id: int | None
    created: bool
    sync: SyncResult | None = field(default=None)
