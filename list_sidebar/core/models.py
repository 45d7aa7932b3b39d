from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias


@dataclass
class ListItem:
    content: str


@dataclass
class SidebarList:
    """
    One named list of the sidebar.
    Names are not required to be unique; order inside the collection is the storage order.
    """
    name: str
    expanded: bool = True
    items: list[ListItem] = field(default_factory=list)

    def add_item(self, content: str) -> ListItem:
        item = ListItem(content)
        self.items.append(item)
        return item

    def item_texts(self) -> list[str]:
        return [it.content for it in self.items]


ListCollection: TypeAlias = list[SidebarList]
