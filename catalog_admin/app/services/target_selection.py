"""Choosing where the products of a deleted category go"""

from enum import Enum
from typing import Iterable, List, Optional, Protocol, Set, Union

from ..schemas.category import CategoryNode, CategoryOption


class SelectionOutcome(str, Enum):
    CANCELLED = "cancelled"
    AUTOMATIC = "automatic"  # use the fallback category


TargetChoice = Union[int, SelectionOutcome]


class TargetSelection(Protocol):
    """Picks a relocation target among the valid candidates.

    Return a category id, SelectionOutcome.AUTOMATIC to let the fallback
    category receive the products, or SelectionOutcome.CANCELLED.
    """

    async def choose(
        self, candidates: List[CategoryOption], affected_products_count: int
    ) -> TargetChoice: ...


class PreselectedTarget:
    """Selection made ahead of time, e.g. by the admin UI before calling the API"""

    def __init__(self, target_category_id: Optional[int] = None):
        self.target_category_id = target_category_id

    async def choose(
        self, candidates: List[CategoryOption], affected_products_count: int
    ) -> TargetChoice:
        if self.target_category_id is None:
            return SelectionOutcome.AUTOMATIC
        return self.target_category_id


class CancelledSelection:
    async def choose(
        self, candidates: List[CategoryOption], affected_products_count: int
    ) -> TargetChoice:
        return SelectionOutcome.CANCELLED


def list_relocation_candidates(
    categories: Iterable[CategoryNode], excluded_ids: Set[int]
) -> List[CategoryOption]:
    """Flatten a category tree into selectable targets.

    Excluded nodes are skipped together with their whole subtree.
    """
    options: List[CategoryOption] = []
    seen: Set[int] = set()

    def visit(nodes: Iterable[CategoryNode], level: int) -> None:
        for node in nodes:
            if node.id in excluded_ids or node.id in seen:
                continue
            seen.add(node.id)
            options.append(
                CategoryOption(
                    id=node.id,
                    name=node.name,
                    full_name="  " * level + node.name,
                    level=level,
                    parent_id=node.parent_id,
                    is_subcategory=node.is_subcategory,
                    product_count=node.product_count,
                    has_subcategories=bool(node.children),
                )
            )
            visit(node.children, level + 1)

    visit(categories, 0)
    return options
