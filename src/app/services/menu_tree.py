"""
Menu tree assembly.

Turns a flat, already-ordered list of menu rows into a forest of `MenuNode`s.
Pure: no database access, so it works on ORM rows and on plain objects alike.
A row only needs `id`, `parent_id` and `order` attributes.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class MenuNode:
    item: Any
    children: list["MenuNode"] = field(default_factory=list)

    @property
    def id(self):
        return self.item.id


def _mark_subtree(node: MenuNode, reached: set) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.id in reached:
            continue
        reached.add(current.id)
        stack.extend(current.children)


def assemble_menu_tree(rows: Iterable[Any]) -> list[MenuNode]:
    """
    Build the menu forest from rows sorted by (order, created_at).

    - A row whose parent is absent from `rows` (filtered out for this caller,
      or a dangling id) becomes a root instead of being dropped.
    - Children of every node are sorted by `order`; ties keep input order.
    - Roots keep input order.
    - Depth is not limited here. Rows caught in a parent cycle are promoted
      to roots so each row appears exactly once.
    """
    nodes: dict[Any, MenuNode] = {}
    ordered: list[MenuNode] = []
    for row in rows:
        if row.id in nodes:
            continue
        node = MenuNode(row)
        nodes[row.id] = node
        ordered.append(node)

    roots: list[MenuNode] = []
    attached_to: dict[Any, MenuNode] = {}
    for node in ordered:
        parent_id = getattr(node.item, "parent_id", None)
        parent = nodes.get(parent_id) if parent_id else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.children.append(node)
            attached_to[node.id] = parent

    reached: set = set()
    for root in roots:
        _mark_subtree(root, reached)
    if len(reached) < len(ordered):
        for node in ordered:
            if node.id in reached:
                continue
            attached_to.pop(node.id).children.remove(node)
            roots.append(node)
            _mark_subtree(node, reached)

    for node in ordered:
        node.children.sort(key=lambda child: child.item.order or 0)

    return roots


def count_nodes(roots: Iterable[MenuNode]) -> int:
    total = 0
    stack = list(roots)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children)
    return total
