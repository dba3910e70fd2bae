from types import SimpleNamespace

from app.services.menu_tree import MenuNode, assemble_menu_tree, count_nodes


def _row(id, parent_id=None, order=0):
    return SimpleNamespace(id=id, parent_id=parent_id, order=order, name=id)


def _shape(nodes):
    return [(node.id, _shape(node.children)) for node in nodes]


def test_empty_input_gives_empty_forest():
    assert assemble_menu_tree([]) == []


def test_children_are_nested_under_their_parent():
    rows = [_row("home"), _row("about"), _row("team", parent_id="about")]
    assert _shape(assemble_menu_tree(rows)) == [("home", []), ("about", [("team", [])])]


def test_roots_keep_input_order():
    rows = [_row("b", order=5), _row("a", order=1), _row("c", order=3)]
    assert [node.id for node in assemble_menu_tree(rows)] == ["b", "a", "c"]


def test_children_sorted_by_order_with_stable_ties():
    rows = [
        _row("root"),
        _row("c3", parent_id="root", order=3),
        _row("c1", parent_id="root", order=1),
        _row("c1b", parent_id="root", order=1),
        _row("c2", parent_id="root", order=2),
    ]
    (root,) = assemble_menu_tree(rows)
    assert [child.id for child in root.children] == ["c1", "c1b", "c2", "c3"]


def test_child_listed_before_parent_is_still_attached():
    rows = [_row("child", parent_id="parent"), _row("parent")]
    assert _shape(assemble_menu_tree(rows)) == [("parent", [("child", [])])]


def test_orphan_becomes_root():
    rows = [_row("a"), _row("orphan", parent_id="missing")]
    assert _shape(assemble_menu_tree(rows)) == [("a", []), ("orphan", [])]


def test_self_parented_row_becomes_root():
    rows = [_row("loop", parent_id="loop")]
    assert _shape(assemble_menu_tree(rows)) == [("loop", [])]


def test_parent_cycle_keeps_every_row_once():
    rows = [_row("x", parent_id="y"), _row("y", parent_id="x"), _row("z")]
    roots = assemble_menu_tree(rows)
    assert count_nodes(roots) == 3
    assert {node.id for node in roots} >= {"z"}
    seen = []
    stack = list(roots)
    while stack:
        node = stack.pop()
        seen.append(node.id)
        stack.extend(node.children)
    assert sorted(seen) == ["x", "y", "z"]


def test_depth_is_not_limited():
    rows = [_row("a"), _row("b", parent_id="a"), _row("c", parent_id="b")]
    assert _shape(assemble_menu_tree(rows)) == [("a", [("b", [("c", [])])])]


def test_duplicate_rows_are_ignored():
    rows = [_row("a"), _row("a"), _row("b", parent_id="a")]
    assert count_nodes(assemble_menu_tree(rows)) == 2


def test_count_nodes():
    leaf = MenuNode(_row("leaf"))
    assert count_nodes([MenuNode(_row("root"), children=[leaf]), MenuNode(_row("other"))]) == 3
