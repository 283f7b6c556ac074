"""
id3py.export
============

Human-readable views of a trained :class:`~id3py.tree.DecisionTree`:

* :func:`format_levels` / :func:`print_tree`: one line per depth level.
* :func:`export_rules`: one ``IF ... => class`` rule per path.
* :func:`export_graphviz`: a Graphviz digraph (needs the ``graphviz`` package).

Only the nodes reachable from the root are shown.  A pruned branch (one with
no children left) behaves like a leaf predicting its fallback class and is
rendered as one.
"""

from __future__ import annotations

from id3py.tree import Branch


def _node_label(tree, catalog, index: int) -> str:
    node = tree.nodes[index]
    if isinstance(node, Branch):
        return catalog.class_labels[node.fallback_class]
    return catalog.class_labels[node.target]


def _is_terminal(node) -> bool:
    return not isinstance(node, Branch) or not node.children


def format_levels(tree, catalog, max_levels: int | None = None) -> list[str]:
    """Render the tree breadth-first, one line per level.

    Entries of a line are separated by ``" | "``.  A branch reads
    ``b(<parent feature>: <value>, <split feature>)`` and a leaf
    ``l(<parent feature>: <value>, <class>)``; the root uses ``root`` in
    place of ``<parent feature>: <value>``.  Children are listed in ascending
    value order.

    Parameters
    ----------
    tree : DecisionTree
    catalog : AttributeCatalog
    max_levels : int or None, default=None
        Stop after this many levels.  ``None`` prints every level.
    """
    if not tree.nodes:
        return []
    lines = []
    level = [(None, None, 0)]
    while level and (max_levels is None or len(lines) < max_levels):
        entries, next_level = [], []
        for parent_feature, value, index in level:
            node = tree.nodes[index]
            if parent_feature is None:
                origin = "root"
            else:
                origin = f"{catalog[parent_feature].name}: {catalog.value_label(parent_feature, value)}"
            if _is_terminal(node):
                entries.append(f"l({origin}, {_node_label(tree, catalog, index)})")
            else:
                entries.append(f"b({origin}, {catalog[node.feature].name})")
                next_level.extend((node.feature, v, child) for v, child in sorted(node.children.items()))
        lines.append(" | ".join(entries))
        level = next_level
    return lines


def print_tree(tree, catalog, max_levels: int | None = None) -> None:
    """Print :func:`format_levels` to ``stdout``."""
    for line in format_levels(tree, catalog, max_levels):
        print(line)


def export_rules(tree, catalog) -> list[str]:
    """Export every decision path as ``"a = x AND b = y => class"``.

    A branch whose children do not cover its whole feature domain also yields
    a ``"... AND a NOT IN {x, y} => class (fallback)"`` rule for the values
    that fall back to its majority class.  A tree made of a single leaf gives
    ``"<root> => class"``.
    """
    if not tree.nodes:
        return []
    rules = []
    stack = [(0, [])]
    while stack:
        index, parts = stack.pop()
        node = tree.nodes[index]
        body = " AND ".join(parts) if parts else "<root>"
        if _is_terminal(node):
            rules.append(f"{body} => {_node_label(tree, catalog, index)}")
            continue
        name = catalog[node.feature].name
        values = sorted(node.children)
        if len(values) < catalog[node.feature].domain.size:
            covered = "{" + ", ".join(catalog.value_label(node.feature, v) for v in values) + "}"
            fallback_body = " AND ".join([*parts, f"{name} NOT IN {covered}"])
            rules.append(f"{fallback_body} => {_node_label(tree, catalog, index)} (fallback)")
        # reversed so that rules come out in ascending value order
        for value in reversed(values):
            condition = f"{name} = {catalog.value_label(node.feature, value)}"
            stack.append((node.children[value], [*parts, condition]))
    return rules


def export_graphviz(tree, catalog, filename: str | None = None, *, format: str = "dot") -> str:
    """
    Export the reachable part of the tree in Graphviz format.

    Parameters
    ----------
    tree : DecisionTree
    catalog : AttributeCatalog
    filename : str or None, default=None
        Basename of the output file (the extension follows ``format``).  If
        None, the DOT source is returned and no file is written.
    format : str, default="dot"
        ``'dot'`` writes the DOT source without calling the Graphviz binary;
        any other Graphviz format (``'png'``, ``'svg'``, ...) is rendered with
        the ``dot`` executable, falling back to a ``.dot`` file when the
        executable is not installed.

    Returns
    -------
    str
        Path to the written file, or the DOT source if ``filename`` is None.

    Raises
    ------
    RuntimeError
        If the ``graphviz`` package is not installed.
    """
    try:
        import graphviz
    except ImportError:
        raise RuntimeError("Graphviz is required for export_graphviz but not installed.") from None

    dot = graphviz.Digraph(format=format)
    if tree.nodes:
        stack = [0]
        while stack:
            index = stack.pop()
            node = tree.nodes[index]
            name = f"n{index}"
            if _is_terminal(node):
                dot.node(name, f"class={_node_label(tree, catalog, index)}", shape="box", style="filled", color="lightgrey")
                continue
            dot.node(name, catalog[node.feature].name, shape="ellipse", style="filled", color="lightblue")
            for value, child in sorted(node.children.items()):
                dot.edge(name, f"n{child}", label=catalog.value_label(node.feature, value))
                stack.append(child)

    if filename is None:
        return dot.source
    if format.lower() == "dot":
        path = f"{filename}.dot"
        dot.save(path)
        return path
    try:
        dot.render(filename, cleanup=True)
        return f"{filename}.{format}"
    except graphviz.ExecutableNotFound:
        fallback_path = f"{filename}.dot"
        dot.save(fallback_path)
        return fallback_path
