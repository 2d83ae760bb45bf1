from graphviz import Digraph

from nodegrad.node import Node


def collect_nodes_and_edges(root: Node) -> tuple[list[Node], list[tuple[Node, Node, int]]]:
    """
    Traverses the computational graph starting from the root node.

    Nodes come back in topological order (operands before results). Edges
    hold one entry per operand slot, so x * x yields two edges into the
    product and the base and exponent of a power stay distinguishable.

    Args:
        root: The root node of the computational graph.

    Returns:
        A tuple containing:
        - nodes: Every reachable node, root last.
        - edges: (operand, result, slot) triples, grouped by result in node
          order and by slot within a result.
    """
    nodes = root.topological_order()
    edges = [
        (operand, result, slot)
        for result in nodes
        for slot, operand in enumerate(result._prev)
    ]
    return nodes, edges


def _describe(node: Node) -> str:
    parts = [f"data={node.data:.4f}", f"grad={node.grad:.4f}"]
    if node._op:
        parts.append(f"op={node._op}")
    if node.label:
        parts.append(f"label={node.label}")
    return " ".join(parts)


def format_graph(root: Node) -> str:
    """
    Render the graph below root as an indented text tree.

    Each line shows a node's value, gradient, operator and label, with its
    operands indented beneath it. A node reachable through several paths is
    expanded the first time only; later occurrences are printed as a
    back-reference to its index.

    Args:
        root: The node to start from.

    Returns:
        The multi-line dump, one node per line.
    """
    lines: list[str] = []
    seen: dict[Node, int] = {}
    stack: list[tuple[Node, int]] = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        indent = "  " * depth

        if node in seen:
            lines.append(f"{indent}-> #{seen[node]}")
            continue

        seen[node] = len(seen)
        lines.append(f"{indent}#{seen[node]} {_describe(node)}")
        # Push in reverse so operands print in their original order.
        for child_node in reversed(node._prev):
            stack.append((child_node, depth + 1))

    return "\n".join(lines)


def draw_graph(root: Node) -> Digraph:
    """
    Build a Graphviz view of the graph below root.

    Every node becomes a record showing label, value and gradient. A computed
    node also gets a small node for its operator, and each operand feeds that
    operator through its own edge. Edges into binary operators are labelled
    with the operand slot (0 for the left operand or base, 1 for the right
    operand or exponent). Names are assigned from the topological position,
    so the same graph always renders to the same source.

    Args:
        root: The output node to draw from.

    Returns:
        The Digraph. Call render() on it to write an image (requires the
        Graphviz binaries).
    """
    graph = Digraph(format="svg", graph_attr={"rankdir": "LR"})

    nodes, edges = collect_nodes_and_edges(root)
    names = {node: f"n{i}" for i, node in enumerate(nodes)}

    for node in nodes:
        name = names[node]
        graph.node(
            name=name,
            label=f"{node.label or ''} | data {node.data:.4f} | grad {node.grad:.4f}",
            shape="record",
        )
        if node._op:
            graph.node(name=f"{name}_op", label=node._op)
            graph.edge(f"{name}_op", name)

    for operand, result, slot in edges:
        target = f"{names[result]}_op"
        if len(result._prev) > 1:
            graph.edge(names[operand], target, label=str(slot))
        else:
            graph.edge(names[operand], target)

    return graph
