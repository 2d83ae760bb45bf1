from __future__ import annotations
from math import tanh as _tanh
from numbers import Real
from typing import Callable, Iterable

import numpy as np


class Node:
    """
    Represents a node in a computational graph for automatic differentiation.

    Each node stores a scalar value (data), the gradient accumulated for it
    during a backward pass, and references to the operand nodes it was
    computed from. Every operation node carries a _backward closure that
    pushes its own gradient onto its operands using the local derivative of
    the operation that produced it.

    Nodes compare and hash by identity, so two leaves holding the same value
    are still distinct vertices of the graph.
    """

    def __init__(
        self,
        data: float,
        _children: tuple[Node, ...] = (),
        _op: str | None = None,
        label: str | None = None,
    ) -> None:
        """
        Initialize a Node in the computational graph.

        Args:
            data: The numerical value stored in this node.
            _children: Ordered tuple of operand nodes (inputs to this node's
                       operation). Order matters, e.g. base before exponent.
            _op: The operation that produced this node ("+", "*", "^", "tanh",
                 "relu"), or None for leaf nodes.
            label: Optional human-readable name for debugging and visualization.

        Raises:
            TypeError: If data is not a real number.
        """
        if not isinstance(data, Real):
            raise TypeError(f"cannot use {type(data).__name__} as a Node value")
        self.data = float(data)
        self.grad = 0.0
        self.label = label
        self._op = _op
        self._prev = tuple(_children)
        # Leaf nodes have no local gradient rule.
        self._backward: Callable[[], None] | None = None

    def __repr__(self) -> str:
        return (
            f"Node(data={self.data}, grad={self.grad}, "
            f"op={self._op!r}, label={self.label!r})"
        )

    def set_label(self, label: str) -> Node:
        """Attach a diagnostic name to this node and return the same node."""
        self.label = label
        return self

    # Operator overloads. Each one routes through the module-level function
    # below so that every operation has a single gradient rule.

    def __add__(self, other: Node | float) -> Node:
        return add(self, other)

    def __radd__(self, other: Node | float) -> Node:
        return add(other, self)

    def __mul__(self, other: Node | float) -> Node:
        return multiply(self, other)

    def __rmul__(self, other: Node | float) -> Node:
        return multiply(other, self)

    def __neg__(self) -> Node:
        return negate(self)

    def __sub__(self, other: Node | float) -> Node:
        return subtract(self, other)

    def __rsub__(self, other: Node | float) -> Node:
        return subtract(other, self)

    def __pow__(self, exponent: Node | float) -> Node:
        return power(self, exponent)

    def tanh(self) -> Node:
        return tanh(self)

    def relu(self) -> Node:
        return relu(self)

    def topological_order(self) -> list[Node]:
        """
        Performs a topological sort of the computational graph rooted here.

        Uses an iterative depth-first search with an explicit stack, so the
        depth of the graph is not limited by the interpreter's recursion limit.
        Every node is appended only after all of its operands, which means
        walking the list in reverse visits each node before anything it
        depends on.

        Returns:
            A list of every node reachable from this one, operands first and
            this node last.
        """
        topo_ordering: list[Node] = []
        visited: set[Node] = set()
        # Each entry is (node, expanded). An expanded node has already had
        # its operands pushed and is ready to be emitted.
        stack: list[tuple[Node, bool]] = [(self, False)]

        while stack:
            node, expanded = stack.pop()

            if expanded:
                topo_ordering.append(node)
                continue

            if node in visited:
                continue
            visited.add(node)

            stack.append((node, True))
            for child_node in reversed(node._prev):
                if child_node not in visited:
                    stack.append((child_node, False))

        return topo_ordering

    def backward(self) -> None:
        """
        Performs backward propagation to compute gradients for all nodes.

        The backpropagation process:
        1. Get a topological ordering of all nodes (operands before results).
        2. Initialize this node's gradient to 1.0 (d(output)/d(output) = 1).
        3. Traverse nodes in reverse topological order and call each node's
           _backward() rule exactly once.

        Reverse topological order guarantees that a node's gradient already
        holds the contributions from every downstream consumer before its own
        rule runs, which is what makes shared sub-expressions come out right.

        Gradients are accumulated, not overwritten: callers are expected to
        zero them (see zero_grad and zero_graph_grads) between passes.
        """
        topo_order = self.topological_order()

        self.grad = 1.0

        for node in reversed(topo_order):
            if node._backward is not None:
                node._backward()

    def zero_grad(self) -> None:
        """Reset this node's gradient to zero."""
        self.grad = 0.0

    def zero_graph_grads(self) -> None:
        """Reset the gradient of every node reachable from this one."""
        for node in self.topological_order():
            node.grad = 0.0

    def update(self, learning_rate: float) -> None:
        """
        Shift this node's value by learning_rate * grad.

        A negative learning rate implements plain gradient descent. Intended
        for leaf (parameter) nodes after a backward pass.
        """
        self.data += learning_rate * self.grad


def as_node(value: Node | float) -> Node:
    """
    Wrap a plain number as a leaf Node; pass Nodes through unchanged.

    Raises:
        TypeError: If value is neither a Node nor a real number.
    """
    if isinstance(value, Node):
        return value
    return Node(value)


def _ieee_pow(base: float, exponent: float) -> float:
    # float ** float raises or returns complex for some inputs; float64 power
    # yields nan/inf instead.
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def add(a: Node | float, b: Node | float) -> Node:
    """
    Create a node holding a + b.

    The gradient flows unchanged to both operands.
    """
    a, b = as_node(a), as_node(b)
    res = Node(a.data + b.data, (a, b), "+")

    def _backward():
        # Accumulate using += to handle nodes used in multiple operations.
        a.grad += res.grad
        b.grad += res.grad

    res._backward = _backward

    return res


def multiply(a: Node | float, b: Node | float) -> Node:
    """
    Create a node holding a * b.

    Uses the product rule: d(ab)/da = b, d(ab)/db = a.
    """
    a, b = as_node(a), as_node(b)
    res = Node(a.data * b.data, (a, b), "*")

    def _backward():
        a.grad += b.data * res.grad
        b.grad += res.grad * a.data

    res._backward = _backward

    return res


def negate(a: Node | float) -> Node:
    """Create a node holding -a, built as a multiplication by the constant -1."""
    return multiply(a, Node(-1.0))


def subtract(a: Node | float, b: Node | float) -> Node:
    """Create a node holding a - b, built as a + (-b)."""
    return add(a, negate(b))


def power(base: Node | float, exponent: Node | float) -> Node:
    """
    Create a node holding base ** exponent.

    Only the base is differentiated: the exponent is read as a constant and
    its gradient is never touched, so this supports differentiable bases with
    fixed numeric exponents.

    Undefined results (a negative base with a non-integer exponent, zero to a
    negative power, overflow) come back as nan or inf rather than raising.

    Args:
        base: The node being raised to a power.
        exponent: A node (or number) whose value is used as the exponent.

    Returns:
        A new Node with operands (base, exponent) and operation "^".
    """
    base, exponent = as_node(base), as_node(exponent)
    res = Node(_ieee_pow(base.data, exponent.data), (base, exponent), "^")

    def _backward():
        # d(x^p)/dx = p * x^(p - 1)
        p = exponent.data
        base.grad += p * _ieee_pow(base.data, p - 1.0) * res.grad

    res._backward = _backward

    return res


def tanh(a: Node | float) -> Node:
    """
    Compute the hyperbolic tangent of a node.

    Derivative: d(tanh(x))/dx = 1 - tanh²(x), computed from the stored result.
    """
    a = as_node(a)
    res = Node(_tanh(a.data), (a,), "tanh")

    def _backward():
        a.grad += (1 - res.data**2) * res.grad

    res._backward = _backward

    return res


def relu(a: Node | float) -> Node:
    """
    Compute max(0, a).

    The derivative is taken as 0 at exactly a == 0, so a node sitting on the
    boundary passes no gradient back.
    """
    a = as_node(a)
    res = Node(max(0.0, a.data), (a,), "relu")

    def _backward():
        if a.data > 0:
            a.grad += res.grad

    res._backward = _backward

    return res


def sum_nodes(nodes: Iterable[Node | float]) -> Node:
    """
    Add up a sequence of nodes by folding add() from a zero leaf.

    An empty sequence yields a lone Node(0.0).
    """
    total = Node(0.0)
    for node in nodes:
        total = add(total, node)
    return total
