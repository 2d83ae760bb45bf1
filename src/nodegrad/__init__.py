# Only the autodiff core is exported here. Visualization (nodegrad.graph),
# networks (nodegrad.nn) and training (nodegrad.train) pull in graphviz,
# torch and matplotlib and are imported from their own modules.
from nodegrad.node import (
    Node,
    add,
    as_node,
    multiply,
    negate,
    power,
    relu,
    subtract,
    sum_nodes,
    tanh,
)

__all__ = [
    "Node",
    "add",
    "as_node",
    "multiply",
    "negate",
    "power",
    "relu",
    "subtract",
    "sum_nodes",
    "tanh",
]
