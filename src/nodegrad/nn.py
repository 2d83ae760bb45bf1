import torch

from nodegrad.node import Node, as_node, sum_nodes


class Module:
    """Base class for anything that owns trainable parameter nodes."""

    def parameters(self) -> list[Node]:
        return []

    def zero_grad(self) -> None:
        for p in self.parameters():
            p.zero_grad()


def _uniform_values(count: int, generator: torch.Generator | None) -> list[float]:
    """Draw count samples uniformly from [-1, 1)."""
    samples = torch.rand(count, generator=generator, dtype=torch.float64)
    return (samples * 2 - 1).tolist()


class Neuron(Module):
    """
    A single neuron: weighted sum of its inputs plus a bias, through tanh.

    Weights and bias are leaf nodes initialized uniformly in [-1, 1).
    """

    def __init__(
        self,
        n_in: int,
        nonlin: bool = True,
        generator: torch.Generator | None = None,
    ) -> None:
        """
        Args:
            n_in: Number of inputs the neuron accepts.
            nonlin: Apply tanh to the output. A linear neuron returns the raw
                    affine value.
            generator: Optional random number generator for reproducible
                       initialization.
        """
        *weights, bias = _uniform_values(n_in + 1, generator)
        self.w = [Node(w, label="w") for w in weights]
        self.b = Node(bias, label="b")
        self.nonlin = nonlin

    def forward(self, xs: list[Node | float]) -> Node:
        if len(xs) != len(self.w):
            raise ValueError(f"expected {len(self.w)} inputs, got {len(xs)}")

        act = self.b + sum_nodes(wi * xi for wi, xi in zip(self.w, xs))
        return act.tanh() if self.nonlin else act

    def parameters(self) -> list[Node]:
        return [self.b] + self.w

    def __repr__(self) -> str:
        return f"{'Tanh' if self.nonlin else 'Linear'}Neuron({len(self.w)})"


class Layer(Module):
    """A fully connected layer of independent neurons sharing the same inputs."""

    def __init__(
        self,
        n_in: int,
        n_out: int,
        nonlin: bool = True,
        generator: torch.Generator | None = None,
    ) -> None:
        self.neurons = [Neuron(n_in, nonlin, generator) for _ in range(n_out)]

    def forward(self, xs: list[Node | float]) -> list[Node]:
        return [n.forward(xs) for n in self.neurons]

    def parameters(self) -> list[Node]:
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self) -> str:
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):
    """
    Multi-layer perceptron built from scalar nodes.

    MLP(3, [4, 4, 1]) maps 3 inputs through two hidden layers of 4 neurons to
    a single output, with tanh after every layer.
    """

    def __init__(
        self,
        n_in: int,
        n_outs: list[int],
        generator: torch.Generator | None = None,
    ) -> None:
        sizes = [n_in] + list(n_outs)
        self.layers = [
            Layer(sizes[i], sizes[i + 1], generator=generator)
            for i in range(len(n_outs))
        ]

    def forward(self, xs: list[Node | float]) -> list[Node]:
        nodes = [as_node(x) for x in xs]
        for layer in self.layers:
            nodes = layer.forward(nodes)
        return nodes

    def parameters(self) -> list[Node]:
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self) -> str:
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
