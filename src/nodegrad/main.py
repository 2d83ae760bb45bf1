import sys

import matplotlib.pyplot as plt
import torch

from nodegrad.constants import LAYER_SIZES, NUM_INPUTS, SAMPLE_SEED
from nodegrad.graph import draw_graph, format_graph
from nodegrad.nn import MLP
from nodegrad.node import Node
from nodegrad.train import plot_loss_curve, train


def simple_scalar_backprop(visualize: bool = False) -> Node:
    """Backpropagate through a single two-input tanh neuron."""
    # ? inputs x1, x2
    x1 = Node(2.0, label="x1")
    x2 = Node(0.0, label="x2")

    # ? weights w1, w2
    w1 = Node(-3.0, label="w1")
    w2 = Node(1.0, label="w2")

    # ? bias of the neuron
    b = Node(6.8813735870195432, label="b")

    # x1*w1 + x2*w2 + b
    x1w1 = (x1 * w1).set_label("x1*w1")
    x2w2 = (x2 * w2).set_label("x2*w2")
    x1w1x2w2 = (x1w1 + x2w2).set_label("x1*w1 + x2*w2")
    n = (x1w1x2w2 + b).set_label("n")
    o = n.tanh().set_label("o")

    o.backward()

    print(f"o = {o.data:.4f}, dx1 = {x1.grad:.3f}, dw1 = {w1.grad:.3f}")
    print(format_graph(o))

    if visualize:
        draw_graph(o).render("graph-after-backprop", view=True)

    return o


def basic_ops() -> Node:
    """Backpropagate through a * b + c."""
    a = Node(2.0, label="a")
    b = Node(3.0, label="b")
    c = Node(4.0, label="c")
    ab = (a * b).set_label("ab")
    output = (ab + c).set_label("output")

    output.backward()

    print(f"da = {a.grad}, db = {b.grad}, dc = {c.grad}")
    print(output)
    return output


def gradient_descent(plot: bool = False) -> list[float]:
    """Train a small MLP on four hand-written samples."""
    g = torch.Generator().manual_seed(SAMPLE_SEED)
    mlp = MLP(NUM_INPUTS, LAYER_SIZES, generator=g)

    xs = [
        [2.0, 3.0, -1.0],
        [3.0, -1.0, 0.5],
        [0.5, 1.0, 1.0],
        [1.0, 1.0, -1.0],
    ]
    ys = [1.0, -1.0, -1.0, 1.0]

    print(f"Training {mlp} ({len(mlp.parameters())} parameters)")
    losses = train(mlp, xs, ys)

    predictions = [mlp.forward(x)[0].data for x in xs]
    print(f"Final loss: {losses[-1]:.6f} Predictions: {predictions}")

    if plot:
        plot_loss_curve(losses)
        plt.show()

    return losses


def main(visualize: bool = False) -> None:
    simple_scalar_backprop(visualize)
    print("-----")
    basic_ops()
    print("-----")
    gradient_descent(plot=visualize)


if __name__ == "__main__":
    main(visualize="--visualize" in sys.argv[1:])
