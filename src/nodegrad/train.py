import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from nodegrad.constants import LEARNING_RATE, LOG_INTERVAL, NUM_EPOCHS
from nodegrad.nn import MLP
from nodegrad.node import Node, sum_nodes


def mse_loss(predictions: list[Node], targets: list[Node | float]) -> Node:
    """
    Sum of squared errors between predictions and targets.

    Args:
        predictions: Output nodes of the model, one per sample.
        targets: Ground truth values, one per sample.

    Returns:
        A single loss node; calling backward() on it fills the parameter grads.

    Raises:
        ValueError: If the two sequences differ in length.
    """
    if len(predictions) != len(targets):
        raise ValueError(
            f"got {len(predictions)} predictions for {len(targets)} targets"
        )
    return sum_nodes((yp - yt) ** 2 for yp, yt in zip(predictions, targets))


def train(
    model: MLP,
    xs: list[list[float]],
    ys: list[float],
    epochs: int = NUM_EPOCHS,
    learning_rate: float = LEARNING_RATE,
    log_interval: int = LOG_INTERVAL,
) -> list[float]:
    """
    Fit a single-output model to (xs, ys) with plain gradient descent.

    Each epoch runs a forward pass over every sample, computes the squared
    error loss, clears the old gradients, backpropagates and finally shifts
    every parameter by learning_rate * grad.

    Args:
        model: Model whose forward() returns one output node per sample.
        xs: Input samples.
        ys: Target value per sample.
        epochs: Number of full passes over the data.
        learning_rate: Step passed to Node.update(); negative to descend.
        log_interval: Print the loss every N epochs.

    Returns:
        The loss value recorded at every epoch, before that epoch's update.

    Raises:
        ValueError: If log_interval is not positive. Checked before any
                    parameter is touched.
    """
    if log_interval < 1:
        raise ValueError(f"log_interval must be positive, got {log_interval}")

    losses: list[float] = []

    for epoch in range(epochs):
        # Forward pass: one prediction per sample.
        ypred = [model.forward(x)[0] for x in xs]
        loss = mse_loss(ypred, ys)

        # Backward pass: clear stale gradients before accumulating new ones.
        model.zero_grad()
        loss.backward()

        for p in model.parameters():
            p.update(learning_rate)

        losses.append(loss.data)

        if epoch % log_interval == 0:
            print(f"Epoch {epoch}: loss = {loss.data:.6f}")

    return losses


def plot_loss_curve(losses: list[float], figsize: tuple[int, int] = (8, 5)) -> Figure:
    """
    Plot the loss history returned by train().

    Args:
        losses: Loss value per epoch.
        figsize: Figure size tuple.

    Returns:
        The matplotlib Figure; the caller decides whether to show or save it.
    """
    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(range(len(losses)), losses)
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Loss")
    ax.set_title("Training loss")
    return fig
