import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
import torch

from nodegrad.constants import SAMPLE_SEED
from nodegrad.nn import MLP
from nodegrad.node import Node
from nodegrad.train import mse_loss, plot_loss_curve, train


def test_mse_loss_value_and_gradient():
    preds = [Node(0.5), Node(-1.0)]
    loss = mse_loss(preds, [1.0, 1.0])
    loss.backward()

    assert loss.data == pytest.approx(0.25 + 4.0)
    assert preds[0].grad == pytest.approx(-1.0)
    assert preds[1].grad == pytest.approx(-4.0)


def test_mse_loss_rejects_length_mismatch():
    with pytest.raises(ValueError):
        mse_loss([Node(1.0)], [1.0, 2.0])


def test_train_reduces_loss(capsys):
    mlp = MLP(3, [4, 4, 1], generator=torch.Generator().manual_seed(SAMPLE_SEED))
    xs = [
        [2.0, 3.0, -1.0],
        [3.0, -1.0, 0.5],
        [0.5, 1.0, 1.0],
        [1.0, 1.0, -1.0],
    ]
    ys = [1.0, -1.0, -1.0, 1.0]

    losses = train(mlp, xs, ys, epochs=50, learning_rate=-0.05, log_interval=10)

    assert len(losses) == 50
    assert losses[-1] < losses[0]
    assert capsys.readouterr().out.count("Epoch") == 5


@pytest.mark.parametrize("log_interval", [0, -5])
def test_train_rejects_non_positive_log_interval(log_interval):
    mlp = MLP(2, [1], generator=torch.Generator().manual_seed(SAMPLE_SEED))
    before = [p.data for p in mlp.parameters()]

    with pytest.raises(ValueError):
        train(mlp, [[1.0, 2.0]], [1.0], epochs=3, log_interval=log_interval)

    assert [p.data for p in mlp.parameters()] == before


def test_plot_loss_curve():
    fig = plot_loss_curve([3.0, 2.0, 1.5])
    try:
        (line,) = fig.axes[0].lines
        assert list(line.get_ydata()) == [3.0, 2.0, 1.5]
    finally:
        plt.close(fig)
