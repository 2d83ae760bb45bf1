import pytest
import torch

from nodegrad.constants import SAMPLE_SEED
from nodegrad.nn import MLP, Layer, Neuron
from nodegrad.node import Node


def make_generator() -> torch.Generator:
    return torch.Generator().manual_seed(SAMPLE_SEED)


def test_neuron_parameters_are_bias_then_weights():
    neuron = Neuron(3, generator=make_generator())
    params = neuron.parameters()

    assert len(params) == 4
    assert params[0] is neuron.b
    assert params[1:] == neuron.w
    assert all(-1.0 <= p.data < 1.0 for p in params)


def test_seeded_initialization_is_reproducible():
    first = MLP(3, [4, 1], generator=make_generator())
    second = MLP(3, [4, 1], generator=make_generator())

    assert [p.data for p in first.parameters()] == [
        p.data for p in second.parameters()
    ]


def test_linear_neuron_returns_affine_value():
    neuron = Neuron(2, nonlin=False, generator=make_generator())
    out = neuron.forward([1.0, -2.0])

    expected = neuron.b.data + neuron.w[0].data * 1.0 + neuron.w[1].data * -2.0
    assert out.data == pytest.approx(expected)


def test_neuron_rejects_wrong_input_count():
    neuron = Neuron(3, generator=make_generator())
    with pytest.raises(ValueError):
        neuron.forward([1.0, 2.0])


def test_layer_outputs_one_node_per_neuron():
    layer = Layer(3, 5, generator=make_generator())
    outs = layer.forward([Node(1.0), Node(0.5), Node(-1.0)])

    assert len(outs) == 5
    assert len(layer.parameters()) == 5 * 4


def test_mlp_forward_and_backward_reach_every_parameter():
    mlp = MLP(3, [4, 4, 1], generator=make_generator())
    params = mlp.parameters()

    assert len(params) == 4 * 4 + 4 * 5 + 1 * 5

    (out,) = mlp.forward([2.0, 3.0, -1.0])
    assert -1.0 < out.data < 1.0

    out.backward()
    assert any(p.grad != 0.0 for p in params)

    mlp.zero_grad()
    assert all(p.grad == 0.0 for p in params)
