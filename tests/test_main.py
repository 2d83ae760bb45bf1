from nodegrad.main import basic_ops, simple_scalar_backprop


def test_simple_scalar_backprop(capsys):
    o = simple_scalar_backprop()

    assert round(o.data, 4) == 0.7071
    assert "o = 0.7071, dx1 = -1.500" in capsys.readouterr().out


def test_basic_ops():
    output = basic_ops()

    assert output.data == 10.0
    assert output.grad == 1.0
