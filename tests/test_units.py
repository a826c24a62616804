import pytest

from units import Fitness, Metres, MetresPerSecond, Radians, Seconds


def test_same_unit_values_are_ordered():
    assert Metres(1.0) < Metres(2.0)
    assert Fitness(7.3) > Fitness(-1.0)
    assert Seconds(0.5) == Seconds(0.5)
    assert max([Fitness(1.0), Fitness(3.0), Fitness(2.0)]) == Fitness(3.0)


def test_mixing_units_is_rejected():
    with pytest.raises(TypeError):
        MetresPerSecond(1.0) < Radians(2.0)
    assert Metres(1.0) != Seconds(1.0)


def test_values_are_floats_and_immutable():
    speed = MetresPerSecond(3)
    assert isinstance(speed.value, float)
    assert float(speed) == 3.0
    with pytest.raises(AttributeError):
        speed.value = 4.0
