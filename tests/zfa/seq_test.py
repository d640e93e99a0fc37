import pytest
from pyrsistent import PVector, pvector

from zfa.lang.node import EMPTY, Atom, NodeList, atom, cons, nil
from zfa.lang.seq import from_python, l, of_seq, to_seq


def test_to_seq():
    assert isinstance(to_seq(nil()), PVector)
    assert pvector() == to_seq(nil())
    assert pvector([atom(1)]) == to_seq(cons(atom(1), nil()))
    assert pvector([atom(1), atom(2)]) == to_seq(cons(atom(1), cons(atom(2), nil())))


def test_to_seq_is_restartable():
    s = to_seq(cons(atom(1), cons(atom(2), nil())))
    assert [atom(1), atom(2)] == list(s)
    assert [atom(1), atom(2)] == list(s)


def test_to_seq_requires_proper_list():
    with pytest.raises(TypeError):
        to_seq(atom(1))  # type: ignore[arg-type]


def test_of_seq():
    assert EMPTY is of_seq([])
    assert cons(atom(1), nil()) == of_seq([atom(1)])
    assert cons(atom(1), cons(atom(2), nil())) == of_seq([atom(1), atom(2)])
    assert cons(atom(1), cons(atom(2), nil())) == of_seq(iter([atom(1), atom(2)]))


def test_of_seq_requires_nodes():
    with pytest.raises(TypeError):
        of_seq([atom(1), 2])


@pytest.mark.parametrize(
    "s",
    [
        [],
        [atom(1)],
        [atom(1), atom(1)],
        [atom(3), atom(2), atom(1)],
        [nil(), atom("a"), of_seq([atom("b"), nil()])],
    ],
)
def test_seq_round_trip(s):
    assert s == list(to_seq(of_seq(s)))
    assert of_seq(s) == of_seq(to_seq(of_seq(s)))


def test_round_trip_on_long_list():
    s = [atom(i) for i in range(5000)]
    assert s == list(to_seq(of_seq(s)))


@pytest.mark.parametrize(
    "o,expected",
    [
        (1, atom(1)),
        ("a", atom("a")),
        (None, atom(None)),
        (atom(1), atom(1)),
        (nil(), nil()),
        ([], nil()),
        ((), nil()),
        (frozenset(), nil()),
        ([1, 2], of_seq([atom(1), atom(2)])),
        ((1, (2,)), of_seq([atom(1), of_seq([atom(2)])])),
        ([1, [2, [3]]], of_seq([atom(1), of_seq([atom(2), of_seq([atom(3)])])])),
        ({4}, of_seq([atom(4)])),
    ],
)
def test_from_python(o, expected):
    assert expected == from_python(o)


def test_from_python_passes_nodes_through():
    n = of_seq([atom(1)])
    assert n is from_python(n)


def test_l():
    assert EMPTY is l()
    assert of_seq([atom(1), atom(2), atom(3)]) == l(1, 2, 3)
    assert of_seq([atom(1), of_seq([atom(2)])]) == l(1, l(2))
    assert of_seq([atom(1), of_seq([atom(2)])]) == l(1, [2])
    assert isinstance(l(1), NodeList)
    assert isinstance(l(1).head, Atom)
