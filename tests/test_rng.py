import pytest

from fuzzcore.rng import Random


def test_first_value_from_seed_one():
    assert Random(1).next_raw() == 48271


def test_ten_thousandth_value_from_seed_one():
    rand = Random(1)
    value = None
    for _ in range(10000):
        value = rand.next_raw()
    assert value == 399268537


def test_seed_zero_behaves_like_seed_one():
    a, b = Random(0), Random(1)
    assert [a.next_raw() for _ in range(20)] == [b.next_raw() for _ in range(20)]


def test_same_seed_same_sequence():
    a, b = Random(12345), Random(12345)
    assert [a.below(1000) for _ in range(50)] == [b.below(1000) for _ in range(50)]


def test_different_seeds_differ():
    a, b = Random(3), Random(4)
    assert [a.next_raw() for _ in range(10)] != [b.next_raw() for _ in range(10)]


def test_below_zero_is_zero():
    rand = Random(7)
    assert all(rand.below(0) == 0 for _ in range(10))


def test_below_stays_in_range():
    rand = Random(7)
    values = {rand.below(5) for _ in range(1000)}
    assert values == {0, 1, 2, 3, 4}


def test_between_covers_closed_range():
    rand = Random(11)
    values = {rand.between(-2, 2) for _ in range(1000)}
    assert values == {-2, -1, 0, 1, 2}


@pytest.mark.parametrize("low,high", [(5, 5), (6, 5)])
def test_between_rejects_empty_range(low, high):
    with pytest.raises(ValueError):
        Random(1).between(low, high)


def test_rand_bool_yields_both_values():
    rand = Random(99)
    assert {rand.rand_bool() for _ in range(200)} == {0, 1}


def test_skew_towards_last_in_range_and_skewed():
    rand = Random(5)
    values = [rand.skew_towards_last(10) for _ in range(5000)]
    assert all(0 <= v < 10 for v in values)
    assert values.count(9) > values.count(0)