import pytest

from medbook.index import Index


def test_one_based_and_zero_based_agree():
    index = Index.from_one_based(1)
    assert index.zero_based == 0
    assert index.one_based == 1
    assert index == Index.from_zero_based(0)


@pytest.mark.parametrize("one_based", [0, -1])
def test_non_positive_one_based_index_raises(one_based):
    """A 1-based index below 1 has no position in any list."""
    with pytest.raises(ValueError):
        Index.from_one_based(one_based)


def test_index_rejects_non_integers():
    with pytest.raises(ValueError):
        Index("1")
    with pytest.raises(ValueError):
        Index(True)
