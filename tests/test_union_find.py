from globalsfm.union_find import UnionFind


def test_new_element_is_its_own_root():
    uf = UnionFind()
    assert uf.find(7) == 7


def test_union_makes_second_root_the_root():
    uf = UnionFind()
    uf.union(1, 2)
    assert uf.find(1) == 2
    assert uf.find(2) == 2


def test_union_is_transitive():
    uf = UnionFind()
    uf.union(1, 2)
    uf.union(3, 4)
    uf.union(2, 3)
    roots = {uf.find(x) for x in (1, 2, 3, 4)}
    assert len(roots) == 1
    assert uf.find(5) == 5


def test_separate_sets_stay_separate():
    uf = UnionFind()
    uf.union("a", "b")
    uf.union("c", "d")
    assert uf.find("a") == uf.find("b")
    assert uf.find("a") != uf.find("c")


def test_clear_resets_sets():
    uf = UnionFind()
    uf.union(1, 2)
    uf.clear()
    assert uf.find(1) == 1
    assert uf.find(2) == 2


def test_long_chain_does_not_hit_recursion_limit():
    uf = UnionFind()
    n = 20000
    for i in range(n):
        uf.union(i, i + 1)
    assert uf.find(0) == uf.find(n)