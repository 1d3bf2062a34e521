import pytest

from globalsfm.image import Image
from globalsfm.image_pair import ImagePair
from globalsfm.view_graph import ViewGraph


def _graph(edges):
    graph = ViewGraph()
    for a, b in edges:
        pair = ImagePair(a, b)
        graph.image_pairs[pair.pair_id] = pair
    return graph


def _images(ids):
    return {i: Image(i, 1, f"{i}.jpg") for i in ids}


@pytest.fixture
def two_components():
    graph = _graph([(1, 2), (2, 3), (1, 3), (4, 5)])
    images = _images(range(1, 7))
    return graph, images


def test_establish_adjacency_list_ignores_invalid_pairs():
    graph = _graph([(1, 2), (2, 3)])
    pair = next(p for p in graph.image_pairs.values() if p.image_id1 == 2)
    pair.is_valid = False
    graph.establish_adjacency_list()
    assert graph.adjacency_list == {1: {2}, 2: {1}}


def test_keep_largest_connected_components(two_components):
    graph, images = two_components
    assert graph.keep_largest_connected_components(images) == 3
    assert {i for i, im in images.items() if im.is_registered} == {1, 2, 3}
    assert graph.num_images == 3
    assert graph.num_pairs == 3
    invalid = [p for p in graph.image_pairs.values() if not p.is_valid]
    assert [(p.image_id1, p.image_id2) for p in invalid] == [(4, 5)]


def test_keep_largest_on_empty_graph():
    images = _images([1, 2])
    images[1].is_registered = True
    graph = ViewGraph()
    assert graph.keep_largest_connected_components(images) == 0
    assert not any(im.is_registered for im in images.values())


def test_mark_connected_components(two_components):
    graph, images = two_components
    assert graph.mark_connected_components(images) == 2
    assert {images[i].cluster_id for i in (1, 2, 3)} == {0}
    assert {images[i].cluster_id for i in (4, 5)} == {1}
    assert images[6].cluster_id == -1


def test_mark_connected_components_with_minimum(two_components):
    graph, images = two_components
    images[4].cluster_id = 7
    assert graph.mark_connected_components(images, 3) == 1
    assert images[1].cluster_id == 0
    assert images[4].cluster_id == -1
    assert images[5].cluster_id == -1


def test_remove_invalid_pair():
    graph = _graph([(1, 2)])
    pair_id = next(iter(graph.image_pairs))
    graph.remove_invalid_pair(pair_id)
    assert graph.image_pairs[pair_id].is_valid is False


def test_remove_unknown_pair_raises():
    with pytest.raises(KeyError):
        ViewGraph().remove_invalid_pair(42)