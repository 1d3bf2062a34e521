"""Breadth-first search and maximum spanning trees over the view graph."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from enum import Enum

from globalsfm.image import Image
from globalsfm.union_find import UnionFind
from globalsfm.view_graph import ViewGraph


class WeightType(Enum):
    """Edge weight used when building the spanning tree."""

    INLIER_NUM = 0
    INLIER_RATIO = 1


def bfs(
    graph: Sequence[Sequence[int]],
    root: int,
    banned_edges: Iterable[tuple[int, int]] = (),
) -> tuple[int, list[int]]:
    """Breadth-first search over an adjacency list.

    Edges in ``banned_edges`` are not traversed in either direction.
    Returns the number of vertices reached besides the root, and the parent
    of every vertex: the root is its own parent, unreached vertices get -1.
    """
    num_vertices = len(graph)
    if not 0 <= root < num_vertices:
        raise IndexError(f"root {root} is not a vertex of a graph of {num_vertices}")

    banned: set[tuple[int, int]] = set()
    for a, b in banned_edges:
        banned.add((a, b))
        banned.add((b, a))

    parents = [-1] * num_vertices
    parents[root] = root
    queue = deque([root])
    counter = 0
    while queue:
        current = queue.popleft()
        for neighbor in graph[current]:
            if (current, neighbor) in banned:
                continue
            if parents[neighbor] == -1:
                parents[neighbor] = current
                queue.append(neighbor)
                counter += 1
    return counter, parents


def maximum_spanning_tree(
    view_graph: ViewGraph,
    images: dict[int, Image],
    weight_type: WeightType = WeightType.INLIER_NUM,
) -> tuple[int, dict[int, int]]:
    """Maximum spanning tree of the registered images.

    Returns the root image id and a mapping from image id to its parent
    image id; the root is its own parent. Images not connected to the root
    are left out of the mapping.
    """
    registered = [image_id for image_id, image in images.items() if image.is_registered]
    if not registered:
        raise ValueError("no registered images to build a spanning tree from")
    index = {image_id: idx for idx, image_id in enumerate(registered)}

    edges: list[tuple[float, int, int]] = []
    for pair in view_graph.image_pairs.values():
        if not pair.is_valid:
            continue
        if not (images[pair.image_id1].is_registered and images[pair.image_id2].is_registered):
            continue
        if weight_type is WeightType.INLIER_RATIO:
            weight = float(pair.weight)
        else:
            weight = float(len(pair.inliers))
        edges.append((weight, index[pair.image_id1], index[pair.image_id2]))

    # Kruskal on descending weights yields a maximum spanning tree.
    edges.sort(key=lambda edge: -edge[0])
    forest: UnionFind[int] = UnionFind()
    adjacency: list[list[int]] = [[] for _ in registered]
    for _, idx1, idx2 in edges:
        if forest.find(idx1) != forest.find(idx2):
            forest.union(idx1, idx2)
            adjacency[idx1].append(idx2)
            adjacency[idx2].append(idx1)

    _, parents_idx = bfs(adjacency, 0)
    parents = {
        registered[idx]: registered[parent]
        for idx, parent in enumerate(parents_idx)
        if parent != -1
    }
    return registered[0], parents