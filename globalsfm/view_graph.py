"""Graph of images connected by image pairs."""

from __future__ import annotations

from collections import deque

from globalsfm.image import Image
from globalsfm.image_pair import ImagePair


class ViewGraph:
    """Images as vertices and valid image pairs as edges."""

    def __init__(self) -> None:
        self.image_pairs: dict[int, ImagePair] = {}
        self.num_images = 0
        self.num_pairs = 0
        self._adjacency_list: dict[int, set[int]] = {}
        self._connected_components: list[set[int]] = []

    @property
    def adjacency_list(self) -> dict[int, set[int]]:
        """Neighbours of each image, as of the last adjacency update."""
        return self._adjacency_list

    def remove_invalid_pair(self, pair_id: int) -> None:
        """Mark a pair invalid; raises KeyError for an unknown pair."""
        self.image_pairs[pair_id].is_valid = False

    def establish_adjacency_list(self) -> None:
        """Rebuild the adjacency list from the valid pairs."""
        adjacency: dict[int, set[int]] = {}
        for pair in self.image_pairs.values():
            if pair.is_valid:
                adjacency.setdefault(pair.image_id1, set()).add(pair.image_id2)
                adjacency.setdefault(pair.image_id2, set()).add(pair.image_id1)
        self._adjacency_list = adjacency

    def keep_largest_connected_components(self, images: dict[int, Image]) -> int:
        """Register only the images of the largest component.

        Pairs leaving that component become invalid. Returns the number of
        images in the largest component.
        """
        self.establish_adjacency_list()
        self._find_connected_components()

        largest: set[int] = set()
        for component in self._connected_components:
            if len(component) > len(largest):
                largest = component

        for image in images.values():
            image.is_registered = False
        for image_id in largest:
            if image_id in images:
                images[image_id].is_registered = True

        def registered(image_id: int) -> bool:
            image = images.get(image_id)
            return image is not None and image.is_registered

        self.num_pairs = 0
        for pair in self.image_pairs.values():
            if not registered(pair.image_id1) or not registered(pair.image_id2):
                pair.is_valid = False
            if pair.is_valid:
                self.num_pairs += 1

        self.num_images = len(largest)
        return len(largest)

    def mark_connected_components(
        self, images: dict[int, Image], min_num_img: int = -1
    ) -> int:
        """Give each image the cluster id of its component, largest first.

        Components smaller than ``min_num_img`` get no cluster (-1).
        Returns the number of clusters assigned.
        """
        self.establish_adjacency_list()
        self._find_connected_components()

        ranked = sorted(
            ((len(component), index) for index, component in
             enumerate(self._connected_components)),
            reverse=True,
        )

        for image in images.values():
            image.cluster_id = -1

        num_clusters = 0
        for size, index in ranked:
            if size < min_num_img:
                break
            for image_id in self._connected_components[index]:
                if image_id in images:
                    images[image_id].cluster_id = num_clusters
            num_clusters += 1
        return num_clusters

    def _find_connected_components(self) -> int:
        self._connected_components = []
        visited: set[int] = set()
        for image_id in self._adjacency_list:
            if image_id not in visited:
                self._connected_components.append(self._bfs(image_id, visited))
        return len(self._connected_components)

    def _bfs(self, root: int, visited: set[int]) -> set[int]:
        component = {root}
        visited.add(root)
        queue = deque([root])
        while queue:
            current = queue.popleft()
            for neighbor in self._adjacency_list.get(current, ()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    component.add(neighbor)
                    queue.append(neighbor)
        return component