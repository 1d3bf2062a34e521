"""3D tracks and their observations."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

# (image id, feature index)
Observation = tuple[int, int]


@dataclass
class Track:
    """A 3D point together with the image features that observe it."""

    track_id: int = 0
    xyz: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.uint8))
    is_initialized: bool = False
    observations: list[Observation] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.xyz = np.asarray(self.xyz, dtype=float).reshape(3)
        self.color = np.asarray(self.color, dtype=np.uint8).reshape(3)
        self.observations = [(int(i), int(f)) for i, f in self.observations]