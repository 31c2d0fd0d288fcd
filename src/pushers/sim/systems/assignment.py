from __future__ import annotations

from typing import List, Sequence

from ..types.snapshot import GameColor, MapLayout

RED_BIT = 1 << GameColor.RED


def vertex_color_masks(layout: MapLayout, region_colors: Sequence[GameColor]) -> List[int]:
    masks = [0] * len(layout.vertices)
    for region, color in zip(layout.regions, region_colors):
        bit = 1 << int(color)
        for vertex_index in region.vertices:
            masks[vertex_index] |= bit
    return masks


def is_candidate(mask: int) -> bool:
    """A vertex on a red/non-red boundary."""
    return bool(mask & RED_BIT) and mask != RED_BIT


def candidate_vertices(layout: MapLayout, region_colors: Sequence[GameColor]) -> List[int]:
    return [index for index, mask in enumerate(vertex_color_masks(layout, region_colors)) if is_candidate(mask)]
