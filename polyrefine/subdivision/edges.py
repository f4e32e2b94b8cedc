# SPDX-FileCopyrightText: Copyright (c) 2023 - 2026 NVIDIA CORPORATION & AFFILIATES.
# SPDX-FileCopyrightText: All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Uniform edge subdivision for polyhedra.

Each edge is divided into ``segments`` equal-length pieces by inserting
``segments - 1`` equally spaced points along it. This is the seed step for
higher-order tessellations such as geodesic polyhedra, where faces are later
rebuilt from the points along their edges.
"""

import logging
import operator
from typing import TYPE_CHECKING

import torch

from polyrefine.subdivision._data import interpolate_point_data_along_edges

if TYPE_CHECKING:
    from polyrefine.polyhedron import Polyhedron

logger = logging.getLogger(__name__)

EdgeSubdivisionMap = dict[tuple[int, int], list[int]]


def divide_edges(
    source: "Polyhedron",
    target: "Polyhedron",
    segments: int,
    interpolate_point_data: bool = True,
) -> EdgeSubdivisionMap:
    """Divide every edge of ``source`` into ``segments`` equal segments.

    For each edge ``(a, b)`` of ``source``, in edge order, the points
    ``p0 + i * ((p1 - p0) / segments)`` for ``i = 1, ..., segments - 1`` are
    appended to ``target``. New vertices receive consecutive indices starting
    at ``target.n_points``, edge by edge, and from ``a`` towards ``b`` along
    each edge.

    Parameters
    ----------
    source : Polyhedron
        Polyhedron whose edges are divided. Not modified (unless it is also
        ``target``).
    target : Polyhedron
        Polyhedron receiving the new vertices. May be ``source`` itself; the
        edges are read before anything is appended.
    segments : int
        Number of segments to divide each edge into. ``segments - 1`` new
        vertices are created per edge.
    interpolate_point_data : bool
        If True, floating-point ``point_data`` fields present in both
        polyhedra are linearly interpolated onto the new vertices. Other
        fields of ``target`` are zero-filled.

    Returns
    -------
    EdgeSubdivisionMap
        Maps each directed edge ``(a, b)`` to the indices of the new vertices
        along it, nearest ``a`` first. ``(b, a)`` maps to the same indices in
        reverse. Each list has length ``segments - 1``.

    Raises
    ------
    ValueError
        If ``segments`` is not an integer >= 1.
    IndexError
        If an edge of ``source`` references a vertex that does not exist.

    Examples
    --------
    >>> import torch
    >>> from polyrefine.polyhedron import Polyhedron
    >>> mesh = Polyhedron(
    ...     points=torch.tensor([[0.0, 0.0, 0.0], [4.0, 0.0, 0.0]]),
    ...     edges=[(0, 1)],
    ... )
    >>> divide_edges(mesh, mesh, segments=4)
    {(0, 1): [2, 3, 4], (1, 0): [4, 3, 2]}
    >>> mesh.points[2:].tolist()
    [[1.0, 0.0, 0.0], [2.0, 0.0, 0.0], [3.0, 0.0, 0.0]]

    Notes
    -----
    A failure leaves ``target`` as it was: all inputs are read and all
    points computed before the single append. Callers that need to undo a
    successful call should keep a ``target.clone()``.
    """
    try:
        n_segments = operator.index(segments)
    except TypeError:
        n_segments = None
    if isinstance(segments, bool) or n_segments is None or n_segments < 1:
        raise ValueError(f"segments must be an integer >= 1, got {segments=}")
    segments = n_segments

    ### Read edges up front, so that appending to `target` cannot affect them
    edges = source.edges
    if len(edges) == 0:
        return {}
    ends = [edge.ends for edge in edges]
    n_interior = segments - 1

    ### Compute interior points for all edges at once
    # Shape: (n_edges, 2, 3)
    end_locations = torch.stack([edge.end_locations for edge in edges]).to(
        dtype=target.points.dtype, device=target.points.device
    )
    p0, p1 = end_locations[:, 0], end_locations[:, 1]
    step = (p1 - p0) / segments
    factors = torch.arange(
        1, segments, dtype=step.dtype, device=step.device
    ).reshape(1, n_interior, 1)
    # Shape: (n_edges, segments - 1, 3)
    new_points = p0.unsqueeze(1) + factors * step.unsqueeze(1)

    new_data = None
    if interpolate_point_data:
        new_data = interpolate_point_data_along_edges(
            source_data=source.point_data,
            target_data=target.point_data,
            edges=torch.tensor(ends, dtype=torch.int64),
            segments=segments,
        )

    ### Append in edge order, then low-to-high along each edge
    first_index = target.n_points
    new_indices = target.add_vertex_positions(
        new_points.reshape(-1, 3), data=new_data
    )

    ### Record forward and reverse index lists per directed edge
    subdivision_map: EdgeSubdivisionMap = {}
    for k, (a, b) in enumerate(ends):
        forward = new_indices[k * n_interior : (k + 1) * n_interior]
        subdivision_map[(a, b)] = forward
        subdivision_map[(b, a)] = forward[::-1]

    logger.debug(
        "Divided %d edges into %d segments; appended vertices %d..%d",
        len(ends),
        segments,
        first_index,
        first_index + len(new_indices) - 1,
    )
    return subdivision_map
