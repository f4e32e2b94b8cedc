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

"""Regular icosahedron centered at the origin.

12 vertices, 30 edges, 20 triangular faces. This is the usual base polyhedron
for geodesic spheres: dividing each edge into ``n`` segments and rebuilding
the faces yields a frequency-``n`` geodesic polyhedron.
"""

import torch

from polyrefine.polyhedron import Polyhedron


def load(radius: float = 1.0, device: torch.device | str = "cpu") -> Polyhedron:
    """Create a regular icosahedron inscribed in a sphere.

    Vertices are the cyclic permutations of ``(0, ±1, ±phi)``, with ``phi``
    the golden ratio, scaled onto the sphere of the given radius.

    Parameters
    ----------
    radius : float
        Circumradius (distance from the center to each vertex).
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Polyhedron
        Polyhedron with 12 points and 20 faces.

    Examples
    --------
    >>> mesh = load()
    >>> mesh.n_points, mesh.n_edges, mesh.n_faces
    (12, 30, 20)
    """
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius=}")

    phi = (1.0 + 5.0**0.5) / 2.0
    points = torch.tensor(
        [
            [-1.0, phi, 0.0],
            [1.0, phi, 0.0],
            [-1.0, -phi, 0.0],
            [1.0, -phi, 0.0],
            [0.0, -1.0, phi],
            [0.0, 1.0, phi],
            [0.0, -1.0, -phi],
            [0.0, 1.0, -phi],
            [phi, 0.0, -1.0],
            [phi, 0.0, 1.0],
            [-phi, 0.0, -1.0],
            [-phi, 0.0, 1.0],
        ],
        device=device,
    )
    points = points / torch.norm(points, dim=-1, keepdim=True) * radius

    faces = [
        # 5 faces around vertex 0
        (0, 11, 5),
        (0, 5, 1),
        (0, 1, 7),
        (0, 7, 10),
        (0, 10, 11),
        # 5 adjacent faces
        (1, 5, 9),
        (5, 11, 4),
        (11, 10, 2),
        (10, 7, 6),
        (7, 1, 8),
        # 5 faces around vertex 3
        (3, 9, 4),
        (3, 4, 2),
        (3, 2, 6),
        (3, 6, 8),
        (3, 8, 9),
        # 5 adjacent faces
        (4, 9, 5),
        (2, 4, 11),
        (6, 2, 10),
        (8, 6, 7),
        (9, 8, 1),
    ]

    return Polyhedron(points=points, faces=faces)
