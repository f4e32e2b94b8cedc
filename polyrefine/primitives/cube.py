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

"""Axis-aligned cube centered at the origin.

8 vertices, 12 edges, 6 quadrilateral faces.
"""

import itertools

import torch

from polyrefine.polyhedron import Polyhedron


def load(size: float = 1.0, device: torch.device | str = "cpu") -> Polyhedron:
    """Create a cube with quadrilateral faces.

    Vertex ``4 * i + 2 * j + k`` sits at ``(±1, ±1, ±1) * size / 2``, with
    ``i, j, k`` selecting the sign (0 for -, 1 for +) of ``x, y, z``.

    Parameters
    ----------
    size : float
        Side length of the cube.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Polyhedron
        Polyhedron with 8 points and 6 faces.
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size=}")

    points = torch.tensor(
        list(itertools.product((-1.0, 1.0), repeat=3)),
        device=device,
    )
    points = points * (size / 2)

    # Counterclockwise when viewed from outside
    faces = [
        (0, 1, 3, 2),  # -x
        (4, 6, 7, 5),  # +x
        (0, 4, 5, 1),  # -y
        (2, 3, 7, 6),  # +y
        (0, 2, 6, 4),  # -z
        (1, 5, 7, 3),  # +z
    ]

    return Polyhedron(points=points, faces=faces)
