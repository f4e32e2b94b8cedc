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

"""Regular tetrahedron centered at the origin.

4 vertices, 6 edges, 4 triangular faces.
"""

import torch

from polyrefine.polyhedron import Polyhedron


def load(radius: float = 1.0, device: torch.device | str = "cpu") -> Polyhedron:
    """Create a regular tetrahedron inscribed in a sphere.

    Parameters
    ----------
    radius : float
        Circumradius (distance from the center to each vertex).
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Polyhedron
        Polyhedron with 4 points and 4 faces.
    """
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius=}")

    points = torch.tensor(
        [
            [1.0, 1.0, 1.0],
            [1.0, -1.0, -1.0],
            [-1.0, 1.0, -1.0],
            [-1.0, -1.0, 1.0],
        ],
        device=device,
    )
    points = points / 3.0**0.5 * radius
    faces = [(0, 1, 2), (0, 3, 1), (0, 2, 3), (1, 3, 2)]

    return Polyhedron(points=points, faces=faces)
