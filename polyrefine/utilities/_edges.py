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

"""Edge extraction utilities for polygonal faces.

Edges are returned in a stable order: faces are walked in order, each face
contributes its boundary edges ``(f[i], f[i + 1])`` (wrapping around), and an
edge is kept the first time its unordered pair is seen, in the orientation it
was seen in.
"""

from typing import Iterable, Sequence

import torch


def extract_face_edges(
    faces: Iterable[Sequence[int]],
    device: torch.device | str | None = None,
) -> torch.Tensor:
    """Extract the unique edges of a set of polygonal faces.

    Parameters
    ----------
    faces : Iterable[Sequence[int]]
        Polygonal faces, each a sequence of vertex indices in winding order.
    device : torch.device or str, optional
        Device for the returned tensor.

    Returns
    -------
    torch.Tensor
        Edge connectivity, shape (n_edges, 2), dtype int64.

    Examples
    --------
    >>> extract_face_edges([(0, 1, 2), (0, 2, 3)]).tolist()
    [[0, 1], [1, 2], [2, 0], [2, 3], [3, 0]]
    """
    seen: set[tuple[int, int]] = set()
    edges: list[tuple[int, int]] = []
    for face in faces:
        n = len(face)
        for i in range(n):
            a, b = int(face[i]), int(face[(i + 1) % n])
            key = (a, b) if a < b else (b, a)
            if key in seen:
                continue
            seen.add(key)
            edges.append((a, b))

    if not edges:
        return torch.zeros((0, 2), dtype=torch.int64, device=device)
    return torch.tensor(edges, dtype=torch.int64, device=device)


def count_duplicate_edges(edge_index: torch.Tensor) -> int:
    """Count edges whose unordered pair already appeared earlier in the set.

    Parameters
    ----------
    edge_index : torch.Tensor
        Edge connectivity, shape (n_edges, 2).

    Returns
    -------
    int
        Number of edges that repeat an earlier edge, ignoring orientation.
    """
    if len(edge_index) == 0:
        return 0
    canonical, _ = torch.sort(edge_index, dim=-1)
    n_unique = torch.unique(canonical, dim=0).shape[0]
    return len(edge_index) - n_unique
