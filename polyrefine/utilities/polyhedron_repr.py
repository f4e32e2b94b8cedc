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

"""Utility functions for string-formatting Polyhedron representations."""

from typing import TYPE_CHECKING

import torch
from tensordict import TensorDict

if TYPE_CHECKING:
    from polyrefine.polyhedron import Polyhedron


def format_polyhedron_repr(polyhedron: "Polyhedron") -> str:
    """Format a complete Polyhedron representation.

    Parameters
    ----------
    polyhedron : Polyhedron
        The Polyhedron instance to format.

    Returns
    -------
    str
        Two lines: the class name with counts, then the point data fields.

    Examples
    --------
    >>> from polyrefine.primitives import tetrahedron
    >>> print(tetrahedron.load())
    Polyhedron(n_points=4, n_edges=6, n_faces=4, dtype=torch.float32)
        point_data: {}
    """
    parts = [
        f"n_points={polyhedron.n_points}",
        f"n_edges={polyhedron.n_edges}",
        f"n_faces={polyhedron.n_faces}",
        f"dtype={polyhedron.dtype}",
    ]
    if polyhedron.device.type != "cpu":
        parts.append(f"device={polyhedron.device}")

    first_line = f"{polyhedron.__class__.__name__}({', '.join(parts)})"
    return f"{first_line}\n    point_data: {_format_fields(polyhedron.point_data)}"


def _format_fields(td: TensorDict) -> str:
    """Format each field of a per-point TensorDict by its trailing shape."""
    keys = sorted(td.keys())
    if len(keys) == 0:
        return "{}"

    items = []
    for key in keys:
        value = td[key]
        if isinstance(value, torch.Tensor):
            items.append(f"{key}: {tuple(value.shape[1:])}")
        else:
            items.append(f"{key}: <{type(value).__name__}>")
    return "{" + ", ".join(items) + "}"
