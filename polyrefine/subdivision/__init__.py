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

"""Edge subdivision for polyhedra.

Example:
    >>> from polyrefine.primitives import icosahedron
    >>> from polyrefine.subdivision import divide_edges
    >>> mesh = icosahedron.load()
    >>> edge_points = divide_edges(mesh, mesh, segments=3)
    >>> mesh.n_points  # 12 + 30 edges * 2 new points
    72
"""

from polyrefine.subdivision.edges import EdgeSubdivisionMap, divide_edges
