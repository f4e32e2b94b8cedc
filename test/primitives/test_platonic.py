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

"""Tests for the platonic solid primitives."""

import pytest
import torch

from polyrefine import primitives

# (module name, n_points, n_edges, n_faces)
PLATONIC_SOLIDS = [
    ("tetrahedron", 4, 6, 4),
    ("cube", 8, 12, 6),
    ("octahedron", 6, 12, 8),
    ("icosahedron", 12, 30, 20),
]


class TestPlatonicSolids:
    """Test all platonic solid primitives."""

    @pytest.mark.parametrize("name,n_points,n_edges,n_faces", PLATONIC_SOLIDS)
    def test_counts(self, name, n_points, n_edges, n_faces):
        """Test vertex, edge, and face counts (and hence Euler's formula)."""
        mesh = getattr(primitives, name).load()

        assert mesh.n_points == n_points
        assert mesh.n_edges == n_edges
        assert mesh.n_faces == n_faces
        assert mesh.n_points - mesh.n_edges + mesh.n_faces == 2

    @pytest.mark.parametrize("name", ["tetrahedron", "octahedron", "icosahedron"])
    def test_vertices_on_sphere(self, name):
        mesh = getattr(primitives, name).load(radius=2.5)

        norms = torch.norm(mesh.points, dim=-1)
        torch.testing.assert_close(norms, torch.full_like(norms, 2.5))

    @pytest.mark.parametrize("name", ["tetrahedron", "octahedron", "icosahedron"])
    def test_equal_edge_lengths(self, name):
        mesh = getattr(primitives, name).load()

        ends = mesh.points[mesh.edge_index]
        lengths = torch.norm(ends[:, 1] - ends[:, 0], dim=-1)
        torch.testing.assert_close(lengths, torch.full_like(lengths, lengths[0].item()))

    def test_cube_size(self):
        mesh = primitives.cube.load(size=3.0)

        torch.testing.assert_close(mesh.points.abs(), torch.full((8, 3), 1.5))

    @pytest.mark.parametrize("name", [solid[0] for solid in PLATONIC_SOLIDS])
    def test_faces_wound_outward(self, name):
        """Test that each face normal points away from the center."""
        mesh = getattr(primitives, name).load()

        for face in mesh.faces:
            p0, p1, p2 = (mesh.points[i] for i in face[:3])
            normal = torch.linalg.cross(p1 - p0, p2 - p0)
            centroid = mesh.points[list(face)].mean(dim=0)
            assert torch.dot(normal, centroid) > 0

    @pytest.mark.parametrize("name", ["tetrahedron", "cube", "octahedron", "icosahedron"])
    def test_rejects_nonpositive_scale(self, name):
        with pytest.raises(ValueError, match="must be positive"):
            getattr(primitives, name).load(0.0)

    def test_device(self, device):
        mesh = primitives.icosahedron.load(device=device)

        assert mesh.points.device.type == device
        assert mesh.edge_index.device.type == device
