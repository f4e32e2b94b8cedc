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

"""Tests for edge extraction from polygonal faces."""

import torch

from polyrefine.utilities._edges import count_duplicate_edges, extract_face_edges


class TestExtractFaceEdges:
    def test_empty(self):
        edges = extract_face_edges([])

        assert edges.shape == (0, 2)
        assert edges.dtype == torch.int64

    def test_single_polygon_wraps_around(self):
        assert extract_face_edges([(4, 5, 6, 7, 8)]).tolist() == [
            [4, 5],
            [5, 6],
            [6, 7],
            [7, 8],
            [8, 4],
        ]

    def test_shared_edge_kept_once_in_first_orientation(self):
        """Test that an edge seen again reversed by a neighbour is not repeated."""
        edges = extract_face_edges([(0, 1, 2), (2, 1, 3)])

        assert edges.tolist() == [[0, 1], [1, 2], [2, 0], [1, 3], [3, 2]]


class TestCountDuplicateEdges:
    def test_no_duplicates(self):
        assert count_duplicate_edges(torch.tensor([[0, 1], [1, 2]])) == 0

    def test_reversed_duplicate(self):
        assert count_duplicate_edges(torch.tensor([[0, 1], [2, 3], [1, 0], [0, 1]])) == 2

    def test_empty(self):
        assert count_duplicate_edges(torch.zeros((0, 2), dtype=torch.int64)) == 0
