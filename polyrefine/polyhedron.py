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

import warnings
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

import torch
from tensordict import TensorDict

from polyrefine.utilities._edges import count_duplicate_edges, extract_face_edges
from polyrefine.utilities.polyhedron_repr import format_polyhedron_repr


@dataclass(frozen=True, eq=False)
class Edge:
    """A single edge of a polyhedron, with its endpoints resolved.

    Attributes
    ----------
    ends : tuple[int, int]
        Endpoint vertex indices, in the order the edge is stored.
    end_locations : torch.Tensor
        Endpoint positions, shape (2, 3), read from the polyhedron's points
        when the edge was produced.
    """

    ends: tuple[int, int]
    end_locations: torch.Tensor


class Polyhedron:
    r"""A polygonal surface mesh with a growable vertex list.

    A ``Polyhedron`` stores vertex positions in a floating-point tensor of
    shape :math:`(N_p, 3)` and faces as tuples of vertex indices. Unlike a
    simplicial mesh, faces may have any number of sides (at least three).

    The edge set is either passed explicitly or derived from the faces. When
    derived, each unordered edge appears once, ordered by first appearance
    while walking the faces in order, in the orientation it was first seen.
    Edge topology is fixed at construction; endpoint positions are resolved
    every time :attr:`edges` is read.

    Vertices can be appended after construction with
    :meth:`add_vertex_position` / :meth:`add_vertex_positions`. New vertices
    receive consecutive indices starting at the current :attr:`n_points`.
    Appending never changes faces or edges.

    Parameters
    ----------
    points : array-like
        Vertex coordinates with shape :math:`(N_p, 3)`. Integer input is
        promoted to the default floating-point dtype.
    faces : Iterable[Sequence[int]], optional
        Polygonal faces, each with at least 3 vertex indices.
    edges : Iterable[Sequence[int]], optional
        Explicit edge list of index pairs. Overrides edges derived from
        ``faces``.
    point_data : TensorDict or dict[str, torch.Tensor], optional
        Per-vertex data. Dicts are automatically converted to TensorDict.

    Raises
    ------
    ValueError
        If ``points`` is not of shape (N, 3), a face has fewer than 3
        vertices, an edge does not have exactly 2 vertices, or any index is
        negative.

    Examples
    --------
    >>> import torch
    >>> square = Polyhedron(
    ...     points=torch.tensor([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 1.0, 0.0]]),
    ...     faces=[(0, 1, 2, 3)],
    ... )
    >>> square.n_points, square.n_edges, square.n_faces
    (4, 4, 1)
    >>> square.add_vertex_position(torch.tensor([0.5, 0.5, 0.0]))
    4
    """

    def __init__(
        self,
        points: Any,
        faces: Iterable[Sequence[int]] = (),
        edges: Iterable[Sequence[int]] | None = None,
        point_data: TensorDict | Mapping[str, torch.Tensor] | None = None,
    ):
        points = torch.as_tensor(points)
        if not (points.dtype.is_floating_point or points.dtype.is_complex):
            points = points.to(torch.get_default_dtype())
        if points.ndim != 2 or points.shape[-1] != 3:
            raise ValueError(
                f"`points` must have shape (n_points, 3), got {tuple(points.shape)=}"
            )
        self.points = points

        self.faces: tuple[tuple[int, ...], ...] = tuple(
            tuple(int(i) for i in face) for face in faces
        )
        for face in self.faces:
            if len(face) < 3:
                raise ValueError(f"Faces must have at least 3 vertices, got {face=}")

        self._explicit_edges = edges is not None
        if edges is None:
            self._edge_index = extract_face_edges(self.faces, device=points.device)
        else:
            pairs = [tuple(int(i) for i in edge) for edge in edges]
            for pair in pairs:
                if len(pair) != 2:
                    raise ValueError(f"Edges must have exactly 2 vertices, got {pair=}")
            self._edge_index = torch.tensor(
                pairs, dtype=torch.int64, device=points.device
            ).reshape(len(pairs), 2)
            n_duplicates = count_duplicate_edges(self._edge_index)
            if n_duplicates > 0:
                warnings.warn(
                    f"{n_duplicates} edge(s) repeat an earlier edge; later entries "
                    "overwrite earlier ones in edge-keyed lookups.",
                    stacklevel=2,
                )

        for name, indices in (
            ("faces", [i for face in self.faces for i in face]),
            ("edges", self._edge_index.flatten().tolist()),
        ):
            if any(i < 0 for i in indices):
                raise ValueError(f"Vertex indices in `{name}` must be non-negative")

        if point_data is None:
            point_data = {}
        if isinstance(point_data, TensorDict):
            if tuple(point_data.batch_size) != (self.n_points,):
                raise ValueError(
                    f"`point_data` must have batch_size ({self.n_points},), "
                    f"got {tuple(point_data.batch_size)=}"
                )
            self.point_data = point_data.to(points.device)
        else:
            self.point_data = TensorDict(
                dict(point_data),
                batch_size=torch.Size([self.n_points]),
                device=points.device,
            )

    @property
    def n_points(self) -> int:
        return self.points.shape[0]

    @property
    def n_faces(self) -> int:
        return len(self.faces)

    @property
    def n_edges(self) -> int:
        return self._edge_index.shape[0]

    @property
    def device(self) -> torch.device:
        return self.points.device

    @property
    def dtype(self) -> torch.dtype:
        return self.points.dtype

    @property
    def edge_index(self) -> torch.Tensor:
        """Edge connectivity, shape (n_edges, 2), dtype int64."""
        return self._edge_index

    @property
    def edges(self) -> list[Edge]:
        """The edges of this polyhedron, with endpoint positions resolved now.

        Raises
        ------
        IndexError
            If an edge references a vertex index >= ``n_points``.
        """
        if self.n_edges == 0:
            return []
        # (n_edges, 2, 3)
        end_locations = self.points[self._edge_index]
        return [
            Edge(ends=(a, b), end_locations=locations)
            for (a, b), locations in zip(self._edge_index.tolist(), end_locations)
        ]

    def add_vertex_position(
        self,
        position: Any,
        data: Mapping[str, Any] | None = None,
    ) -> int:
        """Append one vertex and return its index.

        Parameters
        ----------
        position : array-like
            Vertex coordinates, shape (3,).
        data : Mapping[str, Any], optional
            Values of ``point_data`` fields for the new vertex. Fields that
            are not given are zero-filled.

        Returns
        -------
        int
            Index of the new vertex (the value of ``n_points`` before the
            call).
        """
        rows = None
        if data is not None:
            rows = {key: torch.as_tensor(value).unsqueeze(0) for key, value in data.items()}
        return self.add_vertex_positions(
            torch.as_tensor(position).reshape(1, -1), data=rows
        )[0]

    def add_vertex_positions(
        self,
        positions: Any,
        data: Mapping[str, Any] | None = None,
    ) -> list[int]:
        """Append a block of vertices, in order, and return their indices.

        Parameters
        ----------
        positions : array-like
            Vertex coordinates, shape (n_new, 3). Converted to this
            polyhedron's dtype and device.
        data : Mapping[str, Any], optional
            Values of ``point_data`` fields for the new vertices, each with
            leading dimension ``n_new``. Fields that are not given are
            zero-filled.

        Returns
        -------
        list[int]
            Consecutive indices ``n_points, ..., n_points + n_new - 1``.

        Raises
        ------
        ValueError
            If ``positions`` is not of shape (n_new, 3).
        KeyError
            If ``data`` names a field absent from ``point_data``.
        """
        positions = torch.as_tensor(positions, dtype=self.dtype, device=self.device)
        if positions.numel() == 0:
            positions = positions.reshape(0, 3)
        if positions.ndim != 2 or positions.shape[-1] != 3:
            raise ValueError(
                f"`positions` must have shape (n_new, 3), got {tuple(positions.shape)=}"
            )

        start = self.n_points
        n_new = positions.shape[0]
        new_rows = self._point_data_rows(n_new, data)

        self.points = torch.cat([self.points, positions], dim=0)
        if len(self.point_data.keys()) > 0:
            self.point_data = TensorDict.cat([self.point_data, new_rows], dim=0)
        else:
            self.point_data = TensorDict(
                {},
                batch_size=torch.Size([self.n_points]),
                device=self.device,
            )
        return list(range(start, start + n_new))

    def _point_data_rows(
        self, n_new: int, data: Mapping[str, Any] | None
    ) -> TensorDict:
        """Build ``n_new`` rows of point data, zero-filling fields not given."""
        data = dict(data) if data is not None else {}
        unknown = set(data) - set(self.point_data.keys())
        if unknown:
            raise KeyError(
                f"Unknown point_data fields {sorted(unknown)}; "
                f"available fields are {sorted(self.point_data.keys())}"
            )

        rows = {}
        for key, tensor in self.point_data.items():
            trailing_shape = tuple(tensor.shape[1:])
            if key in data:
                rows[key] = torch.as_tensor(
                    data[key], dtype=tensor.dtype, device=tensor.device
                ).reshape(n_new, *trailing_shape)
            else:
                rows[key] = torch.zeros(
                    (n_new, *trailing_shape), dtype=tensor.dtype, device=tensor.device
                )
        return TensorDict(rows, batch_size=torch.Size([n_new]), device=self.device)

    def clone(self) -> "Polyhedron":
        """Return an independent copy, e.g. to restore after a failed update."""
        copy = Polyhedron(
            points=self.points.clone(),
            faces=self.faces,
            point_data=self.point_data.clone(),
        )
        copy._explicit_edges = self._explicit_edges
        copy._edge_index = self._edge_index.clone()
        return copy

    def __repr__(self) -> str:
        return format_polyhedron_repr(self)
