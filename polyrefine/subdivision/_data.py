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

"""Data interpolation for edge subdivision.

Handles interpolating point_data from the endpoints of each edge to the
equally spaced points inserted along it.
"""

import torch
from tensordict import TensorDict


def interpolate_point_data_along_edges(
    source_data: TensorDict,
    target_data: TensorDict,
    edges: torch.Tensor,
    segments: int,
) -> dict[str, torch.Tensor]:
    """Interpolate point_data to the interior points of each edge.

    For every field of ``target_data``, produces one row per new point, in
    edge order and then from the first endpoint towards the second. Fields
    that also exist in ``source_data``, with a floating-point or complex dtype
    on both sides, are linearly interpolated between the endpoint values,
    using the same arithmetic as the point positions:
    ``v0 + i * ((v1 - v0) / segments)``.

    Parameters
    ----------
    source_data : TensorDict
        Point data of the polyhedron the edges belong to.
    target_data : TensorDict
        Point data of the polyhedron receiving the new points. Its fields
        determine which fields are produced, and their dtypes.
    edges : torch.Tensor
        Edge connectivity into ``source_data``, shape (n_edges, 2).
    segments : int
        Number of segments per edge; ``segments - 1`` rows per edge.

    Returns
    -------
    dict[str, torch.Tensor]
        Field name to values of shape (n_edges * (segments - 1), ...).
        Fields that cannot be interpolated are left out (to be zero-filled
        on append).

    Raises
    ------
    ValueError
        If a shared field has different trailing shapes in source and target.

    Examples
    --------
        >>> import torch
        >>> from tensordict import TensorDict
        >>> data = TensorDict({"temperature": torch.tensor([100., 300.])}, batch_size=[2])
        >>> edges = torch.tensor([[0, 1]])
        >>> rows = interpolate_point_data_along_edges(data, data, edges, 4)
        >>> # rows["temperature"] = [150, 200, 250]
    """
    n_new = len(edges) * (segments - 1)
    device = target_data.device
    edges = edges.to(source_data.device)
    steps = torch.arange(1, segments, device=source_data.device)

    interpolated = {}
    for key, target_tensor in target_data.items():
        if key not in source_data.keys():
            continue
        tensor = source_data[key]
        # Integer/bool metadata (like IDs) cannot be meaningfully interpolated
        if not all(
            t.dtype.is_floating_point or t.dtype.is_complex
            for t in (tensor, target_tensor)
        ):
            continue
        trailing_shape = tuple(tensor.shape[1:])
        if trailing_shape != tuple(target_tensor.shape[1:]):
            raise ValueError(
                f"point_data field {key!r} has trailing shape {trailing_shape} in "
                f"the source but {tuple(target_tensor.shape[1:])} in the target"
            )

        ### Endpoint values, shape (n_edges, 2, *data_shape)
        ends = tensor[edges]
        v0, v1 = ends[:, 0], ends[:, 1]
        step = (v1 - v0) / segments
        # Broadcast steps over (n_edges, segments - 1, *data_shape)
        factors = steps.reshape(1, segments - 1, *([1] * len(trailing_shape)))
        factors = factors.to(step.dtype)
        values = v0.unsqueeze(1) + factors * step.unsqueeze(1)

        interpolated[key] = values.reshape(n_new, *trailing_shape).to(
            dtype=target_tensor.dtype, device=device
        )

    return interpolated
