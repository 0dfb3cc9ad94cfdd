from __future__ import annotations

import numpy as np
import torch

from buyin_graph.commands import DrawCommands
from buyin_graph.raster.compose import rasterize
from buyin_graph.style.theme import ChartThemeTokens


def compile_frame_tensor(frame_rgba: np.ndarray) -> torch.Tensor:
    if frame_rgba.dtype != np.uint8:
        raise ValueError("frame_rgba must be uint8")
    if frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError("frame_rgba must have shape (H, W, 4)")
    return torch.from_numpy(np.ascontiguousarray(frame_rgba))


def compile_commands_tensor(commands: DrawCommands, theme: ChartThemeTokens | None = None) -> torch.Tensor:
    return compile_frame_tensor(rasterize(commands, theme))
