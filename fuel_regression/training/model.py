# fuel_regression/training/model.py
from __future__ import annotations

from typing import List, Optional

import torch
import torch.nn as nn

from fuel_regression.visualization.sink import LayerSummary


class FuelEfficiencyModel(nn.Module):
    """
    y = W2 * (W1 * x + b1) + b2

    Two stacked dense layers and NO activation in between.
    The stack collapses to a single affine map; the two-layer
    shape is kept as is.
    """

    def __init__(
        self,
        hidden_units: int = 1,
        use_bias: bool = True,
        generator: Optional[torch.Generator] = None,
    ):
        super().__init__()
        self.hidden = nn.Linear(1, hidden_units, bias=use_bias)
        self.output = nn.Linear(hidden_units, 1, bias=use_bias)
        self.reset_parameters(generator)

    def reset_parameters(self, generator: Optional[torch.Generator] = None) -> None:
        # glorot-uniform kernels, zero biases
        for layer in (self.hidden, self.output):
            nn.init.xavier_uniform_(layer.weight, generator=generator)
            if layer.bias is not None:
                nn.init.zeros_(layer.bias)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.output(self.hidden(x))

    def summary(self) -> List[LayerSummary]:
        layers = []
        for name, layer in (("dense_1", self.hidden), ("dense_2", self.output)):
            layers.append(
                LayerSummary(
                    name=name,
                    kind="Dense",
                    input_shape=(None, layer.in_features),
                    output_shape=(None, layer.out_features),
                    params=sum(p.numel() for p in layer.parameters()),
                )
            )
        return layers


def build_model(cfg=None, *, seed: Optional[int] = None) -> FuelEfficiencyModel:
    """
    Build from a ModelConfig (defaults when None).
    """
    generator = None
    if seed is not None:
        generator = torch.Generator().manual_seed(seed)

    if cfg is None:
        return FuelEfficiencyModel(generator=generator)

    return FuelEfficiencyModel(
        hidden_units=cfg.hidden_units,
        use_bias=cfg.use_bias,
        generator=generator,
    )
