"""Pipeline configuration — analysis grid geometry."""

from __future__ import annotations

from dataclasses import dataclass

from lithoscope.engine.errors import ConfigurationError


@dataclass(frozen=True)
class PipelineConfig:
    """Controls the size of the sampled grid and the coarse edge-energy cells."""

    # Side of the square analysis grid (pixels)
    sample_size: int = 128

    # Side of one edge-energy cell: 128 / 8 = 16×16 cells
    cell_size: int = 8

    @property
    def grid_cells(self) -> int:
        return self.sample_size // self.cell_size

    def validate(self) -> None:
        # Laplacian needs an interior, so at least 3×3
        if self.sample_size < 3:
            raise ConfigurationError(f"sample_size must be >= 3, got {self.sample_size}")
        if self.cell_size < 1 or self.sample_size % self.cell_size:
            raise ConfigurationError(
                f"cell_size {self.cell_size} must evenly divide sample_size {self.sample_size}"
            )
