from dataclasses import dataclass


@dataclass
class CtoKConfig:
    """Configuration for the CtoK CLI."""

    min_coordinates: int = 4
    scale_factor: float = 10.0
    km_per_nm: float = 1.852
    km_per_sm: float = 1.609347
    bearing_tolerance: float = 1e-6
    line_width: float = 3.0
    include_points: bool = True
    write_tsp: bool = False
    units: str = "nm"
    log_level: str = "WARNING"
    metrics: bool = False
