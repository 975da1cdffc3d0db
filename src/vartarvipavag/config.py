"""
Settings for the journey map tool, read from command-line arguments and environment variables.
"""

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class TravelConfig:
    """Configuration for the vartarvipavag CLI."""

    home_timezone: str = "Europe/Stockholm"
    night_stop_hour: int = 2
    obfuscate: bool = False
    seed: Union[str, int] = "42"
    displacement_m: float = 50.0
    bbox_buffer: float = 500.0
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    timeout: int = 10
    log_level: str = "WARNING"
    metrics: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "TravelConfig":
        """Build a config from parsed CLI arguments, falling back to the environment."""
        return cls(
            home_timezone=args.home_timezone
            or os.environ.get("VARTARVIPAVAG_TIMEZONE")
            or cls.home_timezone,
            night_stop_hour=args.night_stop_hour,
            obfuscate=args.obfuscate,
            seed=args.seed,
            displacement_m=args.displacement,
            bbox_buffer=args.bbox_buffer,
            api_url=args.api_url or os.environ.get("VARTARVIPAVAG_API_URL"),
            api_key=args.api_key or os.environ.get("VARTARVIPAVAG_API_KEY"),
            timeout=args.timeout,
            log_level=args.log_level,
            metrics=args.metrics,
        )
