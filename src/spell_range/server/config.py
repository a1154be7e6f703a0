"""Server configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from spell_range.core.config import RangeConfig


@dataclass
class ServerConfig:
    """Configuration for the spell-range server."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8421

    # Mode: "rest" (REST + tick worker), "mcp"
    mode: str = "rest"

    # Host state
    snapshot_path: Path | None = None
    direct_queries: bool = True  # used when no snapshot file is given

    # Resolution
    range: RangeConfig = field(default_factory=RangeConfig)
    tick_worker: bool = True

    # CORS
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self) -> None:
        if self.mode not in ("rest", "mcp"):
            raise ValueError(f"Unknown server mode: {self.mode}")
