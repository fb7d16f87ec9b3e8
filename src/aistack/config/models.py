"""Pydantic models for aistack configuration."""

from pydantic import BaseModel, Field


class StackSettings(BaseModel):
    """Settings for the AI stack and the local Supabase stack.

    Every field has a default, so an absent config file yields a working
    setup for the standard starter-kit layout.
    """

    # Directory holding docker-compose.yml and .env; empty = current dir
    project_dir: str = ""
    required_files: list[str] = Field(
        default_factory=lambda: [".env", "docker-compose.yml"]
    )

    # External tools
    compose_command: list[str] = Field(default_factory=lambda: ["docker", "compose"])
    supabase_command: list[str] = Field(default_factory=lambda: ["npx", "supabase"])

    # Container naming
    supabase_prefix: str = "supabase_"
    gpu_worker_marker: str = "ollama-gpu"
    amd_marker: str = "amd"

    # Compose profile used for the tunnel feature
    tunnel_profile: str = "cloudflare"

    # Health checks and logs
    health_timeout: float = Field(default=3.0, gt=0)
    default_tail: int = Field(default=50, ge=0)
