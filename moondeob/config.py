"""Configuration management for moondeob."""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load .env from multiple locations
# 1. Current working directory
load_dotenv()
# 2. Project directory (where this package is installed)
_package_dir = Path(__file__).parent
load_dotenv(_package_dir.parent / ".env")
# 3. Home directory config
load_dotenv(Path.home() / ".config" / "moondeob" / ".env")


class Config(BaseSettings):
    """Configuration for moondeob."""

    # Engine Settings
    report_warnings: bool = Field(
        default=False,
        description="Report escapes left undecoded in the result warnings",
    )
    simplify_to_fixed_point: bool = Field(
        default=False,
        description="Repeat expression simplification until the buffer stops changing",
    )
    max_simplify_passes: int = Field(
        default=10,
        ge=1,
        description="Upper bound on simplification passes in fixed-point mode",
    )

    # Output Settings
    output_dir: Optional[Path] = Field(default=None, description="Output directory for deobfuscated files")
    output_suffix: str = Field(default=".deobfuscated.lua", description="Suffix for deobfuscated output files")
    file_glob: str = Field(default="*.lua", description="Glob used to collect files from a directory")
    write_report: bool = Field(default=False, description="Write a JSON statistics report next to each output")

    model_config = {
        "env_prefix": "MOONDEOB_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("output_suffix")
    @classmethod
    def validate_output_suffix(cls, v: str) -> str:
        """Output suffix must look like a file extension."""
        if not v.startswith("."):
            raise ValueError(f"output_suffix must start with '.', got {v!r}")
        return v
