"""Bootstrap output sources."""

from .source import (
    JsonFileOutputSource,
    OutputSource,
    TerraformOutputSource,
    output_value,
)

__all__ = [
    "JsonFileOutputSource",
    "OutputSource",
    "TerraformOutputSource",
    "output_value",
]
