"""Default folders and output path helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

# Bundled UI configuration documents
BUILTIN_CONFIG_DIR = Path(__file__).parent / "data"


class DefaultFolder:
    """Well known folders used by the CLI."""

    configuration = BUILTIN_CONFIG_DIR
    user_config = Path("config")
    output = "api"


def normalize_output_dir(output: Optional[str]) -> Optional[str]:
    """Return the output folder in ``./relative`` form, None when not given."""

    if not output:
        return None
    if Path(output).is_absolute() or output.startswith("./"):
        return output
    return f"./{output}"


__all__ = ["BUILTIN_CONFIG_DIR", "DefaultFolder", "normalize_output_dir"]
