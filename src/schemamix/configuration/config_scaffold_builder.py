"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schemamix.config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Mixer configuration template for schemamix.
# Replace every <REQUIRED> placeholder before running mix.
# Relative paths resolve against the base directory (default: this file's directory).

mixers:
  # Each mixer composes its input schemas, in the listed order, into one output schema.
  # Later inputs win when the same field of the same model is declared twice.
  - input:
      - "<REQUIRED>"
      # - "prisma/contexts/**/*.prisma"
    output: "<REQUIRED>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML mixer configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder mixer configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Mixer configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
