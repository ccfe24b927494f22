"""Output renderers for command results.

Provides the OutputWriter abstraction with console and JSON implementations,
and a factory to instantiate writers based on configuration.
"""

from __future__ import annotations

from SolrClient.config import AppConfig
from SolrClient.renderers.base import MultiOutputWriter, OutputWriter
from SolrClient.renderers.console import ConsoleOutputWriter, render_text
from SolrClient.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Raises:
        ValueError: If no writer is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_text",
    "create_output_writer",
]
