"""
Renderers turn a parsed BlockDevices tree into output files.
Each renderer takes the devices, a jinja2 Environment and the output directory.
"""

from pathlib import Path

from jinja2 import Environment

from ..normalize import format_size
from ..schema import BlockDevices
from .inventory_report import render as render_inventory_report


def make_environment() -> Environment:
    env = Environment(trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
    env.filters["size"] = format_size
    return env


def run_all(devices: BlockDevices, output_dir: Path) -> None:
    """Run every renderer into output_dir (created if missing)."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    env = make_environment()
    render_inventory_report(devices, env, output_dir)
