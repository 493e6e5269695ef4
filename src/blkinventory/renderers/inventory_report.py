"""block-devices.md renderer: summary, system/non-system tables, full tree."""

from pathlib import Path

from jinja2 import Environment

from ..schema import BlockDevices

REPORT_FILENAME = "block-devices.md"

TEMPLATE = """\
# Block Device Inventory

- Top-level devices: {{ devices | length }}
- System devices: {{ system | length }}
- Non-system devices: {{ non_system | length }}
- Mounted devices (all levels): {{ mounted_count }}

{% for title, group in [("System devices", system), ("Non-system devices", non_system)] %}
## {{ title }}

{% if group %}
| Name | Type | Size | RM | RO | Mountpoints |
|------|------|------|----|----|-------------|
{% for d in group %}
| {{ d.name | cell }} | {{ d.device_type | cell }} | {{ d.size_bytes | size }} | {{ "yes" if d.removable else "no" }} | {{ "yes" if d.read_only else "no" }} | {{ (d.active_mountpoints() | join(", ") or "-") | cell }} |
{% endfor %}
{% else %}
None.
{% endif %}

{% endfor %}
## Device tree

```
{% for depth, d in tree %}
{{ "  " * depth }}{{ d.name }} {{ d.maj_min }} {{ d.size_bytes | size }} {{ d.device_type }}{% if d.is_mounted() %} {{ d.active_mountpoints() | join(",") }}{% endif %}

{% endfor %}
```
"""


def _cell(value: str) -> str:
    return str(value).replace("|", "\\|")


def _mounted_count(devices: BlockDevices) -> int:
    return sum(1 for _, d in devices.walk() if d.is_mounted())


def render(
    devices: BlockDevices,
    env: Environment,
    output_dir: Path,
) -> None:
    output_dir = Path(output_dir)
    env.filters.setdefault("cell", _cell)
    template = env.from_string(TEMPLATE)
    text = template.render(
        devices=list(devices),
        system=devices.system(),
        non_system=devices.non_system(),
        mounted_count=_mounted_count(devices),
        tree=list(devices.walk()),
    )
    (output_dir / REPORT_FILENAME).write_text(text)
