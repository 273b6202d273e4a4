"""InfluxDB line protocol encoding for MetricPoints."""

from restic_influx.models import MetricPoint


def _escape_measurement(name: str) -> str:
    return name.replace(",", r"\,").replace(" ", r"\ ")


def _escape_key(key: str) -> str:
    return key.replace(",", r"\,").replace("=", r"\=").replace(" ", r"\ ")


def _format_value(value) -> str:
    """Render a field value with the type marker InfluxDB expects."""
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return f"{value}i"
    if isinstance(value, float):
        return repr(value)
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def encode_point(point: MetricPoint) -> str:
    """Encode a point as one line: ``measurement k=v,... timestamp``.

    Raises ValueError for a point without fields, which InfluxDB rejects.
    """
    if not point.fields:
        raise ValueError(f"point {point.measurement!r} has no fields")
    fields = ",".join(
        f"{_escape_key(key)}={_format_value(value)}" for key, value in point.fields.items()
    )
    return f"{_escape_measurement(point.measurement)} {fields} {point.timestamp}"
