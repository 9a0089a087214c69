"""Date/time transform.

Reads a Unix timestamp (seconds or milliseconds) or an ISO-8601 date and
shows the same instant in several notations. Empty input shows the
current time.
"""

import re
from datetime import datetime, timezone
from email.utils import format_datetime

from ptools.options import OptionState, RadioChoice, RadioOption
from ptools.transforms.schemas import TransformDefinition

_NUMBER = re.compile(r"^[+-]?\d+(\.\d+)?$")
# Timestamps above this are taken to be in milliseconds (year 5138 in seconds)
_MILLISECONDS_THRESHOLD = 1e11


def parse_instant(text: str) -> datetime:
    text = text.strip()
    if not text:
        return datetime.now(timezone.utc)
    if _NUMBER.match(text):
        number = float(text)
        if abs(number) >= _MILLISECONDS_THRESHOLD:
            number /= 1000
        return datetime.fromtimestamp(number, tz=timezone.utc)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def describe_instant(text: str, options: OptionState) -> str:
    instant = parse_instant(text)
    if options.value("tz", "utc") == "local":
        instant = instant.astimezone()
    else:
        instant = instant.astimezone(timezone.utc)

    epoch = instant.timestamp()
    lines = [
        f"iso: {instant.isoformat()}",
        f"epoch: {int(epoch)}",
        f"epoch_ms: {int(round(epoch * 1000))}",
        f"rfc2822: {format_datetime(instant)}",
    ]
    return "\n".join(lines)


DatetimeTransform = TransformDefinition(
    name="datetime",
    description="Show a timestamp or ISO-8601 date in several notations",
    option_schema=[
        RadioOption(
            key="tz",
            default="utc",
            choices=[
                RadioChoice(value="utc", label="UTC"),
                RadioChoice(value="local"),
            ],
        ),
    ],
    invoke=describe_instant,
)
