"""Message analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from ..models.base import SentenceMessage
from ..models.schema import MessageSchema
from ..registry import message_code_for


def analyze_file(file_path: Path) -> None:
    """Analyze all SentenceMessage classes in a Python file.

    Args:
        file_path: Path to Python file containing message definitions
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Find all SentenceMessage subclasses
    message_classes = []
    for _name, obj in inspect.getmembers(module, inspect.isclass):
        if obj is not SentenceMessage and issubclass(obj, SentenceMessage):
            # Only include classes defined in this file (not imported)
            if obj.__module__ == "user_module":
                message_classes.append(obj)

    if not message_classes:
        print(f"No SentenceMessage classes found in {file_path}")
        return

    print("|" * 7, "nmeacomm: NMEA 0183 Sentence Codec", "|" * 7)
    print(f"{len(message_classes)} message{'s' if len(message_classes) != 1 else ''} loaded.")
    print()

    for msg_class in message_classes:
        analyze_message_class(msg_class)


def analyze_message_class(msg_class: type[SentenceMessage]) -> None:
    """Print the sentence layout of a single message class.

    Args:
        msg_class: Message class to analyze
    """
    code = message_code_for(msg_class, required=False)

    if code is not None:
        print(f"{'=' * 19} {code}: {msg_class.__name__} {'=' * 19}")
    else:
        print(f"{'=' * 19} {msg_class.__name__} {'=' * 19}")

    schema = MessageSchema.from_model(msg_class)

    header = f"$TT{code or 'MMM'}"
    layout = ",".join([header] + [f.name for f in schema.fields])
    print(f"Layout: {layout}*HH")
    print()

    print(f"{'-' * 27} Fields {'-' * 27}")
    for i, field_schema in enumerate(schema.fields, 1):
        field_desc = f"{i}. {field_schema.name}"
        kind = field_schema.describe()
        dots = "." * max(1, 54 - len(field_desc) - len(kind))
        print(f"        {field_desc}{dots}{kind}")

    print()
