"""Model analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from pydantic import BaseModel

from ..codec.typed import CodecRegistry
from ..options import CodecOptions
from ..schema import CloakSchema


def analyze_file(file_path: Path, options: CodecOptions) -> None:
    """Analyze all pydantic models in a Python file and list their cloaked fields.

    Args:
        file_path: Path to Python file containing model definitions
        options: Default codec options used for the sample encodings
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Only include classes defined in this file (not imported)
    model_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if issubclass(obj, BaseModel) and obj.__module__ == "user_module"
    ]

    if not model_classes:
        print(f"No pydantic models found in {file_path}")
        return

    print("|" * 7, "cloakid: Reversible Identifier Obfuscation", "|" * 7)
    print(f"{len(model_classes)} model{'s' if len(model_classes) != 1 else ''} loaded.")
    print()

    registry = CodecRegistry(options)
    for model_class in model_classes:
        analyze_model_class(model_class, registry)


def analyze_model_class(model_class: type[BaseModel], registry: CodecRegistry) -> None:
    """Print the cloaked fields of a single model class with a sample encoding.

    Args:
        model_class: Model class to analyze
        registry: Codec registry resolving per-field option overrides
    """
    schema = CloakSchema.from_model(model_class)

    print(f"{'=' * 19} {model_class.__name__} {'=' * 19}")
    if not schema.fields:
        print("        (no cloaked fields)")
        print()
        return

    for i, field in enumerate(schema.fields, 1):
        options = field.codec_options(registry.default_options) or registry.default_options
        codec = registry.codec_for(options)
        sample = codec.encode(1, field.kind)

        field_desc = f"{i}. {field.name}"
        kind_desc = str(field.kind_spec)
        dots = "." * max(1, 40 - len(field_desc) - len(kind_desc))
        alphabet = "custom" if options.alphabet is not None else "default"
        print(
            f"        {field_desc}{dots}{kind_desc} "
            f"(min_length={options.min_length}, alphabet={alphabet}, 1 -> {sample!r})"
        )

    print()
