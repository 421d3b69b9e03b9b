#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Editor schema for yu.yaml."""

from __future__ import annotations

import json
from pathlib import Path

from .dispatcher import CONFIG_FILENAME
from .models import YuConfig

# Set per invocation with -V or YU_VERBOSE rather than per project
RUNTIME_ONLY_FIELDS = ("verbose",)


def yaml_config_schema() -> dict:
    """JSON schema describing the keys a project may set in yu.yaml."""
    schema = YuConfig.model_json_schema()
    for field in RUNTIME_ONLY_FIELDS:
        schema["properties"].pop(field, None)

    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["title"] = CONFIG_FILENAME
    schema["description"] = (
        "Project settings for yu. YU_* environment variables override them."
    )
    schema["additionalProperties"] = False
    return schema


def generate_config_schema(project_root: Path) -> Path:
    """Write .vscode/yu.schema.json and return its path."""
    schema_path = project_root / ".vscode" / "yu.schema.json"
    schema_path.parent.mkdir(parents=True, exist_ok=True)
    schema_path.write_text(
        json.dumps(yaml_config_schema(), indent=2) + "\n", encoding="utf-8"
    )
    return schema_path
