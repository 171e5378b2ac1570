# ==========================================
# RUN CONFIGURATION
# ==========================================

import json
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from amb.errors import AmbConfigError

CONFIG_FILE = "amb.json"


class RunConfig(BaseModel):
    """Defaults for running a search from the command line."""
    model_config = ConfigDict(extra="forbid")

    limit: Optional[int] = Field(default=None, ge=0)
    count_only: bool = False
    context: Dict[str, Any] = Field(default_factory=dict)


def config_paths():
    return [CONFIG_FILE, os.path.expanduser("~/.amb/config.json")]


def load_run_config(path=None) -> RunConfig:
    """Load run configuration; the first existing file wins.

    A missing default file means defaults. A named file that is missing,
    or any malformed file, is an error.
    """
    if path and not os.path.exists(path):
        raise AmbConfigError(path, "file not found")
    paths = [path] if path else config_paths()
    for p in paths:
        if not os.path.exists(p):
            continue
        with open(p, "r") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise AmbConfigError(p, f"not valid JSON ({e.msg} at line {e.lineno})")
        try:
            return RunConfig.model_validate(raw)
        except ValidationError as e:
            raise AmbConfigError(p, str(e))
    return RunConfig()
