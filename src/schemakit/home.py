"""Project root resolution.

The project root is the directory that holds the data files and schemas
schemakit works on (the website repository checkout).
"""

import os
from pathlib import Path

# Environment variable for a custom project root
PROJECT_ROOT_ENV_VAR = "SCHEMAKIT_ROOT"


def get_project_root() -> Path:
    """Get the project root directory.

    Resolution order:
    1. SCHEMAKIT_ROOT environment variable (if set)
    2. Default: the current working directory

    Returns:
        Path to the project root.
    """
    env_value = os.environ.get(PROJECT_ROOT_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return Path.cwd()
