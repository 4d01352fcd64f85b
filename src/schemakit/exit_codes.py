"""Exit codes for schemakit CLI commands.

Validation failures and fatal configuration errors share the same code so
CI pipelines only need to check for non-zero.
"""

# Success
SUCCESS = 0

# Errors
GENERAL_ERROR = 1
VALIDATION_FAILED = 1
INVALID_ARGS = 2
