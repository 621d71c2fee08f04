"""
Exit codes for tasktrack.

The migrate command always exits with ERROR_GENERAL on a handled failure;
the other commands use the more specific codes below.
"""

# Success
SUCCESS = 0

# General error (unspecified, or any handled migration failure)
ERROR_GENERAL = 1

# Invalid arguments or malformed input file
ERROR_INVALID_ARGS = 2

# Storage backend missing, unsupported or not implemented
ERROR_BACKEND = 4

# Resource not found
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_BACKEND: "ERROR_BACKEND",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or input file",
        ERROR_BACKEND: "Storage backend unsupported or not implemented",
        ERROR_NOT_FOUND: "Resource not found",
    }
    return descriptions.get(code, "Unknown error")
