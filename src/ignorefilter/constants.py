"""
Central configuration constants for ignore file processing
"""

# Conventional name of the ignore file next to a build context
IGNORE_FILENAME = ".dockerignore"

UTF8_BOM = b"\xef\xbb\xbf"

# Matching dialects
SYNTAX_DOCKERIGNORE = "dockerignore"
SYNTAX_GITIGNORE = "gitignore"
SUPPORTED_SYNTAXES = (SYNTAX_DOCKERIGNORE, SYNTAX_GITIGNORE)
DEFAULT_SYNTAX = SYNTAX_DOCKERIGNORE

# Environment variables (IGNOREFILTER_LOG_LEVEL takes precedence over LOG_LEVEL)
ENV_SYNTAX = "IGNOREFILTER_SYNTAX"
ENV_WORKERS = "IGNOREFILTER_WORKERS"
ENV_LOG_LEVEL = "IGNOREFILTER_LOG_LEVEL"

DEFAULT_WORKERS = 1
MAX_WORKERS = 64

# Patterns that exclude almost everything
BROAD_PATTERNS = ("*", "**", "**/*")
