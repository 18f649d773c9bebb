"""Release API constants and download defaults."""

# GitHub API URL structure
GITHUB_API_BASE = "https://api.github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"
LATEST_PATH = "latest"
GITHUB_JSON_MEDIA_TYPE = "application/vnd.github+json"

# Shipped tool
DEFAULT_OWNER = "bytaesu"
DEFAULT_REPO = "create-github-app"
DEFAULT_TOOL_NAME = "create-github-app"

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})
DEFAULT_MAX_REDIRECTS = 10

# Seconds
DEFAULT_METADATA_TIMEOUT = 30.0
DEFAULT_DOWNLOAD_TIMEOUT = 300.0

DOWNLOAD_CHUNK_SIZE = 8192
BINARY_MODE = 0o755
PARTIAL_SUFFIX = ".part"

# Exit status for a child killed by signal N is SIGNAL_EXIT_BASE + N
SIGNAL_EXIT_BASE = 128
INTERRUPTED_EXIT_CODE = 130
