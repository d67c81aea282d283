"""Global constants for artifact-deploy"""

from enum import Enum

APP_NAME = "artifact-deploy"
LOG_FORMAT = "%(message)s"

# Configuration
DEFAULT_CONFIG_FILE = "artifact-deploy.yaml"

# On-disk layout under deploy_to
RELEASES_DIR = "releases"
SHARED_DIR = "shared"
CURRENT_LINK_NAME = "current"
MANIFEST_FILE = "manifest.yaml"
DEPLOY_LOCK_FILE = ".deploy.lock"
TEMP_LINK_SUFFIX = ".tmp"

# Defaults
DEFAULT_KEEP = 2
DEFAULT_DIRECTORY_MODE = 0o755
DEFAULT_EXTENSION = "jar"
DEFAULT_CHECKSUM_ALGORITHM = "sha256"
MANIFEST_HASH_ALGORITHM = "sha1"
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB
DEFAULT_HTTP_TIMEOUT = 60.0  # seconds
DEFAULT_LOCK_POLL_INTERVAL = 0.5  # seconds
DEFAULT_CACHE_DIR = "~/.cache/artifact-deploy"

LATEST_VERSION = "latest"
HTTP_SCHEMES = ("http", "https")
MAVEN_METADATA_FILE = "maven-metadata.xml"

# Archive extensions handled by the materializer, mapped to shutil formats.
# Longest suffixes first so that ".tar.gz" wins over ".gz".
ARCHIVE_FORMATS = [
    (".tar.gz", "gztar"),
    (".tgz", "gztar"),
    (".tar.bz2", "bztar"),
    (".tbz2", "bztar"),
    (".tbz", "bztar"),
    (".tar.xz", "xztar"),
    (".txz", "xztar"),
    (".tar", "tar"),
    (".zip", "zip"),
    (".war", "zip"),
    (".jar", "zip"),
]


class LocationType(Enum):
    """Kinds of artifact location"""
    HTTP = "http"
    REPOSITORY = "repository"
    LOCAL = "local"


# Error codes
class ErrorCode:
    CONFIG_ERROR = "AD001"
    UNRESOLVABLE_LOCATION = "AD002"
    RETRIEVAL_FAILED = "AD003"
    CHECKSUM_MISMATCH = "AD004"
    SOURCE_NOT_FOUND = "AD005"
    MANIFEST_READ_FAILED = "AD006"
    HOOK_FAILED = "AD007"
    RELEASE_STORE_ERROR = "AD008"
    DEPLOY_LOCKED = "AD009"


# Environment variables
ENV_CONFIG_PATH = "ARTIFACT_DEPLOY_CONFIG"
ENV_CACHE_DIR = "ARTIFACT_DEPLOY_CACHE"
ENV_LOG_LEVEL = "ARTIFACT_DEPLOY_LOG_LEVEL"
ENV_HOOK_PREFIX = "ARTIFACT_DEPLOY_"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"
EMOJI_LINK = "🔗"

# Message templates
MSG_DEPLOY_SUCCESS = f"{EMOJI_SUCCESS} Deployed: {{name}}:{{version}}"
MSG_DEPLOY_SKIPPED = f"{EMOJI_SUCCESS} Up to date: {{name}}:{{version}}"
MSG_LINK_UPDATED = f"{EMOJI_LINK} Link updated: {{link}} {EMOJI_ARROW} {{target}}"
