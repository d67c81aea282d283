"""Exception definitions for artifact-deploy API"""

from ..constants import ErrorCode


class ArtifactDeployError(Exception):
    """Base exception for artifact-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(ArtifactDeployError):
    """Configuration error, never retryable"""

    def __init__(self, message: str, error_code: str = ErrorCode.CONFIG_ERROR):
        super().__init__(message, error_code)


class UnresolvableLocation(ConfigurationError):
    """Artifact location matches none of the supported forms"""

    def __init__(self, location: str):
        message = (
            f"Cannot retrieve artifact {location}! Please make sure the "
            f"artifact exists in the specified location."
        )
        super().__init__(message, ErrorCode.UNRESOLVABLE_LOCATION)
        self.location = location


class RetrievalError(ArtifactDeployError):
    """Artifact retrieval error, retryable by re-running the deployment"""

    def __init__(self, message: str, error_code: str = ErrorCode.RETRIEVAL_FAILED):
        super().__init__(message, error_code)


class ChecksumMismatch(RetrievalError):
    """Downloaded file does not match the expected checksum"""

    def __init__(self, file_path: str, expected: str, actual: str):
        message = f"Checksum mismatch for {file_path}: expected {expected}, got {actual}"
        super().__init__(message, ErrorCode.CHECKSUM_MISMATCH)
        self.file_path = file_path
        self.expected = expected
        self.actual = actual


class SourceNotFoundError(RetrievalError):
    """Local source file is missing"""

    def __init__(self, path: str):
        super().__init__(f"Source file not found: {path}", ErrorCode.SOURCE_NOT_FOUND)
        self.path = path


class ManifestReadError(ArtifactDeployError):
    """Saved manifest is missing or malformed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.MANIFEST_READ_FAILED)


class HookError(ArtifactDeployError):
    """Lifecycle hook failure"""

    def __init__(self, hook: str, message: str):
        super().__init__(f"Hook '{hook}' failed: {message}", ErrorCode.HOOK_FAILED)
        self.hook = hook


class ReleaseStoreError(ArtifactDeployError):
    """Invalid operation on the release layout"""

    def __init__(self, message: str, error_code: str = ErrorCode.RELEASE_STORE_ERROR):
        super().__init__(message, error_code)


class DeployLockedError(ReleaseStoreError):
    """Another deployment holds the lock for this target"""

    def __init__(self, lock_path: str):
        super().__init__(
            f"Deployment target is locked by another run: {lock_path}",
            ErrorCode.DEPLOY_LOCKED
        )
        self.lock_path = lock_path
