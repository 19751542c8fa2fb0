"""Error taxonomy for the decryption pipeline."""


class PipelineError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(PipelineError):
    """Missing or invalid setup. Aborts the invocation before any object is touched."""


class StorageError(PipelineError):
    """S3 listing, download or upload failure."""


class DecryptionError(PipelineError):
    """Bad key, bad passphrase or malformed ciphertext."""


class UnexpectedError(PipelineError):
    """Anything outside the taxonomy that escaped the per-object loop."""


def as_pipeline_error(error: Exception) -> PipelineError:
    """Return ``error`` if it is already in the taxonomy, else wrap it in ``UnexpectedError``."""
    if isinstance(error, PipelineError):
        return error
    wrapped = UnexpectedError(str(error))
    wrapped.__cause__ = error
    return wrapped
