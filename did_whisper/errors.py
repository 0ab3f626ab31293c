# did_whisper/errors.py


class WhisperError(Exception):
    """Base class for every failure raised by did_whisper."""
    pass


class DocumentNotFound(WhisperError):
    """The resolver reported no identity document for the DID."""
    pass


class KeyNotFound(WhisperError):
    """The document has no authentication entry (or none matching the key id)."""
    pass


class InvalidKeyEncoding(WhisperError):
    """Key material could not be decoded or has the wrong size."""
    pass


class DecryptionKeyUnavailable(WhisperError):
    """The locally resolved document carries no secret key for this DID."""
    pass


class DecryptionFailed(WhisperError):
    """Ciphertext is too short, corrupted, or not sealed for this recipient."""
    pass


class MalformedKeyId(WhisperError):
    """A key id has no recoverable DID prefix."""
    pass


class StorageTransportError(WhisperError):
    """The message store could not be reached or answered with an error."""
    pass


class ResolutionTransportError(WhisperError):
    """The DID resolver could not be reached or answered with an error."""
    pass
