######## errors.py
########


class BmcError(Exception):
    """Base class for application errors."""


# -----------------------------
# History storage
# -----------------------------
class StorageError(BmcError):
    pass


class StorageLoadError(StorageError):
    """Persisted history is unreadable or malformed."""


class StorageWriteError(StorageError):
    """Persisted history could not be written (disk full, permissions...)."""


# -----------------------------
# Remote analysis
# -----------------------------
class AnalysisError(BmcError):
    pass


class AnalysisTransportError(AnalysisError):
    """Network/service failure or timeout while calling the model."""


class AnalysisFormatError(AnalysisError):
    """Response was empty, not JSON, or did not match the result schema."""


class MissingCredentialError(AnalysisError):
    """No API key configured."""


# -----------------------------
# Export
# -----------------------------
class ExportError(BmcError):
    pass


class PdfRendererUnavailableError(ExportError):
    pass
