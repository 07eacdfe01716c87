"""
import_engine.errors - Exceptions raised by the three pipeline stages.

Nothing in the pipeline catches these; they propagate to the entry
point, which reports them and signals failure.
"""


class PipelineError(Exception):
    """Base class for every import failure."""
    pass


class IngestError(PipelineError):
    """The CSV file is missing, unreadable, or cannot be decoded."""
    pass


class TransformError(PipelineError):
    """A row cannot be shaped into a product family."""
    pass


class PersistError(PipelineError):
    """The catalog rejected a create call."""
    pass
