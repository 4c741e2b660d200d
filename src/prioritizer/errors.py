class PlannerError(Exception):
    """Base class for every fatal error raised by the prioritizer pipeline."""


class ConfigurationError(PlannerError):
    """A required setting is missing or a task database could not be resolved."""


class SchemaMismatchError(PlannerError):
    """A record property is present but does not have the expected shape."""


class UnsupportedBlockError(PlannerError):
    """A content block type the flattener does not know how to render."""


class DecodeError(PlannerError):
    """The completion reply could not be turned into task estimates."""


class NoOpenTasksError(PlannerError):
    """The open-task query returned nothing to prioritize."""
