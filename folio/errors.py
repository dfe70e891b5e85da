"""Exception types raised while building a report."""


class ReportError(Exception):
    """Base class for every failure that aborts a report build."""


class TemplateError(ReportError):
    """The template is malformed or asks for something unsupported."""


class RunawayTemplateError(TemplateError):
    """The section loop exceeded its iteration limit."""


class DataAccessError(ReportError):
    """A row cursor failed to execute its query or fetch a row."""

    def __init__(self, adapter: str, message: str):
        super().__init__(f"{adapter}: {message}")
        self.adapter = adapter
