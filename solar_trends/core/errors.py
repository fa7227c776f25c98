"""Exception taxonomy for source adapters and the analysis orchestrator."""


class AnalyzerError(Exception):
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class AdapterFailure(AnalyzerError):
    """A source adapter could not produce live records."""

    def __init__(self, source: str, message: str, code: str = "ADAPTER_FAILURE"):
        self.source = source
        super().__init__(f"{source}: {message}", code=code)


class TransportFailure(AdapterFailure):
    def __init__(self, source: str, message: str):
        super().__init__(source, message, code="TRANSPORT_FAILURE")


class ParseFailure(AdapterFailure):
    def __init__(self, source: str, message: str):
        super().__init__(source, message, code="PARSE_FAILURE")


class UnhandledAnalysisFailure(AnalyzerError):
    """Raised when orchestration itself fails, outside any single adapter."""

    def __init__(self, message: str):
        super().__init__(message, code="ANALYSIS_FAILURE")
