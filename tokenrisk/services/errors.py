class AnalysisError(Exception):
    """Invalid analysis request (unsupported network, missing address or symbol).

    ``example`` is a request body the API echoes back to the caller.
    """

    def __init__(self, message: str, example: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.example = example or {}
