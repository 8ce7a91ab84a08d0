class URLSieveError(Exception):
    pass

class URLParseError(URLSieveError):
    """Input line is not a well-formed URL, even with a default scheme."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"parse failure: {reason}: {raw!r}")

class ConfigError(URLSieveError):
    pass

class RulesFileError(ConfigError):
    pass

class ProbeError(URLSieveError):
    pass

class InputStreamError(URLSieveError):
    """Reading the input stream failed. Processing stops."""
    pass
