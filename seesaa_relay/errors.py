"""Error taxonomy for the relay. Each error knows the HTTP status it maps to."""


class RelayError(Exception):
    status_code = 500
    reason = "Relay error"

    def __init__(self, detail):
        super().__init__(f"{self.reason}: {detail}")
        self.detail = detail


class InvalidURLError(RelayError):
    status_code = 400
    reason = "Invalid url provided"


class PathDecodeError(RelayError):
    status_code = 400
    reason = "Failed to unescape url path"


class EncodingError(RelayError):
    status_code = 400
    reason = "Failed to convert url path"


class FetchError(RelayError):
    status_code = 502
    reason = "Error fetching remote wiki"


class ParseError(RelayError):
    status_code = 502
    reason = "Failed to parse remote page"
