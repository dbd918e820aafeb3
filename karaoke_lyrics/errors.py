class DecodeError(ValueError):
    pass


class InvalidBase64(DecodeError):
    pass


class InflateFailed(DecodeError):
    pass
