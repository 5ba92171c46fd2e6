class AddressFormatError(ValueError):
    """Raised when an address string does not contain both host and port."""
    pass


class MessageFormatError(ValueError):
    pass


class UnsupportedCommandError(ValueError):
    pass
