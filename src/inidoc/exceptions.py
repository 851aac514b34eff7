class InidocError(Exception):
    pass


class MissingPathError(InidocError, ValueError):
    pass


class ConversionError(InidocError, ValueError):
    pass
