class SkinPackError(Exception):
    """Base for failures shown to the user.

    ``key`` names the message in the i18n table; ``message`` is set when
    the failure already carries localized text.
    """
    key = None

    def __init__(self, message=None):
        super().__init__(message or self.key)
        self.message = message


class EmptyInput(SkinPackError):
    key = 'err_empty'


class InvalidFormat(SkinPackError):
    key = 'err_invalid'


class NotFound(SkinPackError):
    key = 'err_not_found'


class PackGeneration(SkinPackError):
    key = 'err_generate'


class FetchFirst(SkinPackError):
    key = 'err_fetch_first'
