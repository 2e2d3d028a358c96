class PhotoStatLrError(Exception):
    """ Generic base exception for all photostatlr errors """


class ConfigError(PhotoStatLrError):
    """ Any errors raised from reading or validating an export configuration """


class FormatError(PhotoStatLrError):
    """ Failure to build a usable destination path for a photo """


class WriteAccessError(PhotoStatLrError):
    """ A catalog write transaction could not be completed """


class WriteAccessTimeout(WriteAccessError):
    """ Write access to the catalog was not granted within the timeout """
