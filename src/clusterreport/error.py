class ConfigurationError(Exception):
    """
    raised when the options given cannot support the requested report

    for example if the features report was requested but no grouping file
    was given. These are raised before any output is written
    """

    pass
