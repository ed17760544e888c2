class MissingTtlError(ValueError):
    """
    raised when an element is added without an explicit ttl
    to a set that was constructed without a default ttl
    """
    pass
