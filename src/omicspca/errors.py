"""Exceptions raised by omicspca."""


class InvalidInputError(ValueError):
    """Input data or parameters cannot be used for PCA."""


class ComponentLookupError(LookupError):
    """A requested principal component does not exist in a result."""
