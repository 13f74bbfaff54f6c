"""Exceptions and warning categories raised while cutting dendrograms.

Only a missing cut height or cluster count is fatal.  Everything else
degrades gracefully and is reported through :mod:`warnings`, so callers can filter
the categories below.
"""


class MissingArgumentError(TypeError):
    """Neither a cluster count nor a cut height was given."""


class CutreeWarning(UserWarning):
    """Base category for recoverable cutting problems."""


class ConflictingArgumentsWarning(CutreeWarning):
    """Both k and h were given; h is used."""


class UnreachableClusterCountWarning(CutreeWarning):
    """No cut height produces the requested number of clusters."""


class DegenerateOrderingWarning(CutreeWarning):
    """Leaf indices are not a permutation; ranks were used instead."""


class TruncatedInputWarning(CutreeWarning):
    """A sequence was given where a scalar was expected; its first element was used."""
