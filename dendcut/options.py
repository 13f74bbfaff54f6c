"""Settings shared by the cutting functions."""

from dataclasses import dataclass

TIE_BREAKS = ("last", "first")


@dataclass(frozen=True)
class CutreeOptions:
    """Explicit configuration for cutting.

    Attributes:
        warn_on_ambiguous_k: Warn when a requested k cannot be produced.
        tie_break: Which candidate height wins when two of them give the same
            cluster count.  "last" keeps the lower height (later candidate
            overwrites), "first" keeps the higher one.
        report_height: Print the height used when cutting by k.
        show_progress: Show a progress bar while building the height table.
    """

    warn_on_ambiguous_k: bool = True
    tie_break: str = "last"
    report_height: bool = False
    show_progress: bool = False

    def __post_init__(self):
        if self.tie_break not in TIE_BREAKS:
            raise ValueError(f"tie_break must be one of {TIE_BREAKS}, got {self.tie_break!r}")


DEFAULT_OPTIONS = CutreeOptions()
