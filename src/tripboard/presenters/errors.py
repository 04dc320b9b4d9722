"""Presenter contract violations. These indicate bugs, never user errors."""


class PresenterLookupError(LookupError):
    """A request targeted a presenter missing from the board's mapping."""


class PresenterStateError(RuntimeError):
    """A presenter was driven through a transition its state does not allow."""
